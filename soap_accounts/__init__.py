"""SOAP client for the remote bank account service."""

__version__ = "0.1.0"
