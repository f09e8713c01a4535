"""Output sinks for account listings."""

from soap_accounts.sinks.console import ConsoleSink

__all__ = ["ConsoleSink"]
