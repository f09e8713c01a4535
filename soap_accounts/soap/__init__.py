"""SOAP 1.1 envelope building, response parsing and HTTP transport."""

from soap_accounts.soap.envelope import SoapProperty, SoapRequestBuilder
from soap_accounts.soap.parser import SoapObject, SoapResponseParser
from soap_accounts.soap.transport import HttpTransport

__all__ = [
    "HttpTransport",
    "SoapObject",
    "SoapProperty",
    "SoapRequestBuilder",
    "SoapResponseParser",
]
