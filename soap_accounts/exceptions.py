"""Custom exception hierarchy for soap-accounts."""


class AccountClientError(Exception):
    """Base exception for all soap-accounts errors."""


class ConfigurationError(AccountClientError):
    """Raised when configuration is invalid or missing."""


class TransportError(AccountClientError):
    """Raised when the HTTP exchange with the service fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SoapFaultError(AccountClientError):
    """Raised when the service answers with a SOAP fault."""

    def __init__(self, faultcode: str, faultstring: str, detail: str | None = None) -> None:
        super().__init__(f"{faultcode}: {faultstring}")
        self.faultcode = faultcode
        self.faultstring = faultstring
        self.detail = detail


class ResponseFormatError(AccountClientError):
    """Raised when a response is not a usable SOAP envelope."""
