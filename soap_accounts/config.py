"""Configuration management for soap-accounts."""

from dataclasses import dataclass, field

from soap_accounts.exceptions import ConfigurationError

DEFAULT_URL = "http://localhost:8082/services/ws"
DEFAULT_NAMESPACE = "http://ws.soapAcount/"


@dataclass
class OperationNames:
    """Remote method names exposed by the account service."""

    list: str = "getComptes"
    create: str = "createCompte"
    delete: str = "deleteCompte"


@dataclass
class ServiceConfig:
    """SOAP endpoint configuration."""

    url: str = DEFAULT_URL
    namespace: str = DEFAULT_NAMESPACE
    timeout: float = 30.0
    soap_action: str = ""
    operations: OperationNames = field(default_factory=OperationNames)

    def __post_init__(self) -> None:
        if not self.url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Service URL must be http(s): {self.url!r}")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")

    def to_headers(self) -> dict[str, str]:
        """HTTP headers sent with every SOAP 1.1 request."""
        return {
            "Content-Type": "text/xml; charset=utf-8",
            "Accept": "text/xml",
            "SOAPAction": f'"{self.soap_action}"',
        }


@dataclass
class AppConfig:
    """Main configuration for soap-accounts."""

    service: ServiceConfig = field(default_factory=ServiceConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        import os

        timeout_str = os.getenv("SOAP_ACCOUNTS_TIMEOUT", "30")
        try:
            timeout = float(timeout_str)
        except ValueError as e:
            raise ConfigurationError(f"Invalid SOAP_ACCOUNTS_TIMEOUT: {timeout_str!r}") from e

        service = ServiceConfig(
            url=os.getenv("SOAP_ACCOUNTS_URL", DEFAULT_URL),
            namespace=os.getenv("SOAP_ACCOUNTS_NAMESPACE", DEFAULT_NAMESPACE),
            timeout=timeout,
        )

        return cls(
            service=service,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
