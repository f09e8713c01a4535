"""HTTP transport for SOAP 1.1 calls."""

import logging

import httpx

from soap_accounts.config import ServiceConfig
from soap_accounts.exceptions import TransportError
from soap_accounts.soap.parser import SoapResponseParser

logger = logging.getLogger(__name__)


class HttpTransport:
    """POST SOAP envelopes to a single endpoint."""

    def __init__(self, config: ServiceConfig) -> None:
        self.config = config
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.config.timeout),
                headers=self.config.to_headers(),
            )
        return self._client

    def call(self, envelope: bytes) -> bytes:
        """Send ``envelope`` and return the raw response body.

        The body is returned undecoded so that the XML parser honours the
        encoding declared by the envelope.

        Raises
        ------
        TransportError
            On connection failures, timeouts and non-SOAP HTTP errors.
        """
        client = self._get_client()
        url = self.config.url

        try:
            response = client.post(url, content=envelope)
        except httpx.RequestError as e:
            logger.error("Request error calling %s: %s", url, e)
            raise TransportError(f"Request to {url} failed: {e}") from e

        # SOAP 1.1 reports faults with HTTP 500; the parser surfaces them
        if response.status_code == 500 and SoapResponseParser.is_fault(response.content):
            return response.content

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error calling %s: %s", url, response.status_code)
            raise TransportError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            ) from e

        return response.content

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
        self._client = None
