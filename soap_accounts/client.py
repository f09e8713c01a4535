"""Account service client.

Translates the list, create and delete operations into SOAP calls on the
remote account service and decodes the answers into domain values.
Each operation issues exactly one remote call.

Usage::

    with AccountService("http://localhost:8082/services/ws") as service:
        for account in service.list_accounts():
            print(account.id, account.balance)
        service.create_account(Decimal("250.00"), AccountType.SAVINGS)
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Sequence

from soap_accounts.config import ServiceConfig
from soap_accounts.exceptions import (
    AccountClientError,
    ResponseFormatError,
    SoapFaultError,
    TransportError,
)
from soap_accounts.models import Account, AccountType
from soap_accounts.records import FIELD_BALANCE, FIELD_ID, FIELD_TYPE, AccountListing, AccountRecordMapper
from soap_accounts.soap import (
    HttpTransport,
    SoapObject,
    SoapProperty,
    SoapRequestBuilder,
    SoapResponseParser,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Client for the remote account SOAP service."""

    def __init__(
        self,
        config: ServiceConfig | str | None = None,
        transport: HttpTransport | None = None,
        request_builder: SoapRequestBuilder | None = None,
        response_parser: SoapResponseParser | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the client.

        Parameters
        ----------
        config : ServiceConfig | str | None
            Service configuration or endpoint URL string.
        transport : HttpTransport | None
            Optional custom transport.
        request_builder : SoapRequestBuilder | None
            Optional custom envelope builder.
        response_parser : SoapResponseParser | None
            Optional custom response parser.
        today : Callable[[], date]
            Date source for records without a readable creation date.
        """
        if isinstance(config, str):
            config = ServiceConfig(url=config)

        self.config = config or ServiceConfig()
        self._builder = request_builder or SoapRequestBuilder(self.config.namespace)
        self._parser = response_parser or SoapResponseParser()
        self._transport = transport or HttpTransport(self.config)
        self._mapper = AccountRecordMapper(today=today)

    def _invoke(self, method: str, properties: Sequence[SoapProperty] = ()) -> SoapObject | None:
        """Run one remote call and return the decoded response object."""
        envelope = self._builder.build_envelope(method, properties)
        logger.debug("Calling %s on %s", method, self.config.url)
        response_body = self._transport.call(envelope)
        return self._parser.parse(response_body)

    def fetch_accounts(self) -> AccountListing:
        """List accounts, reporting every record-level fallback.

        Raises
        ------
        TransportError
            On network or HTTP failure.
        SoapFaultError
            If the service answers with a fault.
        ResponseFormatError
            If the answer is not a SOAP envelope.
        """
        response = self._invoke(self.config.operations.list)
        listing = self._mapper.map_listing(response)
        logger.info(
            "Listed %d accounts (%d issues, %d records skipped)",
            len(listing.accounts),
            len(listing.issues),
            listing.skipped_records,
        )
        return listing

    def list_accounts(self) -> list[Account]:
        """List accounts; see :meth:`fetch_accounts` for failure modes."""
        return self.fetch_accounts().accounts

    def create_account(
        self,
        balance: Decimal | int | str,
        account_type: AccountType,
        *,
        raise_errors: bool = False,
    ) -> bool:
        """Open an account with an initial balance.

        Success means the call completed without a transport error or fault;
        the response body is not compared with the request.

        Raises
        ------
        ValueError
            If ``balance`` is NaN or infinite.
        """
        amount = balance if isinstance(balance, Decimal) else Decimal(str(balance))
        if not amount.is_finite():
            raise ValueError(f"Balance must be a finite amount, got {balance!r}")
        properties = [
            SoapProperty(FIELD_BALANCE, str(amount)),
            SoapProperty(FIELD_TYPE, account_type.server_code),
        ]
        try:
            self._invoke(self.config.operations.create, properties)
        except AccountClientError as e:
            self._report_failure("create account", e)
            if raise_errors:
                raise
            return False

        logger.info("Created %s account with balance %s", account_type.value, amount)
        return True

    def delete_account(self, account_id: int, *, raise_errors: bool = False) -> bool:
        """Delete an account by id.

        Success means the call completed without a transport error or fault;
        the service does not confirm that a record was removed.
        """
        properties = [SoapProperty(FIELD_ID, int(account_id), xsd_type="long")]
        try:
            self._invoke(self.config.operations.delete, properties)
        except AccountClientError as e:
            self._report_failure(f"delete account {account_id}", e)
            if raise_errors:
                raise
            return False

        logger.info("Deleted account %d", account_id)
        return True

    @staticmethod
    def _report_failure(action: str, error: AccountClientError) -> None:
        if isinstance(error, SoapFaultError):
            logger.error("Service rejected %s: %s", action, error)
        elif isinstance(error, TransportError):
            logger.error("Could not %s, transport failure: %s", action, error)
        elif isinstance(error, ResponseFormatError):
            logger.error("Could not %s, unreadable response: %s", action, error)
        else:
            logger.error("Could not %s: %s", action, error)

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._transport.close()

    def __enter__(self) -> "AccountService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
