"""Mapping of service account records onto :class:`Account` values.

The service reports every field as text and is not consistent about
which fields are present, so each field is parsed on its own and falls
back to a default when it cannot be read. Every fallback is logged and
recorded as a :class:`RecordIssue` on the listing.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable

from soap_accounts.models import DEFAULT_ACCOUNT_TYPE, Account, AccountType
from soap_accounts.soap.parser import SoapObject

logger = logging.getLogger(__name__)

FIELD_ID = "id"
FIELD_BALANCE = "solde"
FIELD_CREATION_DATE = "dateCreation"
FIELD_TYPE = "type"

DEFAULT_BALANCE = Decimal("0")


@dataclass(frozen=True)
class RecordIssue:
    """A default applied to, or a skip of, one record in a listing.

    ``field`` is ``None`` when the whole record was skipped.
    """

    index: int
    field: str | None
    raw_value: str | None
    message: str


@dataclass
class AccountListing:
    """Accounts decoded from one list call plus what had to be patched up."""

    accounts: list[Account] = field(default_factory=list)
    issues: list[RecordIssue] = field(default_factory=list)

    @property
    def skipped_records(self) -> int:
        return sum(1 for issue in self.issues if issue.field is None)

    @property
    def is_clean(self) -> bool:
        return not self.issues


def _is_plain_number(text: str) -> bool:
    # int() and Decimal() also accept digit separators and non-ASCII digits
    return text.isascii() and "_" not in text


def parse_identifier(raw: str | None) -> int | None:
    """Parse an account id; ``None`` when absent or not an integer."""
    if raw is None:
        return None
    text = raw.strip()
    if not _is_plain_number(text):
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_balance(raw: str | None) -> Decimal | None:
    """Parse a balance; ``None`` when absent, malformed or not finite."""
    if raw is None:
        return None
    text = raw.strip()
    if not _is_plain_number(text):
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_creation_date(raw: str | None) -> date | None:
    """Parse the calendar date from an ``xsd:date`` or ``xsd:dateTime`` literal.

    Only the leading ``YYYY-MM-DD`` is read, so time and zone suffixes are
    ignored.
    """
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        return None


class AccountRecordMapper:
    """Turns the response object of a list call into an :class:`AccountListing`.

    Parameters
    ----------
    today : Callable[[], date]
        Source of the date used when a record has no readable creation date.
    """

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def map_listing(self, response: SoapObject | None) -> AccountListing:
        listing = AccountListing()
        if response is None:
            return listing

        for index, (name, value) in enumerate(response.properties):
            if not isinstance(value, SoapObject):
                self._flag(listing, index, None, value, f"property <{name}> is not an account record, skipped")
                continue
            listing.accounts.append(self.map_record(index, value, listing))

        return listing

    def map_record(self, index: int, record: SoapObject, listing: AccountListing) -> Account:
        """Decode a single record, appending any fallback to ``listing.issues``."""
        raw_id = record.get_text(FIELD_ID)
        account_id = parse_identifier(raw_id)
        if account_id is None and raw_id is not None:
            self._flag(listing, index, FIELD_ID, raw_id, "identifier is not an integer, left empty")

        raw_balance = record.get_text(FIELD_BALANCE)
        balance = parse_balance(raw_balance)
        if balance is None:
            balance = DEFAULT_BALANCE
            self._flag(listing, index, FIELD_BALANCE, raw_balance, "balance unreadable, using 0")

        raw_date = record.get_text(FIELD_CREATION_DATE)
        creation_date = parse_creation_date(raw_date)
        if creation_date is None:
            creation_date = self._today()
            self._flag(
                listing, index, FIELD_CREATION_DATE, raw_date,
                f"creation date unreadable, using {creation_date.isoformat()}",
            )

        raw_type = record.get_text(FIELD_TYPE)
        try:
            account_type = AccountType.from_server_code((raw_type or "").strip())
        except ValueError:
            account_type = DEFAULT_ACCOUNT_TYPE
            self._flag(
                listing, index, FIELD_TYPE, raw_type,
                f"unknown account type, using {DEFAULT_ACCOUNT_TYPE.value}",
            )

        return Account(
            id=account_id,
            balance=balance,
            creation_date=creation_date,
            account_type=account_type,
        )

    @staticmethod
    def _flag(
        listing: AccountListing,
        index: int,
        field_name: str | None,
        raw_value: object,
        message: str,
    ) -> None:
        raw = raw_value if isinstance(raw_value, str) or raw_value is None else repr(raw_value)
        logger.warning("Account record %d: %s (raw=%r)", index, message, raw)
        listing.issues.append(RecordIssue(index=index, field=field_name, raw_value=raw, message=message))
