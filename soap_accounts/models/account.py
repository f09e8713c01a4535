"""Account models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from soap_accounts.models.enums import AccountType


@dataclass(frozen=True)
class Account:
    """Bank account as reported by the remote service.

    Values are read-only snapshots: the service assigns ``id`` and
    ``creation_date`` and there is no client-side edit operation.
    """

    id: int | None
    balance: Decimal
    creation_date: date
    account_type: AccountType


@dataclass(frozen=True)
class NewAccount:
    """Request to open an account."""

    balance: Decimal
    account_type: AccountType
