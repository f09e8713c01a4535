"""Domain models for the account service."""

from soap_accounts.models.account import Account, NewAccount
from soap_accounts.models.enums import DEFAULT_ACCOUNT_TYPE, SERVER_CODES, AccountType

__all__ = [
    "Account",
    "AccountType",
    "DEFAULT_ACCOUNT_TYPE",
    "NewAccount",
    "SERVER_CODES",
]
