"""Enumeration types for account entities."""

from enum import Enum


class AccountType(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"

    @property
    def server_code(self) -> str:
        """Code the remote service uses for this type."""
        return SERVER_CODES[self]

    @classmethod
    def from_server_code(cls, code: str) -> "AccountType":
        """Map a server code back to an account type.

        Raises
        ------
        ValueError
            If ``code`` is not a known server code.
        """
        try:
            return _TYPES_BY_CODE[code]
        except KeyError:
            raise ValueError(f"Unknown account type code: {code!r}") from None


SERVER_CODES: dict[AccountType, str] = {
    AccountType.CHECKING: "COURANT",
    AccountType.SAVINGS: "EPARGNE",
}

_TYPES_BY_CODE: dict[str, AccountType] = {code: t for t, code in SERVER_CODES.items()}

# Applied when the service reports a code outside SERVER_CODES
DEFAULT_ACCOUNT_TYPE = AccountType.CHECKING
