"""Console output of account listings."""

import sys
from typing import Any, TextIO

from soap_accounts.models import Account
from soap_accounts.records import RecordIssue
from soap_accounts.sinks.serialization import to_json


class ConsoleSink:
    """Write accounts to a text stream, as a table or as JSON."""

    def __init__(
        self,
        fmt: str = "table",
        pretty: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        fmt : str
            ``"table"`` for aligned columns, ``"json"`` for one JSON document
            per account (or an indented array when ``pretty``).
        pretty : bool
            Pretty-print JSON output.
        stream : TextIO | None
            Destination (defaults to stdout at write time).
        """
        if fmt not in ("table", "json"):
            raise ValueError(f"Unknown output format: {fmt!r}")
        self.fmt = fmt
        self.pretty = pretty
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def write_accounts(self, accounts: list[Account]) -> None:
        """Write a listing of accounts."""
        if self.fmt == "json":
            self._write_json(accounts)
        else:
            self._write_table(accounts)

    def write_issues(self, issues: list[RecordIssue]) -> None:
        """Write record issues as a short report."""
        if not issues:
            return
        self._print(f"{len(issues)} record issue(s):")
        for issue in issues:
            where = issue.field or "record"
            self._print(f"  #{issue.index} {where}: {issue.message} (raw={issue.raw_value!r})")

    def _write_json(self, accounts: list[Account]) -> None:
        if self.pretty:
            self._print(to_json(accounts, pretty=True))
            return
        for account in accounts:
            self._print(to_json(account))

    def _write_table(self, accounts: list[Account]) -> None:
        if not accounts:
            self._print("No accounts found.")
            return
        self._print(f"{'ID':>8}  {'TYPE':<8}  {'BALANCE':>14}  CREATED")
        for account in accounts:
            account_id = "-" if account.id is None else str(account.id)
            self._print(
                f"{account_id:>8}  {account.account_type.value:<8}  "
                f"{account.balance:>14}  {account.creation_date.isoformat()}"
            )

    def _print(self, text: Any) -> None:
        print(text, file=self.stream)

    def close(self) -> None:
        """Flush the destination stream."""
        self.stream.flush()
