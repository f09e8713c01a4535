"""In-memory account snapshot backed by the remote service.

:class:`AccountBook` is what a front end holds on to: it keeps the list of
accounts currently displayed and runs every service call on a background
worker. Results come back through callbacks, routed by a ``dispatch``
function so that a UI can marshal them onto its own thread.
"""

import functools
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from decimal import Decimal
from typing import Callable, TypeVar

from soap_accounts.client import AccountService
from soap_accounts.exceptions import AccountClientError
from soap_accounts.models import Account, AccountType
from soap_accounts.records import RecordIssue

logger = logging.getLogger(__name__)

T = TypeVar("T")

Dispatcher = Callable[[Callable[[], None]], None]
ChangeCallback = Callable[[list[Account]], None]
ErrorCallback = Callable[[str, AccountClientError], None]


def call_inline(fn: Callable[[], None]) -> None:
    """Default dispatcher: run callbacks on the worker thread."""
    fn()


class AccountBook:
    """Snapshot of accounts with background refresh, add and remove."""

    def __init__(
        self,
        service: AccountService,
        executor: Executor | None = None,
        dispatch: Dispatcher = call_inline,
        on_change: ChangeCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.service = service
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="account-book")
        self._dispatch = dispatch
        self._on_change = on_change
        self._on_error = on_error
        self._lock = threading.Lock()
        self._accounts: list[Account] = []
        self._issues: list[RecordIssue] = []

    @property
    def snapshot(self) -> list[Account]:
        """Copy of the accounts currently held."""
        with self._lock:
            return list(self._accounts)

    @property
    def issues(self) -> list[RecordIssue]:
        """Record issues reported by the last refresh."""
        with self._lock:
            return list(self._issues)

    def refresh(self) -> "Future[list[Account]]":
        """Reload the snapshot from the service."""
        return self._submit("refresh", self._refresh)

    def add(self, balance: Decimal | int | str, account_type: AccountType) -> "Future[list[Account]]":
        """Create an account, then reload the snapshot."""

        def task() -> list[Account]:
            self.service.create_account(balance, account_type, raise_errors=True)
            return self._refresh()

        return self._submit("add", task)

    def remove(self, account: Account) -> "Future[bool]":
        """Delete ``account`` and drop it from the snapshot.

        Resolves to ``False`` without calling the service when the account
        has no id yet.
        """
        if account.id is None:
            logger.warning("Cannot delete an account without id: %r", account)
            future: Future[bool] = Future()
            future.set_result(False)
            return future

        account_id = account.id

        def task() -> bool:
            self.service.delete_account(account_id, raise_errors=True)
            with self._lock:
                if account in self._accounts:
                    self._accounts.remove(account)
            self._notify_change()
            return True

        return self._submit("remove", task)

    def _refresh(self) -> list[Account]:
        listing = self.service.fetch_accounts()
        with self._lock:
            self._accounts = list(listing.accounts)
            self._issues = list(listing.issues)
        if not listing.accounts:
            logger.info("No accounts found")
        self._notify_change()
        return list(listing.accounts)

    def _submit(self, action: str, fn: Callable[[], T]) -> "Future[T]":
        def run() -> T:
            try:
                return fn()
            except AccountClientError as e:
                logger.error("Account book %s failed: %s", action, e)
                if self._on_error is not None:
                    self._dispatch(functools.partial(self._on_error, action, e))
                raise

        return self._executor.submit(run)

    def _notify_change(self) -> None:
        if self._on_change is not None:
            self._dispatch(functools.partial(self._on_change, self.snapshot))

    def close(self) -> None:
        """Wait for pending calls and stop the worker if this book owns it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "AccountBook":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
