"""Tests for AccountBook background operations."""

import threading
from datetime import date
from decimal import Decimal
from typing import Callable
from unittest.mock import MagicMock

import pytest

from soap_accounts.book import AccountBook
from soap_accounts.client import AccountService
from soap_accounts.exceptions import AccountClientError, SoapFaultError, TransportError
from soap_accounts.models import Account, AccountType
from soap_accounts.records import AccountListing, RecordIssue

ACCOUNT_1 = Account(1, Decimal("100.00"), date(2024, 1, 10), AccountType.CHECKING)
ACCOUNT_2 = Account(2, Decimal("2500.00"), date(2024, 2, 20), AccountType.SAVINGS)


@pytest.fixture
def service() -> MagicMock:
    service = MagicMock(spec=AccountService)
    service.fetch_accounts.return_value = AccountListing(accounts=[ACCOUNT_1, ACCOUNT_2])
    service.create_account.return_value = True
    service.delete_account.return_value = True
    return service


@pytest.fixture
def book(service: MagicMock):
    with AccountBook(service) as book:
        yield book


class TestRefresh:
    """Tests for AccountBook.refresh."""

    def test_loads_snapshot(self, book: AccountBook, service: MagicMock) -> None:
        result = book.refresh().result(timeout=5)

        assert result == [ACCOUNT_1, ACCOUNT_2]
        assert book.snapshot == [ACCOUNT_1, ACCOUNT_2]
        service.fetch_accounts.assert_called_once()

    def test_snapshot_is_a_copy(self, book: AccountBook) -> None:
        book.refresh().result(timeout=5)

        book.snapshot.clear()

        assert len(book.snapshot) == 2

    def test_keeps_issues(self, book: AccountBook, service: MagicMock) -> None:
        issue = RecordIssue(index=0, field="solde", raw_value="x", message="balance unreadable, using 0")
        service.fetch_accounts.return_value = AccountListing(accounts=[ACCOUNT_1], issues=[issue])

        book.refresh().result(timeout=5)

        assert book.issues == [issue]

    def test_runs_off_the_calling_thread(self, book: AccountBook, service: MagicMock) -> None:
        threads = []
        service.fetch_accounts.side_effect = lambda: (
            threads.append(threading.current_thread()) or AccountListing()
        )

        book.refresh().result(timeout=5)

        assert threads and threads[0] is not threading.current_thread()

    def test_on_change_receives_snapshot(self, service: MagicMock) -> None:
        changes = []
        with AccountBook(service, on_change=changes.append) as book:
            book.refresh().result(timeout=5)

        assert changes == [[ACCOUNT_1, ACCOUNT_2]]

    def test_callbacks_go_through_dispatcher(self, service: MagicMock) -> None:
        queued: list[Callable[[], None]] = []
        changes = []
        with AccountBook(service, dispatch=queued.append, on_change=changes.append) as book:
            book.refresh().result(timeout=5)

        assert changes == []
        for fn in queued:
            fn()
        assert changes == [[ACCOUNT_1, ACCOUNT_2]]

    def test_failure_keeps_previous_snapshot(self, book: AccountBook, service: MagicMock) -> None:
        book.refresh().result(timeout=5)
        service.fetch_accounts.side_effect = TransportError("down")

        with pytest.raises(TransportError):
            book.refresh().result(timeout=5)

        assert book.snapshot == [ACCOUNT_1, ACCOUNT_2]

    def test_failure_reaches_on_error(self, service: MagicMock) -> None:
        errors: list[tuple[str, AccountClientError]] = []
        service.fetch_accounts.side_effect = TransportError("down")

        with AccountBook(service, on_error=lambda action, e: errors.append((action, e))) as book:
            future = book.refresh()
            with pytest.raises(TransportError):
                future.result(timeout=5)

        [(action, error)] = errors
        assert action == "refresh"
        assert isinstance(error, TransportError)


class TestAdd:
    """Tests for AccountBook.add."""

    def test_creates_then_refreshes(self, book: AccountBook, service: MagicMock) -> None:
        result = book.add(Decimal("50"), AccountType.SAVINGS).result(timeout=5)

        service.create_account.assert_called_once_with(Decimal("50"), AccountType.SAVINGS, raise_errors=True)
        service.fetch_accounts.assert_called_once()
        assert result == [ACCOUNT_1, ACCOUNT_2]

    def test_failed_create_skips_refresh(self, book: AccountBook, service: MagicMock) -> None:
        service.create_account.side_effect = SoapFaultError("S:Server", "refused")

        with pytest.raises(SoapFaultError):
            book.add(Decimal("50"), AccountType.SAVINGS).result(timeout=5)

        service.fetch_accounts.assert_not_called()


class TestRemove:
    """Tests for AccountBook.remove."""

    def test_removes_from_snapshot(self, book: AccountBook, service: MagicMock) -> None:
        book.refresh().result(timeout=5)

        assert book.remove(ACCOUNT_1).result(timeout=5) is True

        service.delete_account.assert_called_once_with(1, raise_errors=True)
        assert book.snapshot == [ACCOUNT_2]

    def test_account_without_id_skipped(self, book: AccountBook, service: MagicMock) -> None:
        pending = Account(None, Decimal("1"), date(2024, 1, 1), AccountType.CHECKING)

        assert book.remove(pending).result(timeout=5) is False
        service.delete_account.assert_not_called()

    def test_failed_delete_keeps_account(self, book: AccountBook, service: MagicMock) -> None:
        book.refresh().result(timeout=5)
        service.delete_account.side_effect = TransportError("down")

        with pytest.raises(TransportError):
            book.remove(ACCOUNT_1).result(timeout=5)

        assert book.snapshot == [ACCOUNT_1, ACCOUNT_2]

    def test_remove_unknown_account_is_harmless(self, book: AccountBook) -> None:
        assert book.remove(ACCOUNT_2).result(timeout=5) is True
        assert book.snapshot == []


class TestExecutorOwnership:
    """Tests for executor lifecycle."""

    def test_external_executor_not_shut_down(self, service: MagicMock) -> None:
        executor = MagicMock()

        AccountBook(service, executor=executor).close()

        executor.shutdown.assert_not_called()

    def test_uses_external_executor(self, service: MagicMock) -> None:
        executor = MagicMock()

        AccountBook(service, executor=executor).refresh()

        executor.submit.assert_called_once()
