"""Command line interface for the account service.

Examples::

    python -m soap_accounts list
    python -m soap_accounts list --json --pretty
    python -m soap_accounts create 1500.00 SAVINGS
    python -m soap_accounts --url http://bank:8082/services/ws delete 42
"""

import argparse
import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation

from soap_accounts import __version__
from soap_accounts.client import AccountService
from soap_accounts.config import AppConfig
from soap_accounts.exceptions import AccountClientError, ConfigurationError
from soap_accounts.logging import setup_logging
from soap_accounts.models import AccountType
from soap_accounts.sinks import ConsoleSink

logger = logging.getLogger(__name__)


def _decimal(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="soap-accounts",
        description="List, create and delete bank accounts through the SOAP account service.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--url", help="Service endpoint (default: $SOAP_ACCOUNTS_URL or localhost)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: $LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List accounts")
    list_parser.add_argument("--json", action="store_true", help="Output JSON")
    list_parser.add_argument("--pretty", action="store_true", help="Indent JSON output")
    list_parser.add_argument(
        "--show-issues",
        action="store_true",
        help="Report records that needed defaults or were skipped",
    )

    create_parser = subparsers.add_parser("create", help="Open an account")
    create_parser.add_argument("balance", type=_decimal, help="Initial balance")
    create_parser.add_argument(
        "account_type",
        type=str.upper,
        choices=[t.value for t in AccountType],
        help="Account type",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete an account")
    delete_parser.add_argument("account_id", type=int, help="Account id")

    return parser


def run_command(args: argparse.Namespace, service: AccountService) -> int:
    """Execute a parsed command against ``service`` and return the exit status."""
    if args.command == "list":
        listing = service.fetch_accounts()
        sink = ConsoleSink(fmt="json" if args.json else "table", pretty=args.pretty)
        sink.write_accounts(listing.accounts)
        if args.show_issues:
            sink.write_issues(listing.issues)
        sink.close()
        return 0

    if args.command == "create":
        ok = service.create_account(args.balance, AccountType(args.account_type))
        print("Account added." if ok else "Error adding account.")
        return 0 if ok else 1

    if args.command == "delete":
        ok = service.delete_account(args.account_id)
        print("Account deleted." if ok else "Error during deletion.")
        return 0 if ok else 1

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = AppConfig.from_env()
    except ConfigurationError as e:
        parser.error(str(e))

    setup_logging(level=args.log_level or config.log_level, format_type=config.log_format)

    service_config = config.service
    if args.url:
        try:
            service_config = replace(service_config, url=args.url)
        except ConfigurationError as e:
            parser.error(str(e))

    with AccountService(service_config) as service:
        try:
            return run_command(args, service)
        except AccountClientError as e:
            logger.error("%s failed: %s", args.command, e)
            return 1
