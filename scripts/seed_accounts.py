#!/usr/bin/env python3
"""Seed a development account service with sample accounts.

Generates account-opening requests and sends them to the SOAP service one
by one, then lists what the service holds.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from soap_accounts.client import AccountService
from soap_accounts.config import AppConfig
from soap_accounts.exceptions import ConfigurationError
from soap_accounts.generators import NewAccountGenerator
from soap_accounts.logging import setup_logging
from soap_accounts.sinks import ConsoleSink

logger = logging.getLogger(__name__)


def seed(service: AccountService, count: int, seed: int | None, dry_run: bool = False) -> tuple[int, int]:
    """Create ``count`` sample accounts.

    Returns
    -------
    tuple[int, int]
        Number of accounts created and number of failed requests.
    """
    generator = NewAccountGenerator(seed=seed)
    created = failed = 0

    for request in generator.generate_batch(count):
        if dry_run:
            print(f"{request.account_type.value:<8} {request.balance:>12}")
            continue
        if service.create_account(request.balance, request.account_type):
            created += 1
        else:
            failed += 1

    return created, failed


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the account service with sample accounts")
    parser.add_argument("--count", type=int, default=10, help="Number of accounts to create (default: 10)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible requests")
    parser.add_argument("--url", default=None, help="Service endpoint (default: $SOAP_ACCOUNTS_URL)")
    parser.add_argument("--dry-run", action="store_true", help="Print requests without sending them")
    args = parser.parse_args(argv)

    try:
        config = AppConfig.from_env()
    except ConfigurationError as e:
        parser.error(str(e))

    setup_logging(level=config.log_level, format_type=config.log_format)

    service_config = config.service
    if args.url:
        try:
            service_config = replace(service_config, url=args.url)
        except ConfigurationError as e:
            parser.error(str(e))

    with AccountService(service_config) as service:
        created, failed = seed(service, args.count, args.seed, dry_run=args.dry_run)
        if args.dry_run:
            return

        logger.info("Seeding complete: created=%d, failed=%d", created, failed)
        ConsoleSink().write_accounts(service.list_accounts())

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
