"""Sample account-opening requests for seeding a development service."""

import random
from decimal import Decimal
from typing import Iterator

from soap_accounts.generators.base import BaseGenerator
from soap_accounts.models import AccountType, NewAccount


class NewAccountGenerator(BaseGenerator):
    """Generate plausible :class:`NewAccount` requests.

    Account type mix:
    - CHECKING: ~70%, opening balance 50 to 5 000
    - SAVINGS: ~30%, opening balance 500 to 50 000
    """

    ACCOUNT_TYPES = list(AccountType)
    ACCOUNT_TYPE_WEIGHTS = [0.70, 0.30]

    BALANCE_RANGES = {
        AccountType.CHECKING: (50, 5_000),
        AccountType.SAVINGS: (500, 50_000),
    }

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)

    def generate(self) -> NewAccount:
        """Generate a single account request."""
        account_type = random.choices(
            self.ACCOUNT_TYPES, weights=self.ACCOUNT_TYPE_WEIGHTS, k=1
        )[0]
        low, high = self.BALANCE_RANGES[account_type]
        amount = self.fake.pyfloat(right_digits=2, min_value=low, max_value=high)

        return NewAccount(
            balance=Decimal(str(amount)).quantize(Decimal("0.01")),
            account_type=account_type,
        )

    def generate_batch(self, count: int) -> Iterator[NewAccount]:
        """Yield ``count`` account requests."""
        for _ in range(count):
            yield self.generate()
