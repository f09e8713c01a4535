"""Sample data generators."""

from soap_accounts.generators.account import NewAccountGenerator

__all__ = ["NewAccountGenerator"]
