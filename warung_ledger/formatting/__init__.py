"""Reply formatting package."""

from warung_ledger.formatting.replies import GENERIC_FAILURE, MENU, ReplyFormatter

__all__ = ["GENERIC_FAILURE", "MENU", "ReplyFormatter"]
