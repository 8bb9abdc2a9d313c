"""Ledger operations package."""

from warung_ledger.ledger.operations import LedgerOperations, item_breakdown

__all__ = ["LedgerOperations", "item_breakdown"]
