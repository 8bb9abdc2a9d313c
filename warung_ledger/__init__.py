"""
Warung Ledger - Source Package

A chat-driven bookkeeping assistant for a small food stall: sales,
expenses and stock purchases are typed as chat commands and answered
with confirmations and profit reports.

DESIGN PRINCIPLES:
1. One message, one command, one reply
2. Bad input gets a hint, never a crash
3. Every entry belongs to exactly one conversation
4. Every change must be auditable
5. Storage and channel are swappable
"""

__version__ = "1.0.0"
__author__ = "Warung Ledger Team"
