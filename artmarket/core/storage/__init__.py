"""
Persistent Storage Module.

Provides keyed entity storage for:
- Artists, Artworks and Tokens
- Auctions and sale Transactions
backed by memory or SQLite.
"""

from artmarket.core.storage.sqlite_adapter import SQLiteAdapter
from artmarket.core.storage.repository import (
    Repository,
    InMemoryRepository,
    SQLiteRepository,
)
from artmarket.core.storage.storage_manager import StorageManager

__all__ = [
    "SQLiteAdapter",
    "Repository",
    "InMemoryRepository",
    "SQLiteRepository",
    "StorageManager",
]
