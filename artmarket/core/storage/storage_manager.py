from pathlib import Path
from typing import Optional

from artmarket.core.auction.models import Auction, Transaction
from artmarket.core.catalog.models import Artist, Artwork, Token
from artmarket.core.storage.repository import (
    InMemoryRepository,
    Repository,
    SQLiteRepository,
    encode_entity,
)
from artmarket.core.storage.sqlite_adapter import SQLiteAdapter
from artmarket.utils.logger import get_logger

logger = get_logger("storage.manager")

SCHEMA_VERSION = "1"

# bucket name -> entity class
BUCKETS = {
    "artists": Artist,
    "artworks": Artwork,
    "tokens": Token,
    "auctions": Auction,
    "transactions": Transaction,
}


class StorageManager:
    """
    Owns the entity repositories for the marketplace.

    With ``data_dir=None`` every repository is in-memory; otherwise all of
    them share one SQLite database under ``data_dir``.
    """

    def __init__(self, data_dir: Optional[Path] = None, db_name: str = "market.db"):
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self.adapter: Optional[SQLiteAdapter] = None

        if self.data_dir is None:
            self.db_path = None
            repos = {
                bucket: InMemoryRepository(bucket, cls) for bucket, cls in BUCKETS.items()
            }
            logger.info("StorageManager initialized in memory")
        else:
            self.db_path = self.data_dir / db_name
            self.adapter = SQLiteAdapter(self.db_path)
            if self.adapter.get_meta("schema_version") is None:
                self.adapter.set_meta("schema_version", SCHEMA_VERSION)
            repos = {
                bucket: SQLiteRepository(self.adapter, bucket, cls)
                for bucket, cls in BUCKETS.items()
            }
            logger.info(f"StorageManager initialized at {self.db_path}")

        self.artists: Repository[Artist] = repos["artists"]
        self.artworks: Repository[Artwork] = repos["artworks"]
        self.tokens: Repository[Token] = repos["tokens"]
        self.auctions: Repository[Auction] = repos["auctions"]
        self.transactions: Repository[Transaction] = repos["transactions"]

    @property
    def is_persistent(self) -> bool:
        return self.adapter is not None

    # =========================================================================
    # Settlement Support
    # =========================================================================

    def persist_settlement(self, token: Token, transaction: Transaction, auction: Auction):
        """Atomically persist the token transfer, sale record and closed auction."""
        if self.adapter is not None:
            self.adapter.put_many([
                (self.tokens.bucket, token.id, encode_entity(token)),
                (self.transactions.bucket, transaction.id, encode_entity(transaction)),
                (self.auctions.bucket, auction.id, encode_entity(auction)),
            ])
            return

        self.tokens.put(token)
        self.transactions.put(transaction)
        self.auctions.put(auction)

    def close(self):
        if self.adapter is not None:
            self.adapter.close()
