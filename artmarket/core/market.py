"""
Marketplace - the external operation surface.

Wires storage, identity, catalog and auction engine together and exposes
every mutating and read-only operation. All operations return a Result.
"""

import threading
from typing import List, Optional

from artmarket.core.auction import Auction, AuctionEngine, Transaction
from artmarket.core.catalog import Artist, Artwork, Catalog, Token
from artmarket.core.config import MarketConfig
from artmarket.core.identity import Caller, IdentityGuard
from artmarket.core.result import Result
from artmarket.core.storage import StorageManager
from artmarket.utils.logger import get_logger

logger = get_logger("market")


class Marketplace:
    """
    Facade over the catalog and the auction engine.

    Mutating operations share one re-entrant lock, so each call completes
    before the next one observes the state.
    """

    def __init__(
        self,
        storage: Optional[StorageManager] = None,
        config: Optional[MarketConfig] = None,
        identity_guard: Optional[IdentityGuard] = None,
    ):
        self.config = config or MarketConfig()
        self.storage = storage or StorageManager()
        self.identity_guard = identity_guard or IdentityGuard()

        self._lock = threading.RLock()
        self.catalog = Catalog(self.storage, self.identity_guard, lock=self._lock)
        self.engine = AuctionEngine(
            self.storage,
            self.identity_guard,
            single_active_auction=self.config.single_active_auction,
            lock=self._lock,
        )

    @classmethod
    def from_config(cls, config: MarketConfig) -> "Marketplace":
        """Build a SQLite-backed marketplace under ``config.data_dir``."""
        config.ensure_directories()
        storage = StorageManager(data_dir=config.data_dir, db_name=config.db_name)
        return cls(storage=storage, config=config)

    # =========================================================================
    # Catalog
    # =========================================================================

    def create_artist_profile(
        self, caller: Caller, name: str, wallet_address: str, email: str
    ) -> Result[Artist]:
        return self.catalog.create_artist_profile(caller, name, wallet_address, email)

    def mint_artwork(
        self, artist_id: str, title: str, description: str, image_url: str
    ) -> Result[Artwork]:
        return self.catalog.mint_artwork(artist_id, title, description, image_url)

    def mint_nft(self, artwork_id: str, price: int) -> Result[Token]:
        return self.catalog.mint_nft(artwork_id, price)

    def get_artist(self, artist_id: str) -> Result[Artist]:
        return self.catalog.get_artist(artist_id)

    def get_artwork(self, artwork_id: str) -> Result[Artwork]:
        return self.catalog.get_artwork(artwork_id)

    def get_token(self, token_id: str) -> Result[Token]:
        return self.catalog.get_token(token_id)

    def list_artist_tokens(self, artist_id: str) -> Result[List[Token]]:
        return self.catalog.list_artist_tokens(artist_id)

    # =========================================================================
    # Auctions
    # =========================================================================

    def create_auction(self, caller: Caller, token_id: str) -> Result[Auction]:
        return self.engine.create_auction(caller, token_id)

    def place_bid(self, auction_id: str, bidder_id: str, amount: int) -> Result[Auction]:
        return self.engine.place_bid(auction_id, bidder_id, amount)

    def cancel_auction(self, caller: Caller, auction_id: str) -> Result[Auction]:
        return self.engine.cancel_auction(caller, auction_id)

    def finalize_auction(self, caller: Caller, auction_id: str) -> Result[Transaction]:
        return self.engine.finalize_auction(caller, auction_id)

    def get_auction(self, auction_id: str) -> Result[Auction]:
        return self.engine.get_auction(auction_id)

    def get_transaction(self, transaction_id: str) -> Result[Transaction]:
        return self.engine.get_transaction(transaction_id)

    def list_active_auctions(self) -> Result[List[Auction]]:
        return self.engine.list_active_auctions()

    def list_completed_auctions(self) -> Result[List[Auction]]:
        return self.engine.list_completed_auctions()

    def list_token_auction_history(self, token_id: str) -> Result[List[Auction]]:
        return self.engine.list_token_auction_history(token_id)

    def stats(self) -> dict:
        stats = self.engine.stats()
        stats.update({
            "artists": len(self.storage.artists),
            "artworks": len(self.storage.artworks),
            "tokens": len(self.storage.tokens),
        })
        return stats
