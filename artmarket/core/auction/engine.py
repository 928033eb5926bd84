"""
Auction Engine - English auction state machine.

Manages the auction lifecycle:
- Auction creation for an unsold token
- Bid admission (strictly ascending, no escrow)
- Cancellation by the creator
- Finalization by the creator, handing off to Settlement

The engine is the only writer of auction state. It caches nothing between
calls: every operation reloads the auction, token and bidder from storage,
checks all preconditions, and only then writes.
"""

import threading
from typing import TYPE_CHECKING, List, Optional

from artmarket.core.auction.bid_validator import validate_bid
from artmarket.core.auction.models import Auction, Transaction
from artmarket.core.auction.settlement import Settlement
from artmarket.core.identity import Caller, IdentityGuard
from artmarket.core.payloads import AuctionPayload, PlaceBidPayload, parse_payload
from artmarket.core.result import Result, invalid_payload, not_found
from artmarket.core.types import SaleStatus
from artmarket.utils.logger import get_logger

if TYPE_CHECKING:
    from artmarket.core.storage import StorageManager

logger = get_logger("auction")


class AuctionEngine:
    """
    Owns auction state transitions.

        Pending (active) --cancel--> Cancelled (inactive)
        Pending (active) --finalize--> Completed (inactive)
    """

    def __init__(
        self,
        storage: "StorageManager",
        identity_guard: Optional[IdentityGuard] = None,
        single_active_auction: bool = True,
        lock: Optional[threading.RLock] = None,
    ):
        self.storage = storage
        self.identity_guard = identity_guard or IdentityGuard()
        self.settlement = Settlement(storage)
        self.single_active_auction = single_active_auction
        self._lock = lock or threading.RLock()

    # =========================================================================
    # Creation
    # =========================================================================

    def create_auction(self, caller: Caller, token_id: str) -> Result[Auction]:
        """
        Open an auction for a token.

        The token must exist and still be Pending (unsold). Unless disabled,
        the token must also have no other Pending auction.
        """
        payload, err = parse_payload(AuctionPayload, token_id=token_id)
        if payload is None:
            return invalid_payload(f"All fields are required: {err}")

        creator = self.identity_guard.resolve(caller)

        with self._lock:
            token = self.storage.tokens.get(payload.token_id)
            if token is None:
                return invalid_payload("NFT not found")

            if token.status != SaleStatus.PENDING:
                logger.warning(f"Auction refused: token {token.id[:8]} is {token.status.value}")
                return invalid_payload("NFT is not available for sale")

            if self.single_active_auction and self._open_auction_for(token.id) is not None:
                logger.warning(f"Auction refused: token {token.id[:8]} already has a pending auction")
                return invalid_payload("NFT already has a pending auction")

            auction = Auction(token_id=token.id, creator=creator.principal)
            self.storage.auctions.put(auction)

        logger.info(f"Auction created: {auction.id[:8]} token={token.id[:8]} creator={creator}")
        return Result.success(auction)

    def _open_auction_for(self, token_id: str) -> Optional[Auction]:
        for auction in self.storage.auctions.values():
            if auction.token_id == token_id and auction.is_pending:
                return auction
        return None

    # =========================================================================
    # Bidding
    # =========================================================================

    def place_bid(self, auction_id: str, bidder_id: str, amount: int) -> Result[Auction]:
        """
        Submit a bid on behalf of an artist.

        An admitted bid replaces the current leader. Nothing is escrowed, so
        a superseded leader needs no refund.

        Returns:
            The updated auction
        """
        payload, err = parse_payload(
            PlaceBidPayload, auction_id=auction_id, bidder_id=bidder_id, amount=amount
        )
        if payload is None:
            return invalid_payload(f"Malformed bid: {err}")

        with self._lock:
            bidder = self.storage.artists.get(payload.bidder_id)
            auction = self.storage.auctions.get(payload.auction_id)

            admitted, reason = validate_bid(auction, bidder, payload.amount)
            if not admitted:
                logger.warning(
                    f"Bid rejected: auction={payload.auction_id[:8]} "
                    f"amount={payload.amount} reason={reason}"
                )
                return invalid_payload(reason)

            updated = auction.with_bid(bidder.id, payload.amount)
            self.storage.auctions.put(updated)

        logger.info(f"Bid admitted: auction={updated.id[:8]} bidder={bidder.id[:8]} amount={payload.amount}")
        return Result.success(updated)

    # =========================================================================
    # Cancellation
    # =========================================================================

    def cancel_auction(self, caller: Caller, auction_id: str) -> Result[Auction]:
        """
        Cancel a pending auction. Creator only.

        The token stays Pending so it can be auctioned again.
        """
        with self._lock:
            auction = self.storage.auctions.get(auction_id)
            if auction is None:
                return invalid_payload("Auction not found")

            if not auction.is_pending:
                return invalid_payload("Auction is not available")

            denied = self.identity_guard.authorize_creator(caller, auction.creator, "cancel")
            if denied is not None:
                return Result(error=denied)

            cancelled = auction.cancelled()
            self.storage.auctions.put(cancelled)

        logger.info(f"Auction cancelled: {cancelled.id[:8]}")
        return Result.success(cancelled)

    # =========================================================================
    # Finalization
    # =========================================================================

    def finalize_auction(self, caller: Caller, auction_id: str) -> Result[Transaction]:
        """
        Close a pending auction and settle it to the highest bidder.

        Checks, in order: auction exists, is Pending, caller is the creator,
        is active, has at least one bid, token exists, highest bidder exists.
        A second call on the same auction fails because it is no longer
        Pending.

        Returns:
            The sale Transaction
        """
        with self._lock:
            auction = self.storage.auctions.get(auction_id)
            if auction is None:
                return invalid_payload("Auction not found")

            if not auction.is_pending:
                return invalid_payload("Auction is not available")

            denied = self.identity_guard.authorize_creator(caller, auction.creator, "finalize")
            if denied is not None:
                return Result(error=denied)

            if not auction.is_active:
                return invalid_payload("Auction has already been finalized")

            if not auction.has_bids:
                return invalid_payload("No bids found")

            token = self.storage.tokens.get(auction.token_id)
            if token is None:
                return invalid_payload("NFT not found")

            if not self.storage.artists.contains(auction.highest_bidder_id):
                return invalid_payload("Bidder not found")

            transaction = self.settlement.settle(auction, token)

        logger.info(f"Auction finalized: {auction_id[:8]} tx={transaction.id[:8]}")
        return Result.success(transaction)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_auction(self, auction_id: str) -> Result[Auction]:
        auction = self.storage.auctions.get(auction_id)
        if auction is None:
            return not_found("Auction not found")
        return Result.success(auction)

    def get_transaction(self, transaction_id: str) -> Result[Transaction]:
        transaction = self.storage.transactions.get(transaction_id)
        if transaction is None:
            return not_found("Transaction not found")
        return Result.success(transaction)

    def list_active_auctions(self) -> Result[List[Auction]]:
        auctions = self.storage.auctions.filter(lambda a: a.is_active)
        if not auctions:
            return not_found("No active auctions found")
        return Result.success(auctions)

    def list_completed_auctions(self) -> Result[List[Auction]]:
        auctions = self.storage.auctions.filter(lambda a: a.status == SaleStatus.COMPLETED)
        if not auctions:
            return not_found("No completed auctions found")
        return Result.success(auctions)

    def list_token_auction_history(self, token_id: str) -> Result[List[Auction]]:
        auctions = self.storage.auctions.filter(lambda a: a.token_id == token_id)
        if not auctions:
            return not_found("No auction history found")
        return Result.success(auctions)

    def stats(self) -> dict:
        """Get auction statistics."""
        auctions = self.storage.auctions.values()
        return {
            "auctions": len(auctions),
            "active": sum(1 for a in auctions if a.is_active),
            "completed": sum(1 for a in auctions if a.status == SaleStatus.COMPLETED),
            "cancelled": sum(1 for a in auctions if a.status == SaleStatus.CANCELLED),
            "transactions": len(self.storage.transactions),
            "volume": sum(tx.price for tx in self.storage.transactions.values()),
        }
