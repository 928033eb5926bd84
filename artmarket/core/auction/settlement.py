"""
Settlement - ownership transfer for a finalized auction.

Only called by the auction engine after every finalize precondition
has passed, so there is nothing left to validate here.
"""

from typing import TYPE_CHECKING

from artmarket.core.auction.models import Auction, Transaction
from artmarket.core.catalog.models import Token
from artmarket.utils.logger import get_logger

if TYPE_CHECKING:
    from artmarket.core.storage import StorageManager

logger = get_logger("settlement")


class Settlement:
    """Transfers a token to the winning bidder and records the sale."""

    def __init__(self, storage: "StorageManager"):
        self.storage = storage

    def settle(self, auction: Auction, token: Token) -> Transaction:
        """
        Settle a winning auction.

        1. Replace all token holders with the highest bidder, mark Completed
        2. Create the Transaction (buyer = bidder, seller = creator)
        3. Mark the auction Completed and inactive
        4. Persist all three in one write

        Returns:
            The new Transaction
        """
        settled_token = token.transfer_to(auction.highest_bidder_id)

        transaction = Transaction(
            token_id=token.id,
            buyer_id=auction.highest_bidder_id,
            seller_id=auction.creator,
            price=auction.highest_bid,
        )

        closed_auction = auction.completed()

        self.storage.persist_settlement(settled_token, transaction, closed_auction)

        logger.info(
            f"Settled auction {auction.id[:8]}: token={token.id[:8]} "
            f"buyer={transaction.buyer_id[:8]} price={transaction.price}"
        )
        return transaction
