"""
Bid Validator - admission rule for English auction bids.

Pure function of (auction, bidder, amount). Reasons are reported in a
fixed order so the same input always yields the same rejection:

1. bidder unknown
2. auction unknown
3. auction not pending
4. amount not strictly greater than the current highest bid
"""

from typing import Optional, Tuple

from artmarket.core.auction.models import Auction
from artmarket.core.catalog.models import Artist

REASON_BIDDER_UNKNOWN = "Artist not found"
REASON_AUCTION_UNKNOWN = "Auction not found"
REASON_AUCTION_CLOSED = "Auction is not available"
REASON_BID_TOO_LOW = "Bid amount must be higher than the current highest bid"


def validate_bid(
    auction: Optional[Auction],
    bidder: Optional[Artist],
    amount: int,
) -> Tuple[bool, str]:
    """
    Check a proposed bid against the current auction state.

    Args:
        auction: Current auction, or None if it does not exist
        bidder: Bidding artist, or None if unknown
        amount: Offered amount

    Returns:
        (admitted, reason) - reason is "" when admitted
    """
    if bidder is None:
        return False, REASON_BIDDER_UNKNOWN

    if auction is None:
        return False, REASON_AUCTION_UNKNOWN

    if not auction.is_pending:
        return False, REASON_AUCTION_CLOSED

    # Strict: ties never displace the current leader
    if amount <= auction.highest_bid:
        return False, REASON_BID_TOO_LOW

    return True, ""
