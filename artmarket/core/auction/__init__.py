"""
ArtMarket Auction Module.

This module provides the English auction system:
- Auction and Transaction records
- Bid admission rule
- Auction lifecycle engine
- Settlement of finalized auctions
"""

from artmarket.core.auction.models import Auction, Transaction
from artmarket.core.auction.bid_validator import (
    validate_bid,
    REASON_BIDDER_UNKNOWN,
    REASON_AUCTION_UNKNOWN,
    REASON_AUCTION_CLOSED,
    REASON_BID_TOO_LOW,
)
from artmarket.core.auction.settlement import Settlement
from artmarket.core.auction.engine import AuctionEngine

__all__ = [
    # Records
    "Auction",
    "Transaction",
    # Bid rule
    "validate_bid",
    "REASON_BIDDER_UNKNOWN",
    "REASON_AUCTION_UNKNOWN",
    "REASON_AUCTION_CLOSED",
    "REASON_BID_TOO_LOW",
    # Lifecycle
    "Settlement",
    "AuctionEngine",
]
