"""
Auction entities - the English auction record and the sale transaction.
"""

from dataclasses import asdict, dataclass, field, replace

from artmarket.core.types import SaleStatus, new_id, utc_now


@dataclass(frozen=True)
class Auction:
    """
    An English auction for one token.

    State machine:
        Pending (active) -> Completed (inactive)
        Pending (active) -> Cancelled (inactive)

    Attributes:
        token_id: Token being sold
        creator: Principal that created the auction; sole actor allowed
            to cancel or finalize it
        highest_bid: Current leading amount (0 = no bids yet)
        highest_bidder_id: Artist id of the current leader ("" = none)
        status: Lifecycle status
        is_active: False once the auction reached a terminal state
    """
    token_id: str
    creator: str
    highest_bid: int = 0
    highest_bidder_id: str = ""
    status: SaleStatus = SaleStatus.PENDING
    is_active: bool = True
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now)

    def __post_init__(self):
        object.__setattr__(self, "status", SaleStatus(self.status))

    @property
    def is_pending(self) -> bool:
        return self.status == SaleStatus.PENDING

    @property
    def has_bids(self) -> bool:
        return self.highest_bid > 0

    def with_bid(self, bidder_id: str, amount: int) -> "Auction":
        return replace(self, highest_bid=amount, highest_bidder_id=bidder_id)

    def cancelled(self) -> "Auction":
        return replace(self, status=SaleStatus.CANCELLED, is_active=False)

    def completed(self) -> "Auction":
        return replace(self, status=SaleStatus.COMPLETED, is_active=False)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Auction":
        return cls(**data)


@dataclass(frozen=True)
class Transaction:
    """Immutable record of a settled sale. Created once per finalized auction."""
    token_id: str
    buyer_id: str
    seller_id: str
    price: int
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(**data)
