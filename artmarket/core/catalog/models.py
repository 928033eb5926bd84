"""
Catalog entities - artists, artworks and ownership tokens.

All entities are immutable; updates produce a new value via
``dataclasses.replace`` which is then written back to its repository.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Iterable, Tuple

from artmarket.core.types import SaleStatus, new_id, utc_now


@dataclass(frozen=True)
class Artist:
    """
    A registered artist profile.

    Attributes:
        id: Unique identifier
        owner: Principal of the identity that registered the profile
        name: Display name
        wallet_address: 64-character hex wallet address
        email: Contact email, unique among artists
        created_at: ISO-8601 creation timestamp
    """
    name: str
    wallet_address: str
    email: str
    owner: str
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Artist":
        return cls(**data)


@dataclass(frozen=True)
class Artwork:
    """A registered artwork, attributed to exactly one artist."""
    artist_id: str
    title: str
    description: str
    image_url: str
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Artwork":
        return cls(**data)


def _unique(ids: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(ids))


@dataclass(frozen=True)
class Token:
    """
    Ownership token (NFT) over one artwork.

    ``owner_ids`` is an ordered, duplicate-free set of holders; several
    holders model fractional ownership until the token is sold.
    """
    artwork_id: str
    owner_ids: Tuple[str, ...]
    price: int
    status: SaleStatus = SaleStatus.PENDING
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now)

    def __post_init__(self):
        object.__setattr__(self, "owner_ids", _unique(self.owner_ids))
        object.__setattr__(self, "status", SaleStatus(self.status))

    def is_owned_by(self, owner_id: str) -> bool:
        return owner_id in self.owner_ids

    def transfer_to(self, new_owner_id: str) -> "Token":
        """Replace all holders with a single buyer and mark the token sold."""
        return replace(self, owner_ids=(new_owner_id,), status=SaleStatus.COMPLETED)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["owner_ids"] = list(self.owner_ids)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        data = dict(data)
        data["owner_ids"] = tuple(data.get("owner_ids", ()))
        return cls(**data)
