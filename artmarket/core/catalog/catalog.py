"""
Catalog - registration of artists, artworks and ownership tokens.

This module provides:
- Artist profile registration (email shape and uniqueness, wallet format)
- Artwork registration against an existing artist
- Token minting for an existing artwork, owned initially by its artist
- Read access to catalog entities
"""

import threading
from typing import TYPE_CHECKING, List, Optional

from artmarket.core.catalog.models import Artist, Artwork, Token
from artmarket.core.identity import Caller, IdentityGuard
from artmarket.core.payloads import ArtistPayload, ArtworkPayload, TokenPayload, parse_payload
from artmarket.core.result import Result, invalid_payload, not_found
from artmarket.utils.logger import get_logger
from artmarket.utils.validation import validate_email, validate_wallet_address

if TYPE_CHECKING:
    from artmarket.core.storage import StorageManager

logger = get_logger("catalog")


class Catalog:
    """
    Registry of artists, artworks and tokens.

    Holds no state of its own; every call reads the repositories.
    """

    def __init__(
        self,
        storage: "StorageManager",
        identity_guard: Optional[IdentityGuard] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self.storage = storage
        self.identity_guard = identity_guard or IdentityGuard()
        self._lock = lock or threading.RLock()

    # =========================================================================
    # Artists
    # =========================================================================

    def _email_taken(self, email: str) -> bool:
        wanted = email.lower()
        return any(artist.email.lower() == wanted for artist in self.storage.artists.values())

    def create_artist_profile(
        self,
        caller: Caller,
        name: str,
        wallet_address: str,
        email: str,
    ) -> Result[Artist]:
        """
        Register a new artist profile owned by the caller.

        Checks, in order: required fields, email format, email uniqueness,
        wallet address format.
        """
        payload, err = parse_payload(
            ArtistPayload, name=name, wallet_address=wallet_address, email=email
        )
        if payload is None:
            return invalid_payload(f"Missing or malformed fields: {err}")

        valid, err = validate_email(payload.email)
        if not valid:
            return invalid_payload(err)

        with self._lock:
            if self._email_taken(payload.email):
                return invalid_payload("Email address already exists")

            valid, err = validate_wallet_address(payload.wallet_address)
            if not valid:
                return invalid_payload(err)

            artist = Artist(
                name=payload.name,
                wallet_address=payload.wallet_address,
                email=payload.email,
                owner=self.identity_guard.resolve(caller).principal,
            )
            self.storage.artists.put(artist)

        logger.info(f"Artist registered: {artist.id[:8]} owner={artist.owner}")
        return Result.success(artist)

    def get_artist(self, artist_id: str) -> Result[Artist]:
        artist = self.storage.artists.get(artist_id)
        if artist is None:
            return not_found("Artist not found")
        return Result.success(artist)

    # =========================================================================
    # Artworks
    # =========================================================================

    def mint_artwork(
        self,
        artist_id: str,
        title: str,
        description: str,
        image_url: str,
    ) -> Result[Artwork]:
        """Register an artwork for an existing artist."""
        payload, err = parse_payload(
            ArtworkPayload,
            artist_id=artist_id,
            title=title,
            description=description,
            image_url=image_url,
        )
        if payload is None:
            return invalid_payload(f"All fields are required: {err}")

        with self._lock:
            if not self.storage.artists.contains(payload.artist_id):
                return invalid_payload("Artist not found")

            artwork = Artwork(
                artist_id=payload.artist_id,
                title=payload.title,
                description=payload.description,
                image_url=payload.image_url,
            )
            self.storage.artworks.put(artwork)

        logger.info(f"Artwork minted: {artwork.id[:8]} artist={artwork.artist_id[:8]}")
        return Result.success(artwork)

    def get_artwork(self, artwork_id: str) -> Result[Artwork]:
        artwork = self.storage.artworks.get(artwork_id)
        if artwork is None:
            return not_found("Artwork not found")
        return Result.success(artwork)

    # =========================================================================
    # Tokens
    # =========================================================================

    def mint_nft(self, artwork_id: str, price: int) -> Result[Token]:
        """
        Mint an ownership token for an artwork.

        The initial holder is the artist recorded on the artwork, which
        must still exist.
        """
        payload, err = parse_payload(TokenPayload, artwork_id=artwork_id, price=price)
        if payload is None:
            return invalid_payload(f"All fields are required: {err}")

        with self._lock:
            artwork = self.storage.artworks.get(payload.artwork_id)
            if artwork is None:
                return invalid_payload("Artwork not found")

            artist = self.storage.artists.get(artwork.artist_id)
            if artist is None:
                return invalid_payload("Artist not found")

            token = Token(
                artwork_id=artwork.id,
                owner_ids=(artist.id,),
                price=payload.price,
            )
            self.storage.tokens.put(token)

        logger.info(f"Token minted: {token.id[:8]} artwork={artwork.id[:8]} price={token.price}")
        return Result.success(token)

    def get_token(self, token_id: str) -> Result[Token]:
        token = self.storage.tokens.get(token_id)
        if token is None:
            return not_found("NFT not found")
        return Result.success(token)

    def list_artist_tokens(self, artist_id: str) -> Result[List[Token]]:
        """Tokens currently held (wholly or in part) by an artist."""
        tokens = self.storage.tokens.filter(lambda token: token.is_owned_by(artist_id))
        if not tokens:
            return not_found("No NFTs found")
        return Result.success(tokens)
