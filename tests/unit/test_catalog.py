"""
Tests for the Catalog.

Tests cover:
1. Artist registration rules
2. Artwork registration
3. Token minting and initial ownership
4. Catalog reads
"""

import pytest

from artmarket.core.catalog import Catalog
from artmarket.core.result import MessageKind
from artmarket.core.storage import StorageManager
from artmarket.core.types import SaleStatus

WALLET = "ab" * 32


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def storage():
    return StorageManager(data_dir=None)


@pytest.fixture
def catalog(storage):
    return Catalog(storage)


@pytest.fixture
def artist(catalog):
    return catalog.create_artist_profile("alice", "Alice", WALLET, "alice@example.com").unwrap()


@pytest.fixture
def artwork(catalog, artist):
    return catalog.mint_artwork(artist.id, "Dawn", "Oil on canvas", "https://example.com/dawn.png").unwrap()


# =============================================================================
# Artist Tests
# =============================================================================


class TestArtistRegistration:
    """Tests for create_artist_profile."""

    def test_register_success(self, catalog):
        result = catalog.create_artist_profile("alice", "Alice", WALLET, "alice@example.com")

        assert result.ok
        artist = result.value
        assert artist.owner == "alice"
        assert artist.name == "Alice"
        assert artist.id
        assert artist.created_at

    def test_anonymous_owner(self, catalog):
        artist = catalog.create_artist_profile(None, "Anon", WALLET, "anon@example.com").unwrap()
        assert artist.owner == "anonymous"

    def test_missing_fields(self, catalog):
        result = catalog.create_artist_profile("alice", "", WALLET, "alice@example.com")
        assert result.kind == MessageKind.INVALID_PAYLOAD

    def test_invalid_email(self, catalog):
        result = catalog.create_artist_profile("alice", "Alice", WALLET, "not-an-email")
        assert result.kind == MessageKind.INVALID_PAYLOAD
        assert result.error.detail == "Invalid email address"

    def test_duplicate_email(self, catalog, artist):
        result = catalog.create_artist_profile("bob", "Bob", WALLET, "alice@example.com")
        assert result.kind == MessageKind.INVALID_PAYLOAD
        assert "already exists" in result.error.detail

    def test_duplicate_email_case_insensitive(self, catalog, artist):
        result = catalog.create_artist_profile("bob", "Bob", WALLET, "ALICE@example.com")
        assert result.kind == MessageKind.INVALID_PAYLOAD

    def test_invalid_wallet(self, catalog):
        result = catalog.create_artist_profile("alice", "Alice", "1234", "alice@example.com")
        assert result.kind == MessageKind.INVALID_PAYLOAD
        assert result.error.detail == "Invalid wallet address"

    def test_rejected_profile_not_stored(self, catalog, storage):
        catalog.create_artist_profile("alice", "Alice", "zz", "alice@example.com")
        assert len(storage.artists) == 0

    def test_get_artist(self, catalog, artist):
        assert catalog.get_artist(artist.id).value == artist
        assert catalog.get_artist("missing").kind == MessageKind.NOT_FOUND


# =============================================================================
# Artwork Tests
# =============================================================================


class TestArtworkMinting:
    """Tests for mint_artwork."""

    def test_mint_success(self, catalog, artist):
        result = catalog.mint_artwork(artist.id, "Dusk", "Watercolor", "https://example.com/dusk.png")
        assert result.ok
        assert result.value.artist_id == artist.id

    def test_unknown_artist(self, catalog):
        result = catalog.mint_artwork("ghost", "Dusk", "Watercolor", "https://example.com/dusk.png")
        assert result.kind == MessageKind.INVALID_PAYLOAD
        assert result.error.detail == "Artist not found"

    @pytest.mark.parametrize("field", ["title", "description", "image_url"])
    def test_required_fields(self, catalog, artist, field):
        fields = {
            "artist_id": artist.id,
            "title": "Dusk",
            "description": "Watercolor",
            "image_url": "https://example.com/dusk.png",
        }
        fields[field] = ""
        result = catalog.mint_artwork(**fields)
        assert result.kind == MessageKind.INVALID_PAYLOAD

    def test_get_artwork(self, catalog, artwork):
        assert catalog.get_artwork(artwork.id).value == artwork
        assert catalog.get_artwork("missing").kind == MessageKind.NOT_FOUND


# =============================================================================
# Token Tests
# =============================================================================


class TestTokenMinting:
    """Tests for mint_nft."""

    def test_mint_owned_by_artist(self, catalog, artist, artwork):
        token = catalog.mint_nft(artwork.id, 500).unwrap()

        assert token.owner_ids == (artist.id,)
        assert token.status == SaleStatus.PENDING
        assert token.price == 500

    def test_unknown_artwork(self, catalog):
        result = catalog.mint_nft("missing", 500)
        assert result.kind == MessageKind.INVALID_PAYLOAD
        assert result.error.detail == "Artwork not found"

    def test_zero_price_rejected(self, catalog, artwork):
        assert catalog.mint_nft(artwork.id, 0).kind == MessageKind.INVALID_PAYLOAD

    def test_artist_derived_from_artwork(self, catalog, storage, artwork):
        """Artist comes from the stored artwork; a dangling reference is rejected."""
        storage.artists._items.clear()
        result = catalog.mint_nft(artwork.id, 500)
        assert result.kind == MessageKind.INVALID_PAYLOAD
        assert result.error.detail == "Artist not found"

    def test_get_token(self, catalog, artwork):
        token = catalog.mint_nft(artwork.id, 500).unwrap()
        assert catalog.get_token(token.id).value == token
        assert catalog.get_token("missing").kind == MessageKind.NOT_FOUND

    def test_list_artist_tokens(self, catalog, artist, artwork):
        first = catalog.mint_nft(artwork.id, 100).unwrap()
        second = catalog.mint_nft(artwork.id, 200).unwrap()

        tokens = catalog.list_artist_tokens(artist.id).unwrap()

        assert [t.id for t in tokens] == [first.id, second.id]

    def test_list_artist_tokens_empty(self, catalog, artist):
        result = catalog.list_artist_tokens(artist.id)
        assert result.kind == MessageKind.NOT_FOUND
        assert result.error.detail == "No NFTs found"
