"""
Tests for input validation and request payloads.

Tests cover:
1. Primitive validators (string, integer, hex)
2. Email and wallet address rules
3. Pydantic payload parsing
"""

import pytest

from artmarket.core.payloads import (
    ArtistPayload,
    PlaceBidPayload,
    TokenPayload,
    parse_payload,
)
from artmarket.utils.validation import (
    MAX_AMOUNT,
    validate_amount,
    validate_email,
    validate_hex_string,
    validate_identifier,
    validate_integer,
    validate_price,
    validate_string,
    validate_wallet_address,
)


class TestPrimitiveValidators:
    """Tests for string / integer / hex validators."""

    def test_string_ok(self):
        assert validate_string("hello", "name") == (True, "")

    def test_string_blank_rejected(self):
        valid, err = validate_string("   ", "name")
        assert not valid
        assert "required" in err

    def test_string_wrong_type(self):
        valid, err = validate_string(42, "name")
        assert not valid
        assert "must be str" in err

    def test_string_too_long(self):
        valid, err = validate_string("x" * 11, "name", max_length=10)
        assert not valid
        assert "max length" in err

    def test_integer_rejects_bool(self):
        """bool is an int subclass but never a valid amount."""
        valid, _ = validate_integer(True, "amount")
        assert not valid

    def test_integer_bounds(self):
        assert validate_integer(5, "n", 0, 10)[0]
        assert not validate_integer(-1, "n", 0, 10)[0]
        assert not validate_integer(11, "n", 0, 10)[0]

    def test_amount_allows_zero(self):
        assert validate_amount(0)[0]
        assert not validate_amount(MAX_AMOUNT + 1)[0]

    def test_price_must_be_positive(self):
        assert not validate_price(0)[0]
        assert validate_price(1)[0]

    def test_identifier(self):
        assert validate_identifier("abc", "id")[0]
        assert not validate_identifier("  ", "id")[0]

    def test_hex_string(self):
        assert validate_hex_string("00ff", "h", 4)[0]
        assert not validate_hex_string("zz", "h")[0]
        assert not validate_hex_string("00ff", "h", 6)[0]


class TestEmail:
    """Tests for email shape."""

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@example.org", "x+y@sub.domain.io"])
    def test_valid_emails(self, email):
        assert validate_email(email) == (True, "")

    @pytest.mark.parametrize("email", ["plain", "a@b", "@b.com", "a b@c.com", "a@b .com", ""])
    def test_invalid_emails(self, email):
        valid, _ = validate_email(email)
        assert not valid


class TestWalletAddress:
    """Tests for 64-char hex wallet addresses."""

    def test_valid_lower_and_upper(self):
        assert validate_wallet_address("ab" * 32)[0]
        assert validate_wallet_address("AB" * 32)[0]

    def test_wrong_length(self):
        valid, err = validate_wallet_address("a" * 63)
        assert not valid
        assert err == "Invalid wallet address"

    def test_non_hex(self):
        assert not validate_wallet_address("g" * 64)[0]

    def test_prefixed_rejected(self):
        assert not validate_wallet_address("0x" + "a" * 62)[0]


class TestPayloads:
    """Tests for pydantic request payloads."""

    def test_artist_payload_strips_whitespace(self):
        payload, err = parse_payload(
            ArtistPayload, name="  Ada ", wallet_address="a" * 64, email="ada@example.com"
        )
        assert err == ""
        assert payload.name == "Ada"

    def test_artist_payload_missing_field(self):
        payload, err = parse_payload(ArtistPayload, name="Ada", wallet_address="a" * 64, email="")
        assert payload is None
        assert "email" in err

    def test_token_payload_requires_positive_price(self):
        payload, err = parse_payload(TokenPayload, artwork_id="w1", price=0)
        assert payload is None
        assert "price" in err

    def test_token_payload_rejects_string_price(self):
        payload, _ = parse_payload(TokenPayload, artwork_id="w1", price="10")
        assert payload is None

    def test_bid_payload_accepts_zero(self):
        payload, err = parse_payload(PlaceBidPayload, auction_id="a", bidder_id="b", amount=0)
        assert err == ""
        assert payload.amount == 0

    def test_bid_payload_rejects_negative(self):
        payload, err = parse_payload(PlaceBidPayload, auction_id="a", bidder_id="b", amount=-5)
        assert payload is None
        assert "amount" in err

    def test_bid_payload_rejects_float(self):
        payload, _ = parse_payload(PlaceBidPayload, auction_id="a", bidder_id="b", amount=1.5)
        assert payload is None

    def test_bid_payload_rejects_bool(self):
        payload, _ = parse_payload(PlaceBidPayload, auction_id="a", bidder_id="b", amount=True)
        assert payload is None

    def test_bid_payload_rejects_amount_above_nat64(self):
        payload, err = parse_payload(
            PlaceBidPayload, auction_id="a", bidder_id="b", amount=MAX_AMOUNT + 1
        )
        assert payload is None
        assert f"amount must be <= {MAX_AMOUNT}" in err

    @pytest.mark.parametrize("field", ["auction_id", "bidder_id"])
    def test_bid_payload_requires_ids(self, field):
        data = {"auction_id": "a", "bidder_id": "b", "amount": 1}
        data[field] = ""
        payload, err = parse_payload(PlaceBidPayload, **data)
        assert payload is None
        assert f"{field} is required" in err

    def test_payload_length_limits_shared_with_validators(self):
        """Payload bounds are the same rules the validators enforce."""
        payload, err = parse_payload(ArtistPayload, name="x" * 257, wallet_address="a" * 64, email="a@b.co")
        assert payload is None
        assert "name exceeds max length 256" in err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
