"""
Request payloads accepted at the marketplace boundary.

Pydantic enforces presence and strict types; the bounds on every field come
from the ``(is_valid, error_message)`` rules in ``artmarket.utils.validation``
so both layers share one definition. Format rules with dedicated rejection
messages (email shape, wallet address) are applied by the catalog.
"""

from typing import Annotated, Any, Callable, Optional, Tuple, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Strict, ValidationError, ValidationInfo

from artmarket.utils.validation import (
    MAX_NAME_LENGTH,
    MAX_STRING_LENGTH,
    MAX_URL_LENGTH,
    validate_amount,
    validate_identifier,
    validate_price,
    validate_string,
)

P = TypeVar("P", bound=BaseModel)


def _rule(validator: Callable[..., Tuple[bool, str]], *args: Any) -> AfterValidator:
    """Adapt a ``(is_valid, error)`` validator to a pydantic field validator."""

    def check(value: Any, info: ValidationInfo) -> Any:
        valid, err = validator(value, info.field_name or "value", *args)
        if not valid:
            raise ValueError(err)
        return value

    return AfterValidator(check)


Identifier = Annotated[str, _rule(validate_identifier)]
Name = Annotated[str, _rule(validate_string, MAX_NAME_LENGTH)]
Text = Annotated[str, _rule(validate_string, MAX_STRING_LENGTH)]
Url = Annotated[str, _rule(validate_string, MAX_URL_LENGTH)]
Price = Annotated[int, Strict(), _rule(validate_price)]
Amount = Annotated[int, Strict(), _rule(validate_amount)]


class Payload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid", frozen=True)


class ArtistPayload(Payload):
    name: Name
    wallet_address: Name
    email: Name


class ArtworkPayload(Payload):
    artist_id: Identifier
    title: Name
    description: Text
    image_url: Url


class TokenPayload(Payload):
    artwork_id: Identifier
    price: Price


class AuctionPayload(Payload):
    token_id: Identifier


class PlaceBidPayload(Payload):
    auction_id: Identifier
    bidder_id: Identifier
    amount: Amount


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into one line: 'field: reason; ...'."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "payload"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_payload(model: Type[P], **data) -> Tuple[Optional[P], str]:
    """
    Build a payload model from raw fields.

    Returns:
        (payload, error_message) - payload is None on failure
    """
    try:
        return model(**data), ""
    except ValidationError as exc:
        return None, describe_validation_error(exc)
