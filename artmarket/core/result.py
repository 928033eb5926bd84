"""
Result and Message types returned by every marketplace operation.

Operations never raise for business failures. They return a ``Result``
holding either the requested value or a ``Message`` tagged with one of a
closed set of kinds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class MessageKind(str, Enum):
    """Closed set of message tags."""
    SUCCESS = "Success"                     # reserved
    ERROR = "Error"                         # reserved
    NOT_FOUND = "NotFound"                  # read miss
    INVALID_PAYLOAD = "InvalidPayload"      # bad input or illegal transition
    UNAUTHORIZED = "Unauthorized"           # caller is not the creator
    PAYMENT_FAILED = "PaymentFailed"        # reserved
    PAYMENT_COMPLETED = "PaymentCompleted"  # reserved


@dataclass(frozen=True)
class Message:
    kind: MessageKind
    detail: str

    def to_dict(self) -> dict:
        return {self.kind.value: self.detail}

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}"


class ResultError(Exception):
    """Raised when unwrapping a failed Result."""

    def __init__(self, message: Message):
        super().__init__(str(message))
        self.message = message


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of an operation.

    Exactly one of ``value`` and ``error`` is meaningful: ``error`` is None
    on success.
    """
    value: Optional[T] = None
    error: Optional[Message] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[MessageKind]:
        return self.error.kind if self.error else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise ResultError(self.error)
        return self.value

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: MessageKind, detail: str) -> "Result[T]":
        return cls(error=Message(kind, detail))


def not_found(detail: str) -> Result:
    return Result.failure(MessageKind.NOT_FOUND, detail)


def invalid_payload(detail: str) -> Result:
    return Result.failure(MessageKind.INVALID_PAYLOAD, detail)


def unauthorized(detail: str) -> Result:
    return Result.failure(MessageKind.UNAUTHORIZED, detail)
