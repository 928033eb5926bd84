"""
Identity Guard - resolves the calling principal for authorization checks.

The caller is always passed explicitly into an operation. The guard turns
whatever the transport supplies (an Identity, a principal string or
nothing) into a stable, comparable Identity and checks it against the
creator of an auction.
"""

from dataclasses import dataclass
from typing import Optional, Union

from artmarket.core.result import Message, MessageKind
from artmarket.utils.logger import get_logger

logger = get_logger("identity")

ANONYMOUS_PRINCIPAL = "anonymous"


@dataclass(frozen=True)
class Identity:
    """An authenticated actor, compared by principal."""
    principal: str

    def __str__(self) -> str:
        return self.principal


ANONYMOUS = Identity(ANONYMOUS_PRINCIPAL)

Caller = Union[Identity, str, None]


class IdentityGuard:
    """Resolves callers and enforces creator-only operations."""

    def resolve(self, caller: Caller) -> Identity:
        """
        Resolve the caller of the current operation.

        Args:
            caller: Identity, principal text, or None for an anonymous call

        Returns:
            Identity (ANONYMOUS when absent or blank)
        """
        if isinstance(caller, Identity):
            return caller
        if caller is None or not str(caller).strip():
            return ANONYMOUS
        return Identity(str(caller).strip())

    def authorize_creator(self, caller: Caller, creator: str, action: str) -> Optional[Message]:
        """
        Check that the caller is the creator of a resource.

        Returns:
            None when authorized, otherwise an Unauthorized message
        """
        identity = self.resolve(caller)
        if identity.principal != creator:
            logger.warning(f"Unauthorized {action}: caller={identity} creator={creator}")
            return Message(MessageKind.UNAUTHORIZED, f"Only the creator can {action} the auction")
        return None
