"""Local failure kinds raised by the signing and relay layers.

Anything raised by a collaborator (RPC reads, chain id lookups, wallet
signing, transaction submission) is *not* wrapped here; it propagates to
the caller unchanged.
"""

from __future__ import annotations


class SignatureError(Exception):
    """Base class for errors raised locally before any on-chain call."""


class MissingIdentityError(SignatureError):
    """Raised when a signer or relayer has no bound account.

    Raised before any read or write is attempted.
    """

    def __init__(self, message: str, role: str | None = None) -> None:
        super().__init__(message)
        self.role = role


class DuplicateOwnerError(SignatureError):
    """Raised when two approvals resolve to the same owner address."""

    def __init__(self, owner: str) -> None:
        super().__init__(f"duplicate owner in approvals: {owner}")
        self.owner = owner
