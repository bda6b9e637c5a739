"""Signature results and owner approvals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class SignatureResult:
    """Result of signing one authorization."""

    signature: bytes
    nonce: int
    deadline: int


@dataclass(frozen=True)
class Approval:
    """One owner's signature over a multisig message."""

    owner: str
    signature: bytes


@dataclass(frozen=True, kw_only=True)
class OwnerSignature(SignatureResult):
    """Multisig signing result; carries the signer so approvals can be sorted."""

    owner: str

    @property
    def approval(self) -> Approval:
        return Approval(owner=self.owner, signature=self.signature)


@dataclass(frozen=True)
class OrderedApprovalSet:
    """Approvals in strictly ascending owner-address order, owners unique.

    Build through ``signing.aggregator.order_approvals``; the constructor
    does not re-check the invariant.
    """

    approvals: tuple[Approval, ...] = ()

    @property
    def owners(self) -> list[str]:
        return [a.owner for a in self.approvals]

    @property
    def signatures(self) -> list[bytes]:
        return [a.signature for a in self.approvals]

    def __iter__(self) -> Iterator[Approval]:
        return iter(self.approvals)

    def __len__(self) -> int:
        return len(self.approvals)
