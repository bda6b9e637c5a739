"""Approval aggregation for multi-owner accounts.

Two distinct orderings live here and must not be mixed up:

- approval sets are sorted ascending by owner address, because the
  contract matches signatures against its stored owners in that order;
- the owners hash commits to a *proposed* owner list in the order the
  caller gives it.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from hexbytes import HexBytes
from web3 import AsyncWeb3, Web3

from core.errors import DuplicateOwnerError
from models.approval import Approval, OrderedApprovalSet


class _HasOwnerSignature(Protocol):
    owner: str
    signature: bytes


def order_approvals(approvals: Iterable[_HasOwnerSignature]) -> OrderedApprovalSet:
    """Canonicalize, de-duplicate and sort approvals by owner address.

    Accepts ``Approval``, ``OwnerSignature`` or anything exposing ``owner``
    and ``signature``.  The result is identical for every permutation of
    the same input.

    Raises
    ------
    DuplicateOwnerError
        If two approvals name the same owner (case-insensitive).
    """
    seen: set[str] = set()
    normalized: list[Approval] = []
    for item in approvals:
        owner = AsyncWeb3.to_checksum_address(item.owner)
        key = owner.lower()
        if key in seen:
            raise DuplicateOwnerError(owner)
        seen.add(key)
        normalized.append(Approval(owner=owner, signature=bytes(HexBytes(item.signature))))

    normalized.sort(key=lambda a: int(a.owner, 16))
    return OrderedApprovalSet(approvals=tuple(normalized))


def extract_signatures(ordered: OrderedApprovalSet) -> list[bytes]:
    """Signatures in approval order — exactly what goes on-chain."""
    return [a.signature for a in ordered]


def compute_owners_hash(owners: Sequence[str]) -> bytes:
    """keccak256 over the tightly packed owner addresses, in caller order.

    Raises
    ------
    TypeError
        If ``owners`` is a set, whose iteration order is arbitrary.
    """
    if isinstance(owners, (set, frozenset)):
        raise TypeError("owners must be an ordered sequence, not a set")

    normalized = [AsyncWeb3.to_checksum_address(owner) for owner in owners]
    return bytes(Web3.solidity_keccak(["address"] * len(normalized), normalized))
