"""Message type registry — the only place NanoToken signing schemas are declared.

Field order is part of the wire contract: it fixes the EIP-712 type string
and therefore the struct hash the contract recomputes.  Builders, digests
and wallets all read these tables; nothing re-declares them.
"""

from __future__ import annotations

from models.typed_data import EIP712_DOMAIN_FIELDS, EIP712_VERSION, MessageType

# ── On-chain nonce counters ─────────────────────────────────────────

ACCOUNT_NONCES = "nonces"
SESSION_KEY_NONCES = "sessionKeyNonces"
MULTISIG_NONCES = "multiSigNonces"

# ── Schemas ─────────────────────────────────────────────────────────

TRANSFER_WITH_SIG = MessageType(
    primary_type="TransferWithSig",
    fields=(
        ("from", "address"),
        ("to", "address"),
        ("amount", "uint256"),
        ("objectId", "uint256"),
        ("objectData", "bytes"),
        ("nonce", "uint256"),
        ("deadline", "uint256"),
    ),
    nonce_accessor=ACCOUNT_NONCES,
    scope_field="from",
)

SET_SESSION_KEY_WITH_SIG = MessageType(
    primary_type="SetSessionKeyWithSig",
    fields=(
        ("account", "address"),
        ("sessionKey", "address"),
        ("enabled", "bool"),
        ("nonce", "uint256"),
        ("deadline", "uint256"),
    ),
    nonce_accessor=SESSION_KEY_NONCES,
    scope_field="account",
)

MULTISIG_TRANSFER = MessageType(
    primary_type="MultiSigTransfer",
    fields=(
        ("accountId", "uint256"),
        ("to", "address"),
        ("amount", "uint256"),
        ("objectId", "uint256"),
        ("objectData", "bytes"),
        ("nonce", "uint256"),
        ("deadline", "uint256"),
    ),
    nonce_accessor=MULTISIG_NONCES,
    scope_field="accountId",
)

MULTISIG_UPDATE = MessageType(
    primary_type="MultiSigUpdate",
    fields=(
        ("accountId", "uint256"),
        ("ownersHash", "bytes32"),
        ("threshold", "uint256"),
        ("nonce", "uint256"),
        ("deadline", "uint256"),
    ),
    nonce_accessor=MULTISIG_NONCES,
    scope_field="accountId",
)

MESSAGE_TYPES: dict[str, MessageType] = {
    mt.primary_type: mt
    for mt in (
        TRANSFER_WITH_SIG,
        SET_SESSION_KEY_WITH_SIG,
        MULTISIG_TRANSFER,
        MULTISIG_UPDATE,
    )
}


def get_message_type(primary_type: str) -> MessageType:
    """Look up a schema by its primary type name.

    Raises
    ------
    KeyError
        If ``primary_type`` is not a NanoToken signing schema.
    """
    try:
        return MESSAGE_TYPES[primary_type]
    except KeyError:
        raise KeyError(f"unknown message type: {primary_type}") from None


__all__ = [
    "ACCOUNT_NONCES",
    "EIP712_DOMAIN_FIELDS",
    "EIP712_VERSION",
    "MESSAGE_TYPES",
    "MULTISIG_NONCES",
    "MULTISIG_TRANSFER",
    "MULTISIG_UPDATE",
    "SESSION_KEY_NONCES",
    "SET_SESSION_KEY_WITH_SIG",
    "TRANSFER_WITH_SIG",
    "get_message_type",
]
