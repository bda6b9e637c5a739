"""Typed-data building blocks — domain, message schema and signature request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from eth_account.messages import encode_typed_data
from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import AsyncWeb3, Web3

EIP712_VERSION = "1"

# Field order of the EIP712Domain struct used by every NanoToken deployment
EIP712_DOMAIN_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
)


class TypedDataDomain(BaseModel):
    """EIP-712 domain scoping a signature to one contract on one chain."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = EIP712_VERSION
    chain_id: int = Field(..., ge=0)
    verifying_contract: str

    @field_validator("verifying_contract")
    @classmethod
    def checksum_contract(cls, v: str) -> str:
        return AsyncWeb3.to_checksum_address(v)

    def to_eip712(self) -> dict[str, Any]:
        """Return the domain keyed the way wallets and eth_account expect."""
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }


@dataclass(frozen=True)
class MessageType:
    """Schema of one signable operation.

    ``fields`` is ordered: the order determines the EIP-712 type string and
    therefore the struct hash the on-chain verifier recomputes.
    """

    primary_type: str
    fields: tuple[tuple[str, str], ...]
    nonce_accessor: str
    scope_field: str

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def eip712_types(self) -> dict[str, list[dict[str, str]]]:
        """Return the ``types`` mapping for this primary type alone."""
        return {
            self.primary_type: [
                {"name": name, "type": type_} for name, type_ in self.fields
            ]
        }

    def build_message(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Arrange ``values`` in schema order.

        Raises
        ------
        ValueError
            If a schema field is missing or an unknown field is supplied.
        """
        missing = [name for name in self.field_names if name not in values]
        if missing:
            raise ValueError(
                f"{self.primary_type} message missing fields: {', '.join(missing)}"
            )
        extra = sorted(set(values) - set(self.field_names))
        if extra:
            raise ValueError(
                f"{self.primary_type} message has unknown fields: {', '.join(extra)}"
            )
        return {name: values[name] for name in self.field_names}


@dataclass(frozen=True)
class SignatureRequest:
    """Domain + schema + message, ready to hand to a signer."""

    domain: TypedDataDomain
    message_type: MessageType
    message: dict[str, Any] = field(default_factory=dict)

    @property
    def primary_type(self) -> str:
        return self.message_type.primary_type

    @property
    def types(self) -> dict[str, list[dict[str, str]]]:
        return self.message_type.eip712_types()

    def to_typed_data(self) -> dict[str, Any]:
        """Full EIP-712 payload (``eth_signTypedData_v4`` shape)."""
        return {
            "types": {
                "EIP712Domain": [
                    {"name": name, "type": type_}
                    for name, type_ in EIP712_DOMAIN_FIELDS
                ],
                **self.types,
            },
            "primaryType": self.primary_type,
            "domain": self.domain.to_eip712(),
            "message": dict(self.message),
        }

    def digest(self) -> bytes:
        """Return the 32-byte EIP-712 hash a signature over this request binds."""
        signable = encode_typed_data(full_message=self.to_typed_data())
        return bytes(
            Web3.keccak(b"\x19" + signable.version + signable.header + signable.body)
        )
