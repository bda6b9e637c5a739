"""Per-operation parameters — required fields, defaults and canonical forms.

``nonce`` and ``deadline`` are optional everywhere: ``None`` means "read the
on-chain counter" and "now + configured TTL" respectively.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from web3 import AsyncWeb3


def _checksum(v: str) -> str:
    return AsyncWeb3.to_checksum_address(v)


def _coerce_object_data(v: Any) -> Any:
    if isinstance(v, str):
        if not v.startswith("0x"):
            raise ValueError("object_data string must be 0x-prefixed hex")
        return bytes.fromhex(v[2:])
    if isinstance(v, bytearray):
        return bytes(v)
    return v


ChecksumAddress = Annotated[str, AfterValidator(_checksum)]
ObjectData = Annotated[bytes, BeforeValidator(_coerce_object_data)]


class _OperationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    nonce: Optional[int] = Field(default=None, ge=0)
    deadline: Optional[int] = Field(default=None, ge=0)


class TransferWithSigParams(_OperationParams):
    """Gasless transfer of ``amount`` (optionally carrying an object) from ``from_address``."""

    from_address: ChecksumAddress
    to: ChecksumAddress
    amount: int = Field(..., ge=0)
    object_id: int = Field(default=0, ge=0)
    object_data: ObjectData = b""

    def message_values(self) -> dict[str, Any]:
        return {
            "from": self.from_address,
            "to": self.to,
            "amount": self.amount,
            "objectId": self.object_id,
            "objectData": self.object_data,
        }


class SessionKeyParams(_OperationParams):
    """Enable or disable ``session_key`` for ``account``."""

    account: ChecksumAddress
    session_key: ChecksumAddress
    enabled: bool

    def message_values(self) -> dict[str, Any]:
        return {
            "account": self.account,
            "sessionKey": self.session_key,
            "enabled": self.enabled,
        }


class MultiSigTransferParams(_OperationParams):
    """Transfer out of multisig account ``account_id``."""

    account_id: int = Field(..., ge=0)
    to: ChecksumAddress
    amount: int = Field(..., ge=0)
    object_id: int = Field(default=0, ge=0)
    object_data: ObjectData = b""

    def message_values(self) -> dict[str, Any]:
        return {
            "accountId": self.account_id,
            "to": self.to,
            "amount": self.amount,
            "objectId": self.object_id,
            "objectData": self.object_data,
        }


class MultiSigUpdateParams(_OperationParams):
    """Replace the owner set and threshold of multisig account ``account_id``.

    ``owners`` is the proposed owner set in the order the contract will
    store it; that order is hashed into the signed message.
    """

    account_id: int = Field(..., ge=0)
    owners: list[ChecksumAddress]
    threshold: int = Field(..., ge=0)

    @field_validator("owners", mode="before")
    @classmethod
    def owners_must_be_ordered(cls, v: Any) -> Any:
        if isinstance(v, (set, frozenset)):
            raise ValueError("owners must be an ordered sequence, not a set")
        return v
