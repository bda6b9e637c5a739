"""Shared collaborator doubles for signing and relay tests."""

from __future__ import annotations

from typing import Any, Sequence
from unittest.mock import AsyncMock

import pytest

TOKEN_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
CHAIN_ID = 31337

# Well-known development keys (hardhat / anvil accounts #0–#2)
DEV_KEYS = (
    "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
    "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d",
    "0x5de4111afa1a4b94908f83103eb1f1706367c2e68ca870fc3fb9a804cdab365a",
)

ALICE = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
BOB = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
CAROL = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"


class FakeToken:
    """Token collaborator: reads name/nonces from dicts, records writes."""

    def __init__(
        self,
        address: str = TOKEN_ADDRESS,
        name: str = "NanoToken",
        chain_id: int = CHAIN_ID,
        nonces: dict[tuple[str, Any], int] | None = None,
    ) -> None:
        self.address = address
        self._name = name
        self._nonces = nonces or {}
        self.read = AsyncMock(side_effect=self._read)
        self.get_chain_id = AsyncMock(return_value=chain_id)
        self.write = AsyncMock(return_value=b"\xab" * 32)

    async def _read(self, function_name: str, args: Sequence[Any] = ()) -> Any:
        if function_name == "name":
            return self._name
        return self._nonces.get((function_name, args[0]), 0)

    def reads_of(self, function_name: str) -> list[Any]:
        return [c for c in self.read.await_args_list if c.args[0] == function_name]


class FakeSigner:
    """Signer returning a signature that encodes its own address."""

    def __init__(self, address: str | None) -> None:
        self.address = address
        self.calls: list[tuple[dict, dict, str, dict]] = []

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
        message: dict[str, Any],
    ) -> bytes:
        self.calls.append((domain, types, primary_type, message))
        return b"sig:" + bytes.fromhex(self.address[2:])


@pytest.fixture
def token() -> FakeToken:
    return FakeToken(
        nonces={
            ("nonces", ALICE): 4,
            ("sessionKeyNonces", ALICE): 9,
            ("multiSigNonces", 7): 3,
        }
    )


@pytest.fixture
def alice_signer() -> FakeSigner:
    return FakeSigner(ALICE)


@pytest.fixture
def bob_signer() -> FakeSigner:
    return FakeSigner(BOB)
