"""Tests for web3_infra/contract_client.py — dispatch and account resolution (no node)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_account import Account
from hexbytes import HexBytes

from conftest import ALICE, BOB, DEV_KEYS, TOKEN_ADDRESS
from core.errors import MissingIdentityError
from web3_infra.contract_client import (
    NANO_TOKEN_ABI,
    ContractClient,
    ContractClientConfig,
    create_nano_token_client,
)

TX_HASH = HexBytes("0x" + "12" * 32)


def _fake_w3(contract: MagicMock) -> MagicMock:
    w3 = MagicMock()
    w3.eth.contract.return_value = contract
    w3.eth.get_transaction_count = AsyncMock(return_value=5)
    w3.eth.send_raw_transaction = AsyncMock(return_value=TX_HASH)
    return w3


@pytest.fixture
def contract() -> MagicMock:
    return MagicMock()


@pytest.fixture
def w3(contract: MagicMock) -> MagicMock:
    return _fake_w3(contract)


class TestConstruction:

    def test_requires_address(self, w3: MagicMock) -> None:
        with pytest.raises(ValueError, match="address is required"):
            ContractClient(w3, address="", abi=NANO_TOKEN_ABI)

    def test_requires_abi(self, w3: MagicMock) -> None:
        with pytest.raises(ValueError, match="abi is required"):
            ContractClient(w3, address=TOKEN_ADDRESS, abi=[])

    def test_requires_web3(self) -> None:
        with pytest.raises(ValueError, match="web3 client is required"):
            ContractClient(None, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI)

    def test_checksums_address(self, w3: MagicMock) -> None:
        client = ContractClient(w3, address=TOKEN_ADDRESS.lower(), abi=NANO_TOKEN_ABI)
        assert client.address == TOKEN_ADDRESS
        w3.eth.contract.assert_called_once_with(address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI)

    def test_abi_covers_signature_flows(self) -> None:
        names = {entry["name"] for entry in NANO_TOKEN_ABI}
        assert {
            "name",
            "nonces",
            "sessionKeyNonces",
            "multiSigNonces",
            "transferWithSig",
            "setSessionKeyWithSig",
            "transferFromMultiSig",
            "updateMultiSigAccount",
            "setSessionKey",
        } <= names


class TestRead:

    @pytest.mark.asyncio
    async def test_read_dispatches_by_name(self, w3: MagicMock, contract: MagicMock) -> None:
        contract.functions.nonces.return_value.call = AsyncMock(return_value=4)
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI)

        assert await client.read("nonces", [ALICE]) == 4
        contract.functions.nonces.assert_called_once_with(ALICE)

    @pytest.mark.asyncio
    async def test_simulate_uses_default_account(self, w3: MagicMock, contract: MagicMock) -> None:
        call = AsyncMock(return_value=None)
        contract.functions.setSessionKey.return_value.call = call
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI, account=ALICE.lower())

        await client.simulate("setSessionKey", [BOB, True])
        call.assert_awaited_once_with({"from": ALICE})

    @pytest.mark.asyncio
    async def test_get_chain_id(self, w3: MagicMock) -> None:
        async def chain_id() -> int:
            return 31337

        w3.eth.chain_id = chain_id()
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI)
        assert await client.get_chain_id() == 31337


class TestWrite:

    @pytest.mark.asyncio
    async def test_missing_account(self, w3: MagicMock, contract: MagicMock) -> None:
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI)
        with pytest.raises(MissingIdentityError, match="account is required for write"):
            await client.write("setSessionKey", [BOB, True])
        contract.functions.setSessionKey.assert_not_called()

    @pytest.mark.asyncio
    async def test_address_account_uses_transact(self, w3: MagicMock, contract: MagicMock) -> None:
        transact = AsyncMock(return_value=TX_HASH)
        contract.functions.setSessionKey.return_value.transact = transact
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI)

        assert await client.write("setSessionKey", [BOB, True], account=ALICE) == TX_HASH
        transact.assert_awaited_once_with({"from": ALICE})

    @pytest.mark.asyncio
    async def test_local_account_signs_and_sends_raw(self, w3: MagicMock, contract: MagicMock) -> None:
        relayer = Account.from_key(DEV_KEYS[0])
        built_tx = {
            "to": TOKEN_ADDRESS,
            "data": "0x",
            "value": 0,
            "gas": 100_000,
            "maxFeePerGas": 2_000_000_000,
            "maxPriorityFeePerGas": 1_000_000_000,
            "chainId": 31337,
            "nonce": 5,
        }
        build = AsyncMock(return_value=built_tx)
        contract.functions.transferWithSig.return_value.build_transaction = build
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI, account=relayer)

        assert await client.write("transferWithSig", [ALICE, BOB, 1, 0, b"", 9, b"sig"]) == TX_HASH

        build.assert_awaited_once_with({"from": relayer.address, "nonce": 5})
        expected_raw = relayer.sign_transaction(built_tx).raw_transaction
        w3.eth.send_raw_transaction.assert_awaited_once_with(expected_raw)

    @pytest.mark.asyncio
    async def test_per_call_account_overrides_default(self, w3: MagicMock, contract: MagicMock) -> None:
        transact = AsyncMock(return_value=TX_HASH)
        contract.functions.setSessionKey.return_value.transact = transact
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI, account=ALICE)

        await client.write("setSessionKey", [BOB, False], account=BOB)
        transact.assert_awaited_once_with({"from": BOB})

    @pytest.mark.asyncio
    async def test_node_error_propagates(self, w3: MagicMock, contract: MagicMock) -> None:
        contract.functions.setSessionKey.return_value.transact = AsyncMock(
            side_effect=ValueError("execution reverted")
        )
        client = ContractClient(w3, address=TOKEN_ADDRESS, abi=NANO_TOKEN_ABI)
        with pytest.raises(ValueError, match="execution reverted"):
            await client.write("setSessionKey", [BOB, True], account=ALICE)


class TestFactory:

    def test_create_with_explicit_web3(self, w3: MagicMock) -> None:
        client = create_nano_token_client(address=TOKEN_ADDRESS, account=ALICE, w3=w3)
        assert client.address == TOKEN_ADDRESS
        assert client.abi is NANO_TOKEN_ABI

    def test_config_defaults(self) -> None:
        cfg = ContractClientConfig()
        assert cfg.rpc_url == "http://127.0.0.1:8545"
        assert cfg.request_timeout_s == 10.0
