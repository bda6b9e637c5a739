"""Tests for signing/registry.py — schema tables are the wire contract."""

from __future__ import annotations

import pytest

from signing.registry import (
    EIP712_VERSION,
    MESSAGE_TYPES,
    MULTISIG_TRANSFER,
    MULTISIG_UPDATE,
    SET_SESSION_KEY_WITH_SIG,
    TRANSFER_WITH_SIG,
    get_message_type,
)


class TestSchemas:

    def test_transfer_with_sig_fields(self) -> None:
        assert TRANSFER_WITH_SIG.fields == (
            ("from", "address"),
            ("to", "address"),
            ("amount", "uint256"),
            ("objectId", "uint256"),
            ("objectData", "bytes"),
            ("nonce", "uint256"),
            ("deadline", "uint256"),
        )

    def test_set_session_key_with_sig_fields(self) -> None:
        assert SET_SESSION_KEY_WITH_SIG.fields == (
            ("account", "address"),
            ("sessionKey", "address"),
            ("enabled", "bool"),
            ("nonce", "uint256"),
            ("deadline", "uint256"),
        )

    def test_multisig_transfer_fields(self) -> None:
        assert MULTISIG_TRANSFER.fields == (
            ("accountId", "uint256"),
            ("to", "address"),
            ("amount", "uint256"),
            ("objectId", "uint256"),
            ("objectData", "bytes"),
            ("nonce", "uint256"),
            ("deadline", "uint256"),
        )

    def test_multisig_update_fields(self) -> None:
        assert MULTISIG_UPDATE.fields == (
            ("accountId", "uint256"),
            ("ownersHash", "bytes32"),
            ("threshold", "uint256"),
            ("nonce", "uint256"),
            ("deadline", "uint256"),
        )

    def test_nonce_counters(self) -> None:
        assert (TRANSFER_WITH_SIG.nonce_accessor, TRANSFER_WITH_SIG.scope_field) == ("nonces", "from")
        assert (SET_SESSION_KEY_WITH_SIG.nonce_accessor, SET_SESSION_KEY_WITH_SIG.scope_field) == (
            "sessionKeyNonces",
            "account",
        )
        assert MULTISIG_TRANSFER.nonce_accessor == "multiSigNonces"
        assert MULTISIG_UPDATE.nonce_accessor == "multiSigNonces"
        assert MULTISIG_UPDATE.scope_field == "accountId"

    def test_version_is_one(self) -> None:
        assert EIP712_VERSION == "1"

    def test_eip712_types_shape(self) -> None:
        types = SET_SESSION_KEY_WITH_SIG.eip712_types()
        assert list(types) == ["SetSessionKeyWithSig"]
        assert types["SetSessionKeyWithSig"][2] == {"name": "enabled", "type": "bool"}


class TestLookup:

    def test_all_four_registered(self) -> None:
        assert set(MESSAGE_TYPES) == {
            "TransferWithSig",
            "SetSessionKeyWithSig",
            "MultiSigTransfer",
            "MultiSigUpdate",
        }

    def test_get_message_type(self) -> None:
        assert get_message_type("MultiSigUpdate") is MULTISIG_UPDATE

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(KeyError, match="unknown message type"):
            get_message_type("Permit")


class TestBuildMessage:

    def test_orders_fields_by_schema(self) -> None:
        values = {
            "deadline": 10,
            "nonce": 1,
            "enabled": True,
            "sessionKey": "0xkey",
            "account": "0xacc",
        }
        message = SET_SESSION_KEY_WITH_SIG.build_message(values)
        assert list(message) == ["account", "sessionKey", "enabled", "nonce", "deadline"]

    def test_missing_field_raises(self) -> None:
        with pytest.raises(ValueError, match="missing fields: deadline"):
            SET_SESSION_KEY_WITH_SIG.build_message(
                {"account": "a", "sessionKey": "b", "enabled": False, "nonce": 0}
            )

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(ValueError, match="unknown fields: extra"):
            SET_SESSION_KEY_WITH_SIG.build_message(
                {
                    "account": "a",
                    "sessionKey": "b",
                    "enabled": False,
                    "nonce": 0,
                    "deadline": 0,
                    "extra": 1,
                }
            )
