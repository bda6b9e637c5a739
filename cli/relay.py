"""Relay CLI — submit collected NanoToken authorizations from the shell.

Reads a JSON payload produced by the signing parties and broadcasts it
with the relayer configured through ``RELAYER_PRIVATE_KEY``.

Usage:
    python3 -m cli.relay nonces --account 0xf39F... --account-id 7
    python3 -m cli.relay transfer payload.json
    python3 -m cli.relay session-key payload.json
    python3 -m cli.relay multisig-transfer payload.json
    python3 -m cli.relay multisig-update payload.json

Payload shape::

    {
      "params": {"account_id": 7, "to": "0x...", "amount": 100},
      "deadline": 1900000000,
      "signature": "0x...",                          # single-signer commands
      "approvals": [{"owner": "0x...", "signature": "0x..."}]   # multisig
    }
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from core.logger import setup_logging
from models import (
    Approval,
    MultiSigTransferParams,
    MultiSigUpdateParams,
    SessionKeyParams,
    TransferWithSigParams,
)
from relay.submission import SubmissionAdapter
from signing.nonce import resolve_nonce
from signing.registry import ACCOUNT_NONCES, MULTISIG_NONCES, SESSION_KEY_NONCES
from web3_infra.contract_client import ContractClient, create_nano_token_client, relayer_from_settings

logger = structlog.get_logger("cli.relay")


def load_payload(path: str) -> dict[str, Any]:
    """Read a JSON payload; ``deadline`` is required."""
    payload = json.loads(Path(path).read_text())
    if "deadline" not in payload:
        raise ValueError(f"payload {path} is missing 'deadline'")
    return payload


def parse_approvals(payload: dict[str, Any]) -> list[Approval]:
    items = payload.get("approvals")
    if not items:
        raise ValueError("payload has no approvals")
    return [Approval(owner=item["owner"], signature=item["signature"]) for item in items]


def _tx_hex(tx: Any) -> str:
    if isinstance(tx, (bytes, bytearray)):
        return "0x" + bytes(tx).hex()
    return str(tx)


# ── Commands ─────────────────────────────────────────────────────


async def cmd_nonces(args: argparse.Namespace, client: ContractClient, relay: SubmissionAdapter) -> None:
    if args.account:
        account_nonce = await resolve_nonce(client, ACCOUNT_NONCES, args.account)
        session_nonce = await resolve_nonce(client, SESSION_KEY_NONCES, args.account)
        print(f"  {args.account}")
        print(f"    nonces:           {account_nonce}")
        print(f"    sessionKeyNonces: {session_nonce}")
    if args.account_id is not None:
        multisig_nonce = await resolve_nonce(client, MULTISIG_NONCES, args.account_id)
        print(f"  multisig account {args.account_id}")
        print(f"    multiSigNonces:   {multisig_nonce}")


async def cmd_transfer(args: argparse.Namespace, client: ContractClient, relay: SubmissionAdapter) -> None:
    payload = load_payload(args.payload)
    params = TransferWithSigParams.model_validate(payload["params"])
    tx = await relay.submit_transfer_with_sig(
        params, deadline=payload["deadline"], signature=payload["signature"]
    )
    print(_tx_hex(tx))


async def cmd_session_key(args: argparse.Namespace, client: ContractClient, relay: SubmissionAdapter) -> None:
    payload = load_payload(args.payload)
    params = SessionKeyParams.model_validate(payload["params"])
    tx = await relay.submit_session_key_with_sig(
        params, deadline=payload["deadline"], signature=payload["signature"]
    )
    print(_tx_hex(tx))


async def cmd_multisig_transfer(args: argparse.Namespace, client: ContractClient, relay: SubmissionAdapter) -> None:
    payload = load_payload(args.payload)
    params = MultiSigTransferParams.model_validate(payload["params"])
    tx = await relay.submit_multisig_transfer(
        params, deadline=payload["deadline"], approvals=parse_approvals(payload)
    )
    print(_tx_hex(tx))


async def cmd_multisig_update(args: argparse.Namespace, client: ContractClient, relay: SubmissionAdapter) -> None:
    payload = load_payload(args.payload)
    params = MultiSigUpdateParams.model_validate(payload["params"])
    tx = await relay.submit_multisig_update(
        params, deadline=payload["deadline"], approvals=parse_approvals(payload)
    )
    print(_tx_hex(tx))


COMMANDS = {
    "nonces": cmd_nonces,
    "transfer": cmd_transfer,
    "session-key": cmd_session_key,
    "multisig-transfer": cmd_multisig_transfer,
    "multisig-update": cmd_multisig_update,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nanotoken-relay",
        description="Submit signed NanoToken authorizations",
    )
    parser.add_argument("--token", default=None, help="NanoToken address (default: TOKEN_ADDRESS)")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    sub_nonces = subparsers.add_parser("nonces", help="Show current nonce counters")
    sub_nonces.add_argument("--account", default=None, help="Account for nonces/sessionKeyNonces")
    sub_nonces.add_argument("--account-id", type=int, default=None, help="Multisig account id")

    for name, help_text in (
        ("transfer", "Relay transferWithSig"),
        ("session-key", "Relay setSessionKeyWithSig"),
        ("multisig-transfer", "Relay transferFromMultiSig"),
        ("multisig-update", "Relay updateMultiSigAccount"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("payload", help="Path to the JSON payload")

    return parser


async def run(args: argparse.Namespace, client: ContractClient, relay: SubmissionAdapter) -> None:
    handler = COMMANDS[args.command]
    logger.info("cli.command", command=args.command, token=client.address)
    await handler(args, client, relay)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in COMMANDS:
        parser.print_help()
        sys.exit(1)

    setup_logging(level=args.log_level, force=args.log_level is not None)
    relayer = relayer_from_settings()
    client = create_nano_token_client(address=args.token, account=relayer)
    asyncio.run(run(args, client, SubmissionAdapter(client, relayer_account=relayer)))


if __name__ == "__main__":
    main()
