"""SubmissionAdapter — signed payloads to positional NanoToken calls.

The relayer pays for and broadcasts the transaction; the end user only
signed.  Argument tuples below mirror the contract ABI exactly.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import structlog
from hexbytes import HexBytes

from core.errors import MissingIdentityError
from models.operations import (
    MultiSigTransferParams,
    MultiSigUpdateParams,
    SessionKeyParams,
    TransferWithSigParams,
)
from signing.aggregator import extract_signatures, order_approvals
from web3_infra.protocols import ContractWriter

logger = structlog.get_logger("relay.submission")


class SubmissionAdapter:
    """Submits signed NanoToken authorizations through a write collaborator.

    Parameters
    ----------
    token:
        Write collaborator (``ContractClient`` or compatible).
    relayer_account:
        Default relayer identity; any per-call ``relayer_account`` wins.

    Usage::

        relay = SubmissionAdapter(token_client, relayer_account=relayer)
        tx_hash = await relay.submit_multisig_transfer(
            params, deadline=result.deadline, approvals=[a1, a2],
        )
    """

    def __init__(self, token: ContractWriter, relayer_account: Any = None) -> None:
        self._token = token
        self._relayer_account = relayer_account

    # ── Relayed (signed) paths ───────────────────────────────────

    async def submit_transfer_with_sig(
        self,
        params: TransferWithSigParams,
        deadline: int,
        signature: bytes,
        relayer_account: Any = None,
    ) -> Any:
        args = [
            params.from_address,
            params.to,
            params.amount,
            params.object_id,
            params.object_data,
            deadline,
            bytes(HexBytes(signature)),
        ]
        return await self._relay("transferWithSig", args, relayer_account)

    async def submit_session_key_with_sig(
        self,
        params: SessionKeyParams,
        deadline: int,
        signature: bytes,
        relayer_account: Any = None,
    ) -> Any:
        args = [
            params.account,
            params.session_key,
            params.enabled,
            deadline,
            bytes(HexBytes(signature)),
        ]
        return await self._relay("setSessionKeyWithSig", args, relayer_account)

    async def submit_multisig_transfer(
        self,
        params: MultiSigTransferParams,
        deadline: int,
        approvals: Iterable[Any],
        relayer_account: Any = None,
    ) -> Any:
        """Order ``approvals`` by owner and submit ``transferFromMultiSig``.

        Raises
        ------
        DuplicateOwnerError
            If two approvals share an owner; nothing is submitted.
        """
        signatures = extract_signatures(order_approvals(approvals))
        args = [
            params.account_id,
            params.to,
            params.amount,
            params.object_id,
            params.object_data,
            deadline,
            signatures,
        ]
        return await self._relay("transferFromMultiSig", args, relayer_account)

    async def submit_multisig_update(
        self,
        params: MultiSigUpdateParams,
        deadline: int,
        approvals: Iterable[Any],
        relayer_account: Any = None,
    ) -> Any:
        """Order ``approvals`` by owner and submit ``updateMultiSigAccount``.

        ``params.owners`` is passed in its own (caller) order, the same order
        the owners hash was computed over.
        """
        signatures = extract_signatures(order_approvals(approvals))
        args = [
            params.account_id,
            list(params.owners),
            params.threshold,
            deadline,
            signatures,
        ]
        return await self._relay("updateMultiSigAccount", args, relayer_account)

    # ── Direct path ──────────────────────────────────────────────

    async def submit_session_key_direct(
        self,
        signer_account: Any,
        session_key: str,
        enabled: bool,
    ) -> Any:
        """Call ``setSessionKey`` as the account itself; no typed data, no relayer."""
        if not signer_account:
            raise MissingIdentityError("signer account is required", role="signer")
        return await self._write("setSessionKey", [session_key, enabled], signer_account)

    # ── Internals ────────────────────────────────────────────────

    async def _relay(self, function_name: str, args: list[Any], relayer_account: Any) -> Any:
        relayer = relayer_account if relayer_account is not None else self._relayer_account
        if not relayer:
            raise MissingIdentityError(
                f"relayer account is required for {function_name}", role="relayer"
            )
        return await self._write(function_name, args, relayer)

    async def _write(self, function_name: str, args: list[Any], account: Any) -> Any:
        tx = await self._token.write(function_name, args, account=account)
        logger.info(
            "submission.sent",
            function=function_name,
            account=_account_label(account),
            tx=_tx_label(tx),
        )
        return tx


def _account_label(account: Any) -> str:
    return str(getattr(account, "address", account))


def _tx_label(tx: Any) -> str:
    if isinstance(tx, (bytes, bytearray)):
        return "0x" + bytes(tx).hex()
    return str(tx)
