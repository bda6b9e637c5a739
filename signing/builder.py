"""SignatureRequestBuilder — typed-data authorizations for NanoToken operations.

Every operation follows the same shape:

1. fail fast when the signer has no bound account (nothing is read);
2. resolve the nonce from the schema's on-chain counter unless given;
3. default the deadline to *now + TTL*;
4. resolve the domain (reading ``name()`` unless overridden);
5. lay the message out in registry order and ask the signer to sign it.

Single-signer operations return ``SignatureResult``; multisig operations
return ``OwnerSignature`` so approvals can later be ordered by owner.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog
from hexbytes import HexBytes

from config.settings import settings
from core.errors import MissingIdentityError
from models.approval import OwnerSignature, SignatureResult
from models.operations import (
    MultiSigTransferParams,
    MultiSigUpdateParams,
    SessionKeyParams,
    TransferWithSigParams,
)
from models.typed_data import MessageType, SignatureRequest
from signing.aggregator import compute_owners_hash
from signing.domain import resolve_domain
from signing.nonce import resolve_nonce
from signing.registry import (
    MULTISIG_TRANSFER,
    MULTISIG_UPDATE,
    SET_SESSION_KEY_WITH_SIG,
    TRANSFER_WITH_SIG,
)
from web3_infra.protocols import ChainInfo, ContractReader, TypedDataSigner

logger = structlog.get_logger("signing.builder")


@dataclass
class BuilderConfig:
    """Configuration for the signature request builder."""

    # Validity window in seconds for requests without an explicit deadline
    ttl_seconds: int = field(default_factory=lambda: settings.SIGNATURE_TTL_SECONDS)

    # Domain name used instead of reading the token's name()
    token_name: Optional[str] = field(default_factory=lambda: settings.TOKEN_NAME or None)


def require_identity(signer: Optional[TypedDataSigner], role: str = "signer") -> str:
    """Return the signer's address or raise ``MissingIdentityError``."""
    if signer is None:
        raise MissingIdentityError(f"{role} is required", role=role)
    address = getattr(signer, "address", None)
    if not address:
        raise MissingIdentityError(f"{role} account is required", role=role)
    return address


class SignatureRequestBuilder:
    """Builds and signs EIP-712 requests against one NanoToken deployment.

    Parameters
    ----------
    token:
        Read collaborator for the token contract; its ``address`` is the
        domain's verifying contract.
    chain_info:
        Chain-id provider.  Defaults to ``token`` (``ContractClient``
        implements both).
    config:
        TTL and domain-name override.

    Usage::

        builder = SignatureRequestBuilder(token_client)
        result = await builder.build_transfer_approval(
            signer,
            TransferWithSigParams(from_address=alice, to=bob, amount=100),
        )
        await relay.submit_transfer_with_sig(params, result.deadline, result.signature)
    """

    def __init__(
        self,
        token: ContractReader,
        chain_info: Optional[ChainInfo] = None,
        config: Optional[BuilderConfig] = None,
    ) -> None:
        self._token = token
        self._chain_info = chain_info if chain_info is not None else token
        self._config = config or BuilderConfig()

    @property
    def config(self) -> BuilderConfig:
        """Return current configuration (read-only)."""
        return self._config

    def default_deadline(self) -> int:
        """Unix timestamp ``ttl_seconds`` from now."""
        return int(time.time()) + self._config.ttl_seconds

    # ── Public API ───────────────────────────────────────────────

    async def build_transfer_approval(
        self,
        signer: TypedDataSigner,
        params: TransferWithSigParams,
        token_name: Optional[str] = None,
    ) -> SignatureResult:
        """Sign a ``TransferWithSig`` authorization (nonce scope: ``from``)."""
        _, signature, nonce, deadline = await self._sign(
            signer, TRANSFER_WITH_SIG, params.message_values(),
            params.nonce, params.deadline, token_name,
        )
        return SignatureResult(signature=signature, nonce=nonce, deadline=deadline)

    async def build_session_key_approval(
        self,
        signer: TypedDataSigner,
        params: SessionKeyParams,
        token_name: Optional[str] = None,
    ) -> SignatureResult:
        """Sign a ``SetSessionKeyWithSig`` authorization (nonce scope: ``account``)."""
        _, signature, nonce, deadline = await self._sign(
            signer, SET_SESSION_KEY_WITH_SIG, params.message_values(),
            params.nonce, params.deadline, token_name,
        )
        return SignatureResult(signature=signature, nonce=nonce, deadline=deadline)

    async def build_multisig_transfer_approval(
        self,
        signer: TypedDataSigner,
        params: MultiSigTransferParams,
        token_name: Optional[str] = None,
    ) -> OwnerSignature:
        """Sign one owner's ``MultiSigTransfer`` approval (nonce scope: ``accountId``)."""
        owner, signature, nonce, deadline = await self._sign(
            signer, MULTISIG_TRANSFER, params.message_values(),
            params.nonce, params.deadline, token_name,
        )
        return OwnerSignature(signature=signature, nonce=nonce, deadline=deadline, owner=owner)

    async def build_multisig_update_approval(
        self,
        signer: TypedDataSigner,
        params: MultiSigUpdateParams,
        token_name: Optional[str] = None,
    ) -> OwnerSignature:
        """Sign one owner's ``MultiSigUpdate`` approval.

        The proposed owners are committed through ``compute_owners_hash`` in
        the order given by ``params.owners``.
        """
        values = {
            "accountId": params.account_id,
            "ownersHash": compute_owners_hash(params.owners),
            "threshold": params.threshold,
        }
        owner, signature, nonce, deadline = await self._sign(
            signer, MULTISIG_UPDATE, values,
            params.nonce, params.deadline, token_name,
        )
        return OwnerSignature(signature=signature, nonce=nonce, deadline=deadline, owner=owner)

    async def build_request(
        self,
        message_type: MessageType,
        values: dict[str, Any],
        nonce: Optional[int] = None,
        deadline: Optional[int] = None,
        token_name: Optional[str] = None,
    ) -> SignatureRequest:
        """Resolve nonce, deadline and domain into an unsigned request.

        ``values`` holds every schema field except ``nonce`` and ``deadline``.
        """
        resolved_nonce = await resolve_nonce(
            self._token,
            message_type.nonce_accessor,
            values[message_type.scope_field],
            nonce,
        )
        resolved_deadline = deadline if deadline is not None else self.default_deadline()
        domain = await resolve_domain(
            self._token,
            self._chain_info,
            self._token.address,
            token_name if token_name is not None else self._config.token_name,
        )
        message = message_type.build_message(
            {**values, "nonce": resolved_nonce, "deadline": resolved_deadline}
        )
        return SignatureRequest(domain=domain, message_type=message_type, message=message)

    # ── Internals ────────────────────────────────────────────────

    async def _sign(
        self,
        signer: TypedDataSigner,
        message_type: MessageType,
        values: dict[str, Any],
        nonce: Optional[int],
        deadline: Optional[int],
        token_name: Optional[str],
    ) -> tuple[str, bytes, int, int]:
        signer_address = require_identity(signer)

        request = await self.build_request(message_type, values, nonce, deadline, token_name)
        raw = await signer.sign_typed_data(
            request.domain.to_eip712(),
            request.types,
            request.primary_type,
            request.message,
        )
        signature = bytes(HexBytes(raw))

        logger.info(
            "signature_builder.signed",
            primary_type=request.primary_type,
            signer=signer_address,
            nonce=request.message["nonce"],
            deadline=request.message["deadline"],
            chain_id=request.domain.chain_id,
        )
        return signer_address, signature, request.message["nonce"], request.message["deadline"]
