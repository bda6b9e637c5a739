"""Domain resolution for NanoToken typed-data signatures."""

from __future__ import annotations

from typing import Optional

import structlog

from models.typed_data import EIP712_VERSION, TypedDataDomain
from web3_infra.protocols import ChainInfo, ContractReader

logger = structlog.get_logger("signing.domain")


async def resolve_domain(
    reader: ContractReader,
    chain_info: ChainInfo,
    verifying_contract: str,
    name_override: Optional[str] = None,
) -> TypedDataDomain:
    """Build the EIP-712 domain for ``verifying_contract``.

    The token's ``name()`` is read only when ``name_override`` is ``None``.
    Read and chain-id failures propagate unchanged.
    """
    name = name_override if name_override is not None else await reader.read("name")
    chain_id = await chain_info.get_chain_id()

    domain = TypedDataDomain(
        name=name,
        version=EIP712_VERSION,
        chain_id=int(chain_id),
        verifying_contract=verifying_contract,
    )
    logger.debug(
        "domain.resolved",
        name=domain.name,
        chain_id=domain.chain_id,
        verifying_contract=domain.verifying_contract,
        name_read=name_override is None,
    )
    return domain
