"""Nonce resolution.

Nothing is cached: two requests for the same scope that both omit the
nonce read the same counter and collide.  Callers queueing several
signatures for one scope pre-fetch once and pass explicit nonces.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from web3_infra.protocols import ContractReader

logger = structlog.get_logger("signing.nonce")


async def resolve_nonce(
    reader: ContractReader,
    accessor: str,
    scope_key: Any,
    explicit_nonce: Optional[int] = None,
) -> int:
    """Return ``explicit_nonce`` verbatim, or read ``accessor(scope_key)`` on-chain."""
    if explicit_nonce is not None:
        return explicit_nonce

    nonce = int(await reader.read(accessor, [scope_key]))
    logger.debug("nonce.read", accessor=accessor, scope=str(scope_key), nonce=nonce)
    return nonce
