"""LocalTypedDataSigner — EIP-712 signing with a key held by this process.

Signing is CPU-bound (elliptic-curve math), so we offload it to a
``ProcessPoolExecutor`` to avoid blocking the asyncio event loop.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Optional

import structlog
from eth_account import Account

from config.settings import settings
from models.typed_data import EIP712_DOMAIN_FIELDS

logger = structlog.get_logger("web3_infra.typed_data_signer")


# ── Module-level signing function (must be picklable for multiprocessing) ──


def _sign_typed_data_sync(
    private_key: str,
    domain: dict[str, Any],
    types: dict[str, list[dict[str, str]]],
    primary_type: str,
    message: dict[str, Any],
) -> bytes:
    """Synchronous EIP-712 signing executed in a worker process."""
    full_message = {
        "types": {
            "EIP712Domain": [
                {"name": name, "type": type_} for name, type_ in EIP712_DOMAIN_FIELDS
            ],
            **types,
        },
        "primaryType": primary_type,
        "domain": domain,
        "message": message,
    }
    signed = Account.sign_typed_data(private_key, full_message=full_message)
    return bytes(signed.signature)


# ── Async signer class ──────────────────────────────────────────────


class LocalTypedDataSigner:
    """Async-safe typed-data signer backed by a process pool.

    Parameters
    ----------
    private_key:
        Hex-encoded secp256k1 private key.
    max_workers:
        Number of processes in the signing pool.  Defaults to
        ``SIGNER_MAX_WORKERS``.
    """

    def __init__(self, private_key: str, max_workers: Optional[int] = None) -> None:
        self._private_key = private_key
        self._address = Account.from_key(private_key).address
        self._max_workers = max_workers or settings.SIGNER_MAX_WORKERS
        self._pool: ProcessPoolExecutor | None = None

    @property
    def address(self) -> str:
        return self._address

    # ── Lifecycle ────────────────────────────────────────────────

    def start(self) -> None:
        """Start the process pool.  Idempotent."""
        if self._pool is None:
            self._pool = ProcessPoolExecutor(max_workers=self._max_workers)
            logger.info(
                "typed_data_signer.started",
                address=self._address,
                max_workers=self._max_workers,
            )

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the process pool."""
        if self._pool is not None:
            self._pool.shutdown(wait=wait)
            self._pool = None
            logger.info("typed_data_signer.shutdown", address=self._address)

    # ── Signing ──────────────────────────────────────────────────

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
        message: dict[str, Any],
    ) -> bytes:
        """Sign typed data asynchronously (offloaded to process pool).

        Returns
        -------
        bytes
            65-byte ``r || s || v`` signature.

        Raises
        ------
        RuntimeError
            If the signer has not been started.
        """
        if self._pool is None:
            raise RuntimeError(
                "LocalTypedDataSigner not started — call start() first"
            )

        loop = asyncio.get_running_loop()
        signature = await loop.run_in_executor(
            self._pool,
            _sign_typed_data_sync,
            self._private_key,
            domain,
            types,
            primary_type,
            message,
        )

        logger.debug(
            "typed_data_signer.signed",
            address=self._address,
            primary_type=primary_type,
        )
        return signature

    # ── Context manager ──────────────────────────────────────────

    async def __aenter__(self) -> LocalTypedDataSigner:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.shutdown(wait=True)
