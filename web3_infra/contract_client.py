"""ContractClient — thin async read/simulate/write wrapper over a web3.py contract.

This is the contract-call collaborator the signing and relay layers talk
to.  It does no retrying and no gas management of its own: whatever the
node or web3.py raises reaches the caller unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import structlog
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider

from config.settings import settings
from core.errors import MissingIdentityError

logger = structlog.get_logger("web3_infra.contract_client")

# ── ABI fragments ────────────────────────────────────────────────────

# NanoToken surface used by the signature flows
NANO_TOKEN_ABI = [
    {
        "name": "name",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "name": "nonces",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "sessionKeyNonces",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "multiSigNonces",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "accountId", "type": "uint256"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "transferWithSig",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "objectId", "type": "uint256"},
            {"name": "objectData", "type": "bytes"},
            {"name": "deadline", "type": "uint256"},
            {"name": "signature", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "name": "setSessionKeyWithSig",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "account", "type": "address"},
            {"name": "sessionKey", "type": "address"},
            {"name": "enabled", "type": "bool"},
            {"name": "deadline", "type": "uint256"},
            {"name": "signature", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "name": "transferFromMultiSig",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "accountId", "type": "uint256"},
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "objectId", "type": "uint256"},
            {"name": "objectData", "type": "bytes"},
            {"name": "deadline", "type": "uint256"},
            {"name": "signatures", "type": "bytes[]"},
        ],
        "outputs": [],
    },
    {
        "name": "updateMultiSigAccount",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "accountId", "type": "uint256"},
            {"name": "owners", "type": "address[]"},
            {"name": "threshold", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
            {"name": "signatures", "type": "bytes[]"},
        ],
        "outputs": [],
    },
    {
        "name": "setSessionKey",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "sessionKey", "type": "address"},
            {"name": "enabled", "type": "bool"},
        ],
        "outputs": [],
    },
]


@dataclass
class ContractClientConfig:
    """Configuration for ``create_nano_token_client``."""

    rpc_url: str = field(default_factory=lambda: settings.RPC_URL)

    # Request timeout in seconds
    request_timeout_s: float = field(
        default_factory=lambda: settings.RPC_REQUEST_TIMEOUT_SECONDS
    )


class ContractClient:
    """Async wrapper exposing ``read``/``simulate``/``write`` by function name.

    Account resolution for ``simulate`` and ``write``: the per-call
    ``account`` first, then the client's default.  A ``LocalAccount`` is
    signed locally and sent raw; a bare address goes through the node's
    ``eth_sendTransaction``.

    Usage::

        w3 = AsyncWeb3(AsyncHTTPProvider("http://127.0.0.1:8545"))
        token = ContractClient(w3, address="0x...", abi=NANO_TOKEN_ABI)

        name = await token.read("name")
        tx_hash = await token.write("setSessionKey", [key, True], account=relayer)
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        abi: list[dict[str, Any]],
        account: Any = None,
    ) -> None:
        if w3 is None:
            raise ValueError("web3 client is required")
        if not address:
            raise ValueError("address is required")
        if not abi:
            raise ValueError("abi is required")

        self._w3 = w3
        self._address = AsyncWeb3.to_checksum_address(address)
        self._abi = abi
        self._account = account
        self._contract = w3.eth.contract(address=self._address, abi=abi)

    @property
    def address(self) -> str:
        return self._address

    @property
    def abi(self) -> list[dict[str, Any]]:
        return self._abi

    # ── Public API ───────────────────────────────────────────────

    async def read(self, function_name: str, args: Sequence[Any] = ()) -> Any:
        """Call a view function."""
        return await self._function(function_name, args).call()

    async def simulate(
        self,
        function_name: str,
        args: Sequence[Any] = (),
        *,
        account: Any = None,
    ) -> Any:
        """Dry-run a state-changing function as ``account`` via ``eth_call``."""
        tx_params: dict[str, Any] = {}
        resolved = self._resolve_account(account)
        if resolved is not None:
            tx_params["from"] = self._sender(resolved)
        return await self._function(function_name, args).call(tx_params)

    async def write(
        self,
        function_name: str,
        args: Sequence[Any] = (),
        *,
        account: Any = None,
    ) -> Any:
        """Send a transaction and return its hash without waiting for a receipt.

        Raises
        ------
        MissingIdentityError
            If neither ``account`` nor a client default is available.
        """
        resolved = self._resolve_account(account)
        if resolved is None:
            raise MissingIdentityError(
                "account is required for write (pass account or set a client default)",
                role="writer",
            )

        fn = self._function(function_name, args)
        sender = self._sender(resolved)

        if isinstance(resolved, LocalAccount):
            tx = await fn.build_transaction(
                {
                    "from": sender,
                    "nonce": await self._w3.eth.get_transaction_count(sender),
                }
            )
            signed = resolved.sign_transaction(tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_hash = await fn.transact({"from": sender})

        logger.debug(
            "contract_client.tx_sent",
            function=function_name,
            sender=sender,
            tx_hash=tx_hash.hex() if hasattr(tx_hash, "hex") else str(tx_hash),
        )
        return tx_hash

    async def get_chain_id(self) -> int:
        return int(await self._w3.eth.chain_id)

    # ── Internals ────────────────────────────────────────────────

    def _function(self, function_name: str, args: Sequence[Any]) -> Any:
        return getattr(self._contract.functions, function_name)(*args)

    def _resolve_account(self, account: Any) -> Any:
        return account if account is not None else self._account

    @staticmethod
    def _sender(account: Any) -> str:
        if isinstance(account, LocalAccount):
            return account.address
        return AsyncWeb3.to_checksum_address(account)


def relayer_from_settings() -> Optional[LocalAccount]:
    """Relayer account from ``RELAYER_PRIVATE_KEY``, or ``None`` when unset."""
    if not settings.RELAYER_PRIVATE_KEY:
        return None
    return Account.from_key(settings.RELAYER_PRIVATE_KEY)


def create_nano_token_client(
    address: Optional[str] = None,
    account: Any = None,
    config: Optional[ContractClientConfig] = None,
    w3: Optional[AsyncWeb3] = None,
) -> ContractClient:
    """Build a ``ContractClient`` bound to the NanoToken ABI.

    ``address`` defaults to ``TOKEN_ADDRESS`` and ``account`` to the relayer
    configured through ``RELAYER_PRIVATE_KEY``.
    """
    config = config or ContractClientConfig()
    if w3 is None:
        provider = AsyncHTTPProvider(
            config.rpc_url,
            request_kwargs={"timeout": config.request_timeout_s},
        )
        w3 = AsyncWeb3(provider)

    return ContractClient(
        w3,
        address=address or settings.TOKEN_ADDRESS,
        abi=NANO_TOKEN_ABI,
        account=account if account is not None else relayer_from_settings(),
    )
