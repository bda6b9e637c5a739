"""Collaborator interfaces consumed by the signing and relay layers.

Any object with the right shape works (``ContractClient``,
``LocalTypedDataSigner``, a wallet bridge, a test double).
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ContractReader(Protocol):
    """Read-only view of a deployed contract."""

    address: str

    async def read(self, function_name: str, args: Sequence[Any] = ()) -> Any: ...


@runtime_checkable
class ContractWriter(Protocol):
    """Transaction-submitting view of a deployed contract."""

    async def write(
        self,
        function_name: str,
        args: Sequence[Any] = (),
        *,
        account: Any = None,
    ) -> Any: ...


@runtime_checkable
class ChainInfo(Protocol):
    async def get_chain_id(self) -> int: ...


@runtime_checkable
class TypedDataSigner(Protocol):
    """Holder of one account able to produce EIP-712 signatures.

    ``address`` is ``None`` when no account is bound.
    """

    @property
    def address(self) -> Optional[str]: ...

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
        message: dict[str, Any],
    ) -> bytes: ...
