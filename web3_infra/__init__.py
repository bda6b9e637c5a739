"""NanoToken signatures — web3_infra package.

Concrete collaborators for the signing and relay layers:
- ContractClient: read/simulate/write against a NanoToken deployment
- LocalTypedDataSigner: off-thread EIP-712 signing with a local key
"""

from .contract_client import NANO_TOKEN_ABI, ContractClient, create_nano_token_client
from .protocols import ChainInfo, ContractReader, ContractWriter, TypedDataSigner
from .typed_data_signer import LocalTypedDataSigner

__all__ = [
    "NANO_TOKEN_ABI",
    "ChainInfo",
    "ContractClient",
    "ContractReader",
    "ContractWriter",
    "LocalTypedDataSigner",
    "TypedDataSigner",
    "create_nano_token_client",
]
