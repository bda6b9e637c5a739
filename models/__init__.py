"""NanoToken signatures — models package."""

from .approval import Approval, OrderedApprovalSet, OwnerSignature, SignatureResult
from .operations import (
    MultiSigTransferParams,
    MultiSigUpdateParams,
    SessionKeyParams,
    TransferWithSigParams,
)
from .typed_data import (
    EIP712_DOMAIN_FIELDS,
    EIP712_VERSION,
    MessageType,
    SignatureRequest,
    TypedDataDomain,
)

__all__ = [
    "EIP712_DOMAIN_FIELDS",
    "EIP712_VERSION",
    "Approval",
    "MessageType",
    "MultiSigTransferParams",
    "MultiSigUpdateParams",
    "OrderedApprovalSet",
    "OwnerSignature",
    "SessionKeyParams",
    "SignatureRequest",
    "SignatureResult",
    "TransferWithSigParams",
    "TypedDataDomain",
]
