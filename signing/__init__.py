"""NanoToken signatures — signing package.

- registry: the four EIP-712 schemas and their nonce counters
- domain / nonce: resolution of the per-call domain and nonce
- builder: SignatureRequestBuilder, one method per signable operation
- aggregator: ordering of multi-owner approvals and the owners hash
"""

from .aggregator import compute_owners_hash, extract_signatures, order_approvals
from .builder import BuilderConfig, SignatureRequestBuilder, require_identity
from .domain import resolve_domain
from .nonce import resolve_nonce
from .registry import MESSAGE_TYPES, get_message_type

__all__ = [
    "BuilderConfig",
    "MESSAGE_TYPES",
    "SignatureRequestBuilder",
    "compute_owners_hash",
    "extract_signatures",
    "get_message_type",
    "order_approvals",
    "require_identity",
    "resolve_domain",
    "resolve_nonce",
]
