"""NanoToken signatures — relay package (relayer-side submission)."""

from .submission import SubmissionAdapter

__all__ = [
    "SubmissionAdapter",
]
