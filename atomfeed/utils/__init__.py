"""
Utilities package for the Atom feed library.

This package contains small helpers for:
- Ordered deduplication of builder collections
- Timestamp normalization
"""

from .dates import ensure_aware
from .dedupe import append_unique, put_unique

__all__ = [
    "append_unique",
    "ensure_aware",
    "put_unique",
]
