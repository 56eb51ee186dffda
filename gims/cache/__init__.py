"""Cache module for gims.

This package provides caching to prevent redundant LLM API calls:
- models: CacheEntry data model
- utils: compute_fingerprint
- store: ResponseCache, the in-memory cache
"""

from gims.cache.models import CacheEntry
from gims.cache.utils import FINGERPRINT_PREFIX_CHARS, compute_fingerprint
from gims.cache.store import ResponseCache


__all__ = [
    "CacheEntry",
    "FINGERPRINT_PREFIX_CHARS",
    "ResponseCache",
    "compute_fingerprint",
]
