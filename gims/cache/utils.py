"""Cache utility functions for gims.

Contains:
- compute_fingerprint: Cache key over change content and style options
"""

import hashlib
import json

from gims.models import GenerationOptions

# Only this much of the change content contributes to the cache key
FINGERPRINT_PREFIX_CHARS = 1000


def compute_fingerprint(content: str, options: GenerationOptions) -> str:
    """Compute the cache key for a generation request.

    The key covers a prefix of the pre-reduction change content and the
    options that change the message's shape (conventional, body). Provider
    and model are not part of the key: a cached message is reused no matter
    which backend produced it.

    Args:
        content: The raw change content (diff text).
        options: Generation options.

    Returns:
        SHA256 hex digest.
    """
    payload = json.dumps(
        {
            "content": content[:FINGERPRINT_PREFIX_CHARS],
            "options": {"conventional": options.conventional, "body": options.body},
        },
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode()).hexdigest()
