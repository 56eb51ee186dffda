"""Cache data models for gims.

Contains Pydantic models for cache entries:
- CacheEntry: A normalized message and when it was generated
"""

from pydantic import BaseModel

from gims.models import CommitMessage


class CacheEntry(BaseModel):
    """A cached generation result."""

    message: CommitMessage
    used_local: bool = False
    timestamp: float  # epoch seconds

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was created."""
        return now - self.timestamp
