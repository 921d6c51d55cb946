"""
Client-side view of the GitHub rate limit.

Every GitHub response carries x-ratelimit-limit, x-ratelimit-remaining
and x-ratelimit-reset (epoch seconds). The tracker remembers the last
values seen so an exhausted budget fails fast instead of hitting the API.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 60


@dataclass
class RateLimitStatus:
    limit: int
    remaining: Optional[int]
    reset_at: Optional[datetime]
    is_limited: bool


class RateLimitTracker:
    """Tracks the most recently observed rate-limit headers."""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self.limit = DEFAULT_LIMIT
        self.remaining: Optional[int] = None
        self.reset_epoch: Optional[int] = None

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        remaining = _parse_int(headers.get("x-ratelimit-remaining"))
        reset = _parse_int(headers.get("x-ratelimit-reset"))
        limit = _parse_int(headers.get("x-ratelimit-limit"))

        if remaining is None and reset is None:
            return

        self.remaining = remaining
        self.reset_epoch = reset
        self.limit = limit if limit is not None else DEFAULT_LIMIT

        logger.debug(
            "GitHub rate limit updated",
            extra={"limit": self.limit, "remaining": self.remaining, "reset": self.reset_epoch},
        )

    def can_make_request(self) -> bool:
        if self.remaining is None or self.remaining > 0:
            return True

        if self.reset_epoch is not None and self._clock() >= self.reset_epoch:
            self.remaining = self.limit
            return True

        return False

    def seconds_until_reset(self) -> int:
        if self.reset_epoch is None:
            return 0
        return max(0, int(self.reset_epoch - self._clock()))

    def reset_at(self) -> Optional[datetime]:
        if self.reset_epoch is None:
            return None
        return datetime.fromtimestamp(self.reset_epoch, tz=timezone.utc)

    def status(self) -> RateLimitStatus:
        return RateLimitStatus(
            limit=self.limit,
            remaining=self.remaining,
            reset_at=self.reset_at(),
            is_limited=not self.can_make_request(),
        )

    def message(self) -> str:
        """Human-readable summary for API consumers."""
        if self.can_make_request():
            if self.remaining is None:
                return "GitHub rate limit not yet observed"
            return f"{self.remaining} of {self.limit} GitHub requests remaining"

        minutes = -(-self.seconds_until_reset() // 60)
        return f"GitHub rate limit exceeded. Resets in {minutes} minute{'s' if minutes != 1 else ''}"


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
