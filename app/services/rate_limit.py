"""In-process fixed-window rate limiter keyed by client and route."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable

from app.config.settings import RateLimitConfig, settings


@dataclass
class _Window:
    started_at: float
    count: int


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: int = 0


class FixedWindowRateLimiter:
    """Count requests per key within consecutive fixed windows."""

    def __init__(
        self,
        config: RateLimitConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def active_keys(self) -> int:
        return len(self._windows)

    def hit(self, key: str) -> RateLimitDecision:
        """Register one request for ``key`` and report whether it is allowed."""

        if not self._config.enabled:
            return RateLimitDecision(allowed=True)

        now = self._clock()
        window_seconds = self._config.window_seconds
        window = self._windows.get(key)
        if window is None or now - window.started_at >= window_seconds:
            self._prune(now)
            self._windows[key] = _Window(started_at=now, count=1)
            return RateLimitDecision(allowed=True)

        window.count += 1
        if window.count > self._config.max_requests:
            remaining = window_seconds - (now - window.started_at)
            return RateLimitDecision(allowed=False, retry_after=max(1, math.ceil(remaining)))
        return RateLimitDecision(allowed=True)

    def reset(self) -> None:
        self._windows.clear()

    def _prune(self, now: float) -> None:
        window_seconds = self._config.window_seconds
        expired = [k for k, w in self._windows.items() if now - w.started_at >= window_seconds]
        for key in expired:
            del self._windows[key]


def get_rate_limiter() -> FixedWindowRateLimiter:
    return _DEFAULT_LIMITER


_DEFAULT_LIMITER = FixedWindowRateLimiter(settings.rate_limit)


__all__ = ["FixedWindowRateLimiter", "RateLimitDecision", "get_rate_limiter"]
