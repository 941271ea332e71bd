"""Request pacing for outbound Supabase calls.

A single gate is shared by every tool in the process. Each call waits
until at least ``RATE_LIMIT_MS`` has passed since the previous call was
let through.

Usage:
    from supabase_mcp.ratelimit import get_rate_gate

    gate = get_rate_gate()

    await gate.admit()
    response = await client.request(...)

    # Or as a context manager
    async with gate:
        response = await client.request(...)
"""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)

RATE_LIMIT_MS = 100


class RateGate:
    """Serialized minimum-interval gate.

    The lock is held across the elapsed-time check, the sleep and the
    timestamp update, so concurrent callers are admitted one at a time.
    """

    def __init__(self, min_interval: float = RATE_LIMIT_MS / 1000):
        self.min_interval = min_interval
        self.last_call_at: float | None = None
        self._lock = asyncio.Lock()

        # Stats
        self.total_admitted = 0
        self.total_waits = 0

    async def admit(self) -> None:
        """Suspend until the next call may be issued, then claim the slot."""
        async with self._lock:
            if self.last_call_at is not None:
                elapsed = time.monotonic() - self.last_call_at
                remaining = self.min_interval - elapsed
                if remaining > 0:
                    self.total_waits += 1
                    logger.debug("Rate gate delaying call by %.1f ms", remaining * 1000)
                # The event loop may wake a sleeper slightly early
                while remaining > 0:
                    await asyncio.sleep(remaining)
                    remaining = self.min_interval - (time.monotonic() - self.last_call_at)
            self.last_call_at = time.monotonic()
            self.total_admitted += 1

    async def __aenter__(self) -> RateGate:
        await self.admit()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


_gate: RateGate | None = None


def get_rate_gate() -> RateGate:
    """Get the process-wide rate gate."""
    global _gate
    if _gate is None:
        _gate = RateGate()
    return _gate


def reset_rate_gate() -> None:
    """Drop the process-wide gate so the next call creates a fresh one."""
    global _gate
    _gate = None
