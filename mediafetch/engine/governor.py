"""
Caps aggregate throughput by inserting sleeps once the measured rate exceeds
the configured ceiling.
"""

import asyncio
import logging
import time
from collections import deque

log = logging.getLogger(__name__)

TICK_SECONDS = 0.1


class BandwidthGovernor:
    """
    Measures bits per second since the start of the transfer and sleeps in
    100 ms ticks until the average is back at or under the ceiling.

    Measuring from the start means a long stall early on is never "paid back"
    by throttling less later; `SlidingWindowGovernor` measures recent traffic
    instead.
    """

    def __init__(self, ceiling_bps: int | None):
        self.ceiling_bps = ceiling_bps

    @property
    def enabled(self) -> bool:
        return bool(self.ceiling_bps)

    def rate(self, start_time: float, bytes_so_far: int) -> float:
        elapsed = time.monotonic() - start_time
        if elapsed <= 0:
            return float("inf") if bytes_so_far else 0.0
        return bytes_so_far * 8 / elapsed

    async def throttle(self, start_time: float, bytes_so_far: int) -> float:
        """
        Sleeps until the achieved rate is at or below the ceiling.

        Args:
            start_time: `time.monotonic()` at the start of the transfer.
            bytes_so_far: Bytes written since `start_time`, across all segments.

        Returns:
            Seconds spent sleeping.
        """
        if not self.enabled:
            return 0.0
        slept = 0.0
        while self.rate(start_time, bytes_so_far) > self.ceiling_bps:
            await asyncio.sleep(TICK_SECONDS)
            slept += TICK_SECONDS
        if slept:
            log.debug(f"Bandwidth governor slept {slept:.1f}s")
        return slept


class SlidingWindowGovernor(BandwidthGovernor):
    """Like `BandwidthGovernor`, but only counts traffic from the last `window` seconds."""

    def __init__(self, ceiling_bps: int | None, window: float = 5.0):
        super().__init__(ceiling_bps)
        self.window = window
        self._samples: deque[tuple[float, int]] = deque()
        self._start_time: float | None = None

    def rate(self, start_time: float, bytes_so_far: int) -> float:
        if start_time != self._start_time:
            self._start_time = start_time
            self._samples = deque([(start_time, 0)])
        now = time.monotonic()
        self._samples.append((now, bytes_so_far))
        horizon = now - self.window
        while len(self._samples) > 1 and self._samples[1][0] <= horizon:
            self._samples.popleft()
        oldest_time, oldest_bytes = self._samples[0]
        elapsed = now - oldest_time
        if elapsed <= 0:
            return 0.0
        return (bytes_so_far - oldest_bytes) * 8 / elapsed


def make_governor(ceiling_bps: int | None, window: float | None = None) -> BandwidthGovernor:
    if window:
        return SlidingWindowGovernor(ceiling_bps, window)
    return BandwidthGovernor(ceiling_bps)
