"""
Tracks throughput statistics for a transfer, feeding the progress reporter.
"""

import time
from dataclasses import dataclass, field


@dataclass
class TransferStats:
    """Tracks bytes and real-time speed for one transfer."""

    total_bytes: int | None = None
    bytes_done: int = 0
    start_time: float = field(default_factory=time.monotonic)

    current_speed_bps: float = 0.0
    peak_speed_bps: float = 0.0
    _speed_samples: list[float] = field(default_factory=list, repr=False)
    _last_progress_time: float = field(default=0.0, repr=False)
    _last_progress_bytes: int = field(default=0, repr=False)

    def __post_init__(self):
        self._last_progress_time = self.start_time

    def update(self, bytes_done: int) -> None:
        """
        Records cumulative progress and refreshes the speed estimate.

        Speeds are in bits per second, averaged over a sliding window of the
        last 10 samples taken roughly twice per second.
        """
        self.bytes_done = bytes_done
        now = time.monotonic()
        elapsed = now - self._last_progress_time

        if elapsed > 0.5:
            bytes_diff = bytes_done - self._last_progress_bytes
            if bytes_diff > 0:
                self._speed_samples.append(bytes_diff * 8 / elapsed)
                if len(self._speed_samples) > 10:
                    self._speed_samples.pop(0)
                self.current_speed_bps = sum(self._speed_samples) / len(
                    self._speed_samples
                )
                self.peak_speed_bps = max(self.peak_speed_bps, self.current_speed_bps)

            self._last_progress_time = now
            self._last_progress_bytes = bytes_done

    def rewind(self, bytes_done: int = 0) -> None:
        """Moves progress back after discarded data; speed samples are kept."""
        self.bytes_done = bytes_done
        self._last_progress_bytes = bytes_done

    @property
    def ratio(self) -> float | None:
        if not self.total_bytes:
            return None
        return min(1.0, self.bytes_done / self.total_bytes)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start_time

    @property
    def average_bps(self) -> float:
        elapsed = self.elapsed
        return self.bytes_done * 8 / elapsed if elapsed > 0 else 0.0
