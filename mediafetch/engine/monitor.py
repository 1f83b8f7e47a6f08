"""
Aggregates bytes across the streams of one transfer and drives the progress
reporter and the bandwidth governor from that single count.
"""

from typing import Protocol

from mediafetch.engine.governor import BandwidthGovernor
from mediafetch.models.stats import TransferStats


class ProgressReporter(Protocol):
    def report(self, ratio: float | None, bps: float, is_final: bool) -> None: ...


class TransferMonitor:
    """
    Shared by every stream of a transfer.

    `received` counts every byte read off the wire, including bytes later
    discarded by a rewind, and is what the governor limits. `stats.bytes_done`
    counts bytes that are part of the result and drives progress.
    """

    def __init__(
        self,
        governor: BandwidthGovernor,
        reporter: ProgressReporter | None = None,
        total_bytes: int | None = None,
    ):
        self.governor = governor
        self.reporter = reporter
        self.stats = TransferStats(total_bytes=total_bytes)
        self.received = 0

    @property
    def start_time(self) -> float:
        return self.stats.start_time

    def set_total(self, total_bytes: int | None) -> None:
        self.stats.total_bytes = total_bytes

    def rewind(self, bytes_done: int = 0) -> None:
        self.stats.rewind(bytes_done)

    async def advance(self, n: int) -> None:
        self.received += n
        self.stats.update(self.stats.bytes_done + n)
        if self.reporter is not None:
            self.reporter.report(self.stats.ratio, self.stats.current_speed_bps, False)
        await self.governor.throttle(self.start_time, self.received)

    def finish(self) -> None:
        if self.reporter is not None:
            self.reporter.report(self.stats.ratio, self.stats.average_bps, True)
