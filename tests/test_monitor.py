"""Tests for the transfer monitor, the bandwidth governors, sinks and progress output."""

from __future__ import annotations

import asyncio
import io
import time
from pathlib import Path

from mediafetch.cli.progress import TextProgressReporter
from mediafetch.engine.governor import (
    BandwidthGovernor,
    SlidingWindowGovernor,
    make_governor,
)
from mediafetch.engine.monitor import TransferMonitor
from mediafetch.engine.sinks import FileSink, MemorySink, preallocate


class RecordingReporter:
    def __init__(self):
        self.calls = []

    def report(self, ratio, bps, is_final):
        self.calls.append((ratio, is_final))


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_monitor_aggregates_and_reports() -> None:
    reporter = RecordingReporter()
    monitor = TransferMonitor(BandwidthGovernor(None), reporter, total_bytes=100)

    async def scenario():
        await monitor.advance(25)
        await monitor.advance(25)

    asyncio.run(scenario())
    monitor.finish()
    assert monitor.stats.bytes_done == 50
    assert reporter.calls == [(0.25, False), (0.5, False), (0.5, True)]


def test_monitor_rewind_keeps_received_count() -> None:
    monitor = TransferMonitor(BandwidthGovernor(None))
    asyncio.run(monitor.advance(40))
    monitor.rewind(0)
    asyncio.run(monitor.advance(10))
    assert monitor.stats.bytes_done == 10
    assert monitor.received == 50


def test_unknown_total_reports_no_ratio() -> None:
    reporter = RecordingReporter()
    monitor = TransferMonitor(BandwidthGovernor(None), reporter)
    asyncio.run(monitor.advance(10))
    assert reporter.calls == [(None, False)]


def test_disabled_governor_never_sleeps() -> None:
    governor = make_governor(None)
    assert not governor.enabled
    assert asyncio.run(governor.throttle(time.monotonic(), 10**9)) == 0.0


def test_governor_sleeps_until_under_ceiling() -> None:
    governor = BandwidthGovernor(800_000)
    start = time.monotonic()
    # 20 KB at 800 Kbps takes 0.2s.
    slept = asyncio.run(governor.throttle(start, 20_000))
    assert slept >= 0.1
    assert time.monotonic() - start >= 0.2
    assert governor.rate(start, 20_000) <= 800_000


def test_make_governor_picks_window() -> None:
    governor = make_governor(1_000_000, window=2.0)
    assert isinstance(governor, SlidingWindowGovernor)
    assert governor.window == 2.0
    assert type(make_governor(1_000_000)) is BandwidthGovernor


def test_sliding_window_forgets_old_traffic() -> None:
    governor = SlidingWindowGovernor(1_000_000, window=0.05)
    start = time.monotonic() - 10
    governor.rate(start, 0)
    time.sleep(0.06)
    governor.rate(start, 1_000_000)
    time.sleep(0.06)
    # Nothing new arrived within the window.
    assert governor.rate(start, 1_000_000) == 0.0


def test_memory_sink_rewind() -> None:
    async def scenario():
        sink = MemorySink()
        await sink.write(b"abc")
        await sink.rewind()
        await sink.write(b"xy")
        return sink

    sink = asyncio.run(scenario())
    assert sink.getvalue() == b"xy"
    assert sink.position == 2


def test_file_sinks_write_at_offsets(tmp_path: Path) -> None:
    path = tmp_path / "out.bin"

    async def scenario():
        await preallocate(path, 6)
        async with FileSink(path, offset=3, truncate=False) as tail:
            await tail.write(b"DEF")
        async with FileSink(path, offset=0, truncate=False) as head:
            await head.write(b"abc")
            await head.rewind()
            await head.write(b"ABC")

    asyncio.run(scenario())
    assert path.read_bytes() == b"ABCDEF"


def test_file_sink_rewind_truncates(tmp_path: Path) -> None:
    path = tmp_path / "out.bin"

    async def scenario():
        async with FileSink(path) as sink:
            await sink.write(b"0123456789")
            await sink.rewind()
            await sink.write(b"ok")

    asyncio.run(scenario())
    assert path.read_bytes() == b"ok"


def test_text_progress_renders_dots_and_rate() -> None:
    reporter = TextProgressReporter(io.StringIO(), columns=10)
    assert reporter.render(0.5, 12_400_000) == "....." + " " * 5 + "  50% 12.4 Mbps"
    assert reporter.render(None, 1_500) == "1.5 Kbps"


def test_text_progress_throttles_and_erases() -> None:
    stream = io.StringIO()
    clock = FakeClock()
    reporter = TextProgressReporter(stream, columns=4, clock=clock)

    reporter.report(0.5, 0, False)
    clock.now = 0.5
    reporter.report(0.75, 0, False)
    first = stream.getvalue()
    assert first == "\r.." + " " * 2 + "  50% 0 bps"

    clock.now = 1.5
    reporter.report(1.0, 0, False)
    assert stream.getvalue().endswith("\r.... 100% 0 bps")

    reporter.report(1.0, 0, True)
    assert stream.getvalue().endswith("\r" + " " * len(".... 100% 0 bps") + "\r")
