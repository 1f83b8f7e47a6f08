"""
Parallel multi-segment retrieval for file targets.

The origin throttles each connection after an initial burst, so a large file
is split into contiguous ranges fetched over separate connections at once.
Each segment writes through its own file handle at its own offset.
"""

import asyncio
import logging
import math
import time
from pathlib import Path

from mediafetch.engine.fetcher import HttpResponse
from mediafetch.engine.monitor import TransferMonitor
from mediafetch.engine.sinks import FileSink, preallocate
from mediafetch.engine.supervisor import Opened, RetrySupervisor
from mediafetch.exceptions import (
    ConnectFailed,
    RateLimited,
    SegmentFailed,
    TimedOut,
)
from mediafetch.models.config import FetchConfig
from mediafetch.models.transfer import (
    FetchResult,
    ResourceDescriptor,
    Segment,
    SegmentState,
)
from mediafetch.utils.structured_logger import TransferLogger

log = logging.getLogger(__name__)


def chunk_size_for(length: int, max_workers: int, min_chunk_size: int) -> int:
    return max(math.ceil(length / max_workers), min_chunk_size)


def plan_segments(length: int, chunk_size: int) -> list[Segment]:
    """Splits [0, length) into consecutive ranges of `chunk_size` bytes (the last may be shorter)."""
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")
    segments = []
    start = 0
    while start < length:
        size = min(chunk_size, length - start)
        segments.append(Segment(index=len(segments), range_start=start, range_len=size))
        start += size
    return segments


class SegmentedScheduler:
    """Runs one asyncio task per segment, at most `max_workers` connected at a time."""

    def __init__(
        self,
        supervisor: RetrySupervisor,
        config: FetchConfig,
        events: TransferLogger | None = None,
    ):
        self.supervisor = supervisor
        self.fetcher = supervisor.fetcher
        self.config = config
        self.events = events

    async def fetch(
        self, descriptor: ResourceDescriptor, path: Path, monitor: TransferMonitor
    ) -> FetchResult:
        """
        Probes the resource with `Range: bytes=0-`, then fetches the remaining
        segments in parallel while the probe connection carries segment 0.

        Falls back to a single resumable stream when the origin does not answer
        the probe with a 206 carrying the total length.

        Raises:
            SegmentFailed: A segment got a bad status, stalled or ended short.
            FatalTransferError: The probe itself failed permanently.
        """
        started = time.monotonic()
        opened = await self.supervisor.open(descriptor)
        response = opened.response
        length = None
        if response.status == 206 and response.range_honoured:
            length = response.document_length

        if length is None:
            log.info(
                f"[yellow]No usable length for {opened.url}; using a single stream[/yellow]"
            )
            async with FileSink(path) as sink:
                return await self.supervisor.fetch(descriptor, sink, monitor, opened=opened)

        chunk_size = chunk_size_for(
            length, self.config.max_workers, self.config.min_chunk_size
        )
        segments = plan_segments(length, chunk_size)
        log.debug(
            f"Fetching {length} bytes as {len(segments)} segments of {chunk_size} bytes"
        )
        monitor.set_total(length)
        await preallocate(path, length)

        if not segments:
            self.fetcher.connections.release(response.connection, False)
            return self._result(opened, segments, started)

        semaphore = asyncio.Semaphore(self.config.max_workers)
        # Segment 0 runs on the probe connection, which already counts as open.
        await semaphore.acquire()
        tasks = [
            asyncio.create_task(
                self._run_first(segments[0], response, path, monitor, semaphore)
            )
        ]
        for segment in segments[1:]:
            tasks.append(
                asyncio.create_task(
                    self._run_segment(segment, descriptor, opened, path, monitor, semaphore)
                )
            )

        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return self._result(opened, segments, started)

    async def _run_first(
        self,
        segment: Segment,
        response: HttpResponse,
        path: Path,
        monitor: TransferMonitor,
        semaphore: asyncio.Semaphore,
    ) -> None:
        segment.connection = response.connection
        try:
            await self._stream_segment(segment, response, path, monitor)
        finally:
            # Read was cut short at the quota; the rest of the body is still queued.
            self.fetcher.connections.release(response.connection, False)
            segment.connection = None
            semaphore.release()

    async def _run_segment(
        self,
        segment: Segment,
        descriptor: ResourceDescriptor,
        opened: Opened,
        path: Path,
        monitor: TransferMonitor,
        semaphore: asyncio.Semaphore,
    ) -> None:
        async with semaphore:
            segment.state = SegmentState.FETCHING
            try:
                conn = await self.fetcher.connect(opened.url)
                segment.connection = conn
                response = await self.fetcher.request(
                    conn,
                    descriptor,
                    opened.url,
                    start_byte=segment.range_start,
                    max_bytes=segment.range_len,
                    referer=opened.referer,
                )
                segment.connection = response.connection
            except (ConnectFailed, TimedOut) as e:
                segment.state = SegmentState.FAILED
                raise SegmentFailed(f"segment {segment.index}: {e}", segment.index) from e

            try:
                if response.status != 206:
                    segment.state = SegmentState.FAILED
                    await response.read_error_body()
                    if response.status == 429:
                        raise RateLimited(
                            response.status,
                            response.status_line,
                            opened.url,
                            response.error_body,
                        )
                    raise SegmentFailed(
                        f"segment {segment.index}: {response.status_line}",
                        segment.index,
                    )
                if response.misplaced:
                    segment.state = SegmentState.FAILED
                    raise SegmentFailed(
                        f"segment {segment.index}: {response.range_error()}", segment.index
                    )
                await self._stream_segment(segment, response, path, monitor)
            finally:
                self.fetcher.finish(response)
                segment.connection = None

    async def _stream_segment(
        self,
        segment: Segment,
        response: HttpResponse,
        path: Path,
        monitor: TransferMonitor,
    ) -> None:
        segment.state = SegmentState.FETCHING
        started = time.monotonic()

        async def on_progress(n: int) -> None:
            segment.bytes_written += n
            await monitor.advance(n)

        try:
            async with FileSink(path, offset=segment.range_start, truncate=False) as sink:
                await response.stream_to(sink, limit=segment.range_len, on_progress=on_progress)
        except (ConnectFailed, TimedOut) as e:
            segment.state = SegmentState.FAILED
            raise SegmentFailed(f"segment {segment.index}: {e}", segment.index) from e

        if segment.bytes_written < segment.range_len:
            segment.state = SegmentState.FAILED
            raise SegmentFailed(
                f"segment {segment.index} ended after {segment.bytes_written} "
                f"of {segment.range_len} bytes",
                segment.index,
            )
        segment.state = SegmentState.DONE
        if self.events:
            self.events.segment_completed(
                segment.index,
                segment.range_start,
                segment.range_len,
                time.monotonic() - started,
            )

    @staticmethod
    def _result(opened: Opened, segments: list[Segment], started: float) -> FetchResult:
        response = opened.response
        return FetchResult(
            status_line=response.status_line,
            status=response.status,
            headers=response.headers,
            bytes_written=sum(s.bytes_written for s in segments),
            final_url=opened.url,
            elapsed=time.monotonic() - started,
            segments=len(segments),
        )


