"""
Entry point of the engine: picks the single-stream or segmented path for a
descriptor and manages the output file around it.
"""

import dataclasses
import logging
import os
from pathlib import Path

from mediafetch.engine.fetcher import SingleStreamFetcher
from mediafetch.engine.governor import make_governor
from mediafetch.engine.monitor import ProgressReporter, TransferMonitor
from mediafetch.engine.segmented import SegmentedScheduler
from mediafetch.engine.sinks import FileSink, MemorySink
from mediafetch.engine.supervisor import RetrySupervisor
from mediafetch.exceptions import MediaFetchError
from mediafetch.models.config import FetchConfig
from mediafetch.models.transfer import FetchResult, ResourceDescriptor
from mediafetch.net.connection import ConnectionManager, KeepAlivePool
from mediafetch.utils.formatting import format_summary
from mediafetch.utils.structured_logger import TransferLogger

log = logging.getLogger(__name__)

PART_SUFFIX = ".part"
DEFAULT_PROBE_BYTES = 910 * 1024


def partial_path(path: Path) -> Path:
    return path.with_name(path.name + PART_SUFFIX)


class MediaDownloader:
    """
    Fetches resource descriptors into files or memory.

    One instance owns one keep-alive pool, so several fetches in a row reuse
    connections. Use it as an async context manager to close them at the end.
    """

    def __init__(
        self,
        config: FetchConfig,
        pool: KeepAlivePool | None = None,
        reporter: ProgressReporter | None = None,
        events: TransferLogger | None = None,
        keep_partial: bool = False,
    ):
        self.config = config
        self.reporter = reporter
        self.events = events
        self.keep_partial = keep_partial
        self.connections = ConnectionManager(
            pool=pool,
            proxy=config.proxy_spec,
            connect_timeout=config.connect_timeout,
        )
        self.fetcher = SingleStreamFetcher(self.connections, config)
        self.supervisor = RetrySupervisor(self.fetcher, config, events)
        self.scheduler = SegmentedScheduler(self.supervisor, config, events)

    def _monitor(self, descriptor: ResourceDescriptor) -> TransferMonitor:
        governor = make_governor(self.config.bandwidth_limit, self.config.bandwidth_window)
        return TransferMonitor(governor, self.reporter, descriptor.expected_bytes)

    def use_segments(self, descriptor: ResourceDescriptor) -> bool:
        return (
            descriptor.output.is_file
            and descriptor.expected_bytes is not None
            and descriptor.expected_bytes >= self.config.segment_threshold
        )

    async def fetch(self, descriptor: ResourceDescriptor) -> FetchResult:
        """
        Retrieves one resource.

        File targets are written to `<path>.part` and renamed into place only
        once the whole length has arrived.

        Raises:
            MediaFetchError: The transfer failed; no partial output remains
                unless `keep_partial` was set.
        """
        segmented = self.use_segments(descriptor)
        target = str(descriptor.output.path) if descriptor.output.is_file else "memory"
        if self.events:
            self.events.transfer_started(
                descriptor.url, target, descriptor.expected_bytes, segmented
            )

        monitor = self._monitor(descriptor)
        try:
            if descriptor.output.is_file:
                result = await self._fetch_file(descriptor, monitor, segmented)
            else:
                result = await self._fetch_memory(descriptor, monitor)
        except MediaFetchError as e:
            if self.events:
                self.events.transfer_failed(
                    descriptor.url, str(e), type(e).__name__, monitor.stats.bytes_done
                )
            raise
        finally:
            monitor.finish()

        log.info(f"Fetched {result.final_url}: {format_summary(result.bytes_written, result.elapsed)}")
        if self.events:
            self.events.transfer_completed(
                result.final_url,
                result.bytes_written,
                result.elapsed,
                monitor.stats.average_bps / 1_000_000,
                result.segments,
            )
        return result

    async def _fetch_memory(
        self, descriptor: ResourceDescriptor, monitor: TransferMonitor
    ) -> FetchResult:
        sink = MemorySink()
        result = await self.supervisor.fetch(descriptor, sink, monitor)
        return dataclasses.replace(result, body=sink.getvalue())

    async def _fetch_file(
        self, descriptor: ResourceDescriptor, monitor: TransferMonitor, segmented: bool
    ) -> FetchResult:
        path = descriptor.output.path
        part = partial_path(path)
        try:
            if segmented:
                result = await self.scheduler.fetch(descriptor, part, monitor)
            else:
                async with FileSink(part) as sink:
                    result = await self.supervisor.fetch(descriptor, sink, monitor)
        except BaseException:
            self._discard(part)
            raise
        os.replace(part, path)
        return dataclasses.replace(result, path=path)

    async def probe(
        self, url: str, max_bytes: int = DEFAULT_PROBE_BYTES, referer: str | None = None
    ) -> FetchResult:
        """
        Fetches only the first `max_bytes` of a resource, following redirects,
        to learn its content type and total size.
        """
        descriptor = ResourceDescriptor(url=url, referer=referer)
        opened = await self.supervisor.open(descriptor)
        response = opened.response
        sink = MemorySink()
        try:
            await response.stream_to(sink, limit=max_bytes)
        finally:
            self.fetcher.finish(response)
        length = response.document_length
        return FetchResult(
            status_line=response.status_line,
            status=response.status,
            headers=response.headers,
            bytes_written=length if length is not None else sink.position,
            final_url=opened.url,
            body=sink.getvalue(),
        )

    def _discard(self, part: Path) -> None:
        if not part.exists():
            return
        if self.keep_partial:
            log.warning(f"[yellow]Keeping partial file '{part}'[/yellow]")
            return
        try:
            part.unlink()
            log.debug(f"Removed partial file '{part}'")
        except OSError as e:
            log.warning(f"Could not remove partial file '{part}': {e}")

    async def close(self) -> None:
        self.connections.close()

    async def __aenter__(self) -> "MediaDownloader":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
