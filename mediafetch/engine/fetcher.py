"""
Issues one HTTP GET, optionally byte-ranged, and streams the body to a sink.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from mediafetch.exceptions import ConnectFailed, TimedOut, UnexpectedRange
from mediafetch.models.config import FetchConfig
from mediafetch.models.transfer import ResourceDescriptor
from mediafetch.net.connection import Connection, ConnectionManager
from mediafetch.net.http import (
    ResponseHead,
    build_request,
    parse_content_range,
    read_response_head,
    split_target,
)

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int], Awaitable[None]]

# Error bodies are only read to look for rate-limit wording.
MAX_ERROR_BODY = 64 * 1024


class HttpResponse:
    """A response whose head has been parsed and whose body is still on the wire."""

    def __init__(
        self,
        conn: Connection,
        head: ResponseHead,
        url: str,
        range_start: int | None,
        idle_timeout: float,
        buffer_size: int,
    ):
        self.connection = conn
        self.head = head
        self.url = url
        self.range_start = range_start
        self.idle_timeout = idle_timeout
        self.buffer_size = buffer_size
        self.bytes_read = 0
        self.eof = False
        self.error_body = b""
        self._stopped_early = False

        content_length = head.content_length
        content_range = parse_content_range(head.headers.get("Content-Range"))
        self.content_range = content_range
        if range_start is not None and head.status == 206 and content_range:
            self.document_length = content_range.total
            self.body_length = (
                content_length if content_length is not None else content_range.length
            )
        else:
            self.document_length = content_length if head.status == 200 else None
            self.body_length = content_length

    @property
    def status(self) -> int:
        return self.head.status

    @property
    def status_line(self) -> str:
        return self.head.status_line

    @property
    def headers(self):
        return self.head.headers

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def range_honoured(self) -> bool:
        """
        False when a ranged request was answered with the whole document, or
        with a slice that does not start at the requested byte.
        """
        if self.range_start is None:
            return True
        if self.status != 206:
            return False
        return self.content_range is None or self.content_range.first == self.range_start

    @property
    def misplaced(self) -> bool:
        """True for a 206 whose slice cannot be written where it was asked for."""
        return self.status == 206 and not self.range_honoured

    def range_error(self) -> UnexpectedRange:
        first = self.content_range.first
        return UnexpectedRange(
            f"asked for bytes from {self.range_start}, got {first}-{self.content_range.last}: "
            f"{self.url}",
            requested=self.range_start,
            received=first,
        )

    @property
    def complete(self) -> bool:
        return self.body_length is not None and self.bytes_read >= self.body_length

    @property
    def reusable(self) -> bool:
        return (
            self.head.keep_alive
            and self.complete
            and not self._stopped_early
            and not self.connection.closed
        )

    async def stream_to(
        self,
        sink,
        limit: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> int:
        """
        Copies the body into `sink` as it arrives.

        Stops exactly at the body length (or `limit`, if smaller) instead of
        waiting for the peer to close.

        Raises:
            TimedOut: No bytes arrived for `idle_timeout` seconds.
            ConnectFailed: The connection broke mid-body.
        """
        target = self.body_length
        if limit is not None:
            if target is None or limit < target:
                target = limit
                self._stopped_early = True

        reader = self.connection.reader
        while target is None or self.bytes_read < target:
            want = self.buffer_size
            if target is not None:
                want = min(want, target - self.bytes_read)
            try:
                data = await asyncio.wait_for(reader.read(want), self.idle_timeout)
            except asyncio.TimeoutError as e:
                raise TimedOut(
                    f"no data for {self.idle_timeout:.0f}s after "
                    f"{self.bytes_read} bytes: {self.url}",
                    bytes_received=self.bytes_read,
                ) from e
            except OSError as e:
                raise ConnectFailed(f"read failed after {self.bytes_read} bytes: {e}") from e
            if not data:
                self.eof = True
                break
            await sink.write(data)
            self.bytes_read += len(data)
            if on_progress is not None:
                await on_progress(len(data))
        return self.bytes_read

    async def read_error_body(self) -> bytes:
        """Reads a small, length-delimited error body; anything else is skipped."""
        if self.body_length is None or self.body_length > MAX_ERROR_BODY:
            return b""
        try:
            self.error_body = await asyncio.wait_for(
                self.connection.reader.readexactly(self.body_length), self.idle_timeout
            )
        except (asyncio.TimeoutError, asyncio.IncompleteReadError, OSError):
            log.debug(f"Could not read error body for {self.url}")
            return b""
        self.bytes_read = len(self.error_body)
        return self.error_body


class SingleStreamFetcher:
    """Sends requests over connections from the manager and parses the replies."""

    def __init__(self, connections: ConnectionManager, config: FetchConfig):
        self.connections = connections
        self.config = config

    async def connect(self, url: str) -> Connection:
        target = split_target(url)
        return await self.connections.acquire(target.scheme, target.host, target.port)

    async def request(
        self,
        conn: Connection,
        descriptor: ResourceDescriptor,
        url: str,
        start_byte: int = 0,
        max_bytes: int | None = None,
        referer: str | None = None,
        open_range: bool = False,
    ) -> HttpResponse:
        """
        Sends the request and reads the response head.

        A Range header is sent when `start_byte` is non-zero, when `max_bytes`
        windows the read, or when `open_range` asks for `bytes=0-`.
        """
        target = split_target(url)
        range_start = None
        range_end = None
        if start_byte or max_bytes or open_range:
            range_start = start_byte
            if max_bytes:
                range_end = start_byte + max_bytes - 1

        payload = build_request(
            target,
            user_agent=self.config.user_agent,
            referer=referer if referer is not None else descriptor.referer,
            extra_headers=descriptor.extra_headers,
            range_start=range_start,
            range_end=range_end,
            absolute_form=conn.via_proxy,
        )
        log.debug(f"GET {url} (range {range_start}-{range_end or ''})")

        try:
            head = await self._exchange(conn, payload, target.host)
        except ConnectFailed as e:
            if not conn.reused:
                raise
            # The origin dropped the socket while it sat idle in the pool.
            log.debug(f"Pooled connection to {target.host} went stale ({e}); reconnecting")
            conn = await self.connections.acquire(
                conn.scheme, conn.host, conn.port, fresh=True
            )
            head = await self._exchange(conn, payload, target.host)

        log.debug(f"{head.status_line} <- {url}")
        return HttpResponse(
            conn,
            head,
            url,
            range_start,
            self.config.idle_timeout,
            self.config.buffer_size,
        )

    async def _exchange(self, conn: Connection, payload: bytes, host: str) -> ResponseHead:
        try:
            conn.writer.write(payload)
            await conn.writer.drain()
            return await read_response_head(conn.reader, self.config.idle_timeout)
        except OSError as e:
            conn.close()
            raise ConnectFailed(f"request to {host} failed: {e}") from e
        except BaseException:
            conn.close()
            raise

    async def fetch(
        self,
        conn: Connection,
        descriptor: ResourceDescriptor,
        url: str,
        sink,
        start_byte: int = 0,
        max_bytes: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> HttpResponse:
        """
        Performs one complete request: head, then body into `sink` for 2xx
        responses or a short error body otherwise. The connection is released
        afterwards, to the pool only if the exchange ended cleanly.
        """
        response = await self.request(conn, descriptor, url, start_byte, max_bytes)
        try:
            if response.ok:
                await response.stream_to(sink, limit=max_bytes, on_progress=on_progress)
            else:
                await response.read_error_body()
        finally:
            self.finish(response)
        return response

    def finish(self, response: HttpResponse) -> None:
        self.connections.release(response.connection, response.reusable)
