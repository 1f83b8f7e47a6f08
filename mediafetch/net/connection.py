"""
Opens plain and TLS connections, optionally through an upstream proxy, and
keeps idle keep-alive connections in an injected pool.
"""

import asyncio
import logging
import ssl

from mediafetch.exceptions import ConnectFailed, ProxyError
from mediafetch.models.config import ProxySpec
from mediafetch.net.http import DEFAULT_PORTS, parse_status_line

log = logging.getLogger(__name__)

PoolKey = tuple[str, str, int]


def insecure_ssl_context() -> ssl.SSLContext:
    """
    TLS context with certificate validation disabled.

    Media edge nodes present certificates that cannot be verified, so only
    transport confidentiality is relied upon. SNI is still sent.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class Connection:
    """An open stream to an origin (or to a proxy speaking for it)."""

    def __init__(
        self,
        key: PoolKey,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        via_proxy: bool = False,
    ):
        self.key = key
        self.reader = reader
        self.writer = writer
        self.via_proxy = via_proxy
        self.reused = False

    @property
    def scheme(self) -> str:
        return self.key[0]

    @property
    def host(self) -> str:
        return self.key[1]

    @property
    def port(self) -> int:
        return self.key[2]

    @property
    def closed(self) -> bool:
        return self.writer.is_closing()

    def close(self) -> None:
        if not self.writer.is_closing():
            self.writer.close()

    def __repr__(self) -> str:
        return f"<Connection {self.scheme}://{self.host}:{self.port}>"


class KeepAlivePool:
    """
    Idle connections keyed by (scheme, host, port).

    A connection is removed when it is taken, so it is never shared by two
    requests. Neither method awaits, so each update is a single uninterrupted
    step on the event loop.
    """

    def __init__(self):
        self._entries: dict[PoolKey, Connection] = {}

    def take(self, key: PoolKey) -> Connection | None:
        conn = self._entries.pop(key, None)
        if conn is None:
            return None
        if conn.closed or conn.reader.at_eof():
            conn.close()
            return None
        return conn

    def put(self, conn: Connection) -> None:
        previous = self._entries.get(conn.key)
        if previous is not None and previous is not conn:
            previous.close()
        self._entries[conn.key] = conn

    def close_all(self) -> None:
        for conn in self._entries.values():
            conn.close()
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: PoolKey) -> bool:
        return key in self._entries


class ConnectionManager:
    """Hands out connections, reusing pooled ones when possible."""

    def __init__(
        self,
        pool: KeepAlivePool | None = None,
        proxy: ProxySpec | None = None,
        connect_timeout: float = 30.0,
        ssl_context: ssl.SSLContext | None = None,
    ):
        self.pool = pool if pool is not None else KeepAlivePool()
        self.proxy = proxy
        self.connect_timeout = connect_timeout
        self.ssl_context = ssl_context or insecure_ssl_context()

    async def acquire(
        self, scheme: str, host: str, port: int | None = None, fresh: bool = False
    ) -> Connection:
        """
        Returns a connection to scheme://host:port, from the pool unless `fresh`.

        Raises:
            ConnectFailed: The socket, TLS handshake or proxy stream failed.
            ProxyError: The proxy refused the CONNECT tunnel.
        """
        scheme = scheme.lower()
        if scheme not in DEFAULT_PORTS:
            raise ConnectFailed(f"unsupported scheme '{scheme}'")
        key = (scheme, host.lower(), port or DEFAULT_PORTS[scheme])

        conn = None if fresh else self.pool.take(key)
        if conn is not None:
            conn.reused = True
            log.debug(f"Reusing keep-alive connection to {host}:{key[2]}")
            return conn

        if self.proxy:
            return await self._open_via_proxy(key)

        reader, writer = await self._open_stream(
            key[1], key[2], tls_host=key[1] if scheme == "https" else None
        )
        return Connection(key, reader, writer)

    def release(self, conn: Connection, reusable: bool) -> None:
        """Returns a connection to the pool, or closes it."""
        if reusable and not conn.closed:
            self.pool.put(conn)
        else:
            conn.close()

    def close(self) -> None:
        self.pool.close_all()

    async def __aenter__(self) -> "ConnectionManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def _open_stream(
        self, host: str, port: int, tls_host: str | None = None
    ) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        try:
            return await asyncio.wait_for(
                asyncio.open_connection(
                    host,
                    port,
                    ssl=self.ssl_context if tls_host else None,
                    server_hostname=tls_host,
                ),
                self.connect_timeout,
            )
        except asyncio.TimeoutError as e:
            raise ConnectFailed(f"connect: {host}:{port}: timed out") from e
        except OSError as e:
            raise ConnectFailed(f"connect: {host}:{port}: {e}") from e

    async def _open_via_proxy(self, key: PoolKey) -> Connection:
        scheme, host, port = key
        proxy = self.proxy
        reader, writer = await self._open_stream(
            proxy.host,
            proxy.port,
            tls_host=proxy.host if proxy.scheme == "https" else None,
        )

        if scheme == "http":
            # Plain targets are requested in absolute form through the proxy.
            return Connection(key, reader, writer, via_proxy=True)

        target = f"{host}:{port}"
        log.debug(f"Opening CONNECT tunnel to {target} via {proxy.url}")
        writer.write(
            f"CONNECT {target} HTTP/1.1\r\nHost: {target}\r\n\r\n".encode("latin-1")
        )
        try:
            await writer.drain()
            head = await asyncio.wait_for(
                reader.readuntil(b"\r\n\r\n"), self.connect_timeout
            )
        except asyncio.TimeoutError as e:
            writer.close()
            raise ConnectFailed(f"proxy {proxy.url}: CONNECT timed out") from e
        except (OSError, asyncio.IncompleteReadError, asyncio.LimitOverrunError) as e:
            writer.close()
            raise ConnectFailed(f"proxy {proxy.url}: {e}") from e

        status_line = head.split(b"\r\n", 1)[0].decode("latin-1")
        try:
            _, status = parse_status_line(status_line)
        except ValueError as e:
            writer.close()
            raise ProxyError(f"proxy {proxy.url}: {e}") from e
        if not 200 <= status < 300:
            writer.close()
            raise ProxyError(f"CONNECT {target} via {proxy.url}: {status_line}")

        try:
            await asyncio.wait_for(
                writer.start_tls(self.ssl_context, server_hostname=host),
                self.connect_timeout,
            )
        except asyncio.TimeoutError as e:
            writer.close()
            raise ConnectFailed(f"TLS via proxy to {target}: timed out") from e
        except OSError as e:
            writer.close()
            raise ConnectFailed(f"TLS via proxy to {target}: {e}") from e
        return Connection(key, reader, writer)
