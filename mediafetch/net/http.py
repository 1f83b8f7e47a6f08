"""
HTTP/1.x wire helpers: request serialisation and a buffered reader for the
response head (status line, then header lines up to the blank line).

Requests are sent as HTTP/1.0 with `Connection: keep-alive`, which keeps
responses length-delimited (no chunked encoding) while still allowing reuse.
"""

import asyncio
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from multidict import CIMultiDict, CIMultiDictProxy

from mediafetch.exceptions import ConnectFailed, TimedOut

REQUEST_VERSION = "HTTP/1.0"
DEFAULT_PORTS = {"http": 80, "https": 443}

_STATUS_LINE_REGEX = re.compile(r"^HTTP/(?P<version>\d+(?:\.\d+)?)\s+(?P<status>\d{3})\b")
_CONTENT_RANGE_REGEX = re.compile(
    r"^\s*bytes\s+(?P<first>\d+)\s*-\s*(?P<last>\d+)\s*/\s*(?P<total>\S+)\s*$",
    re.IGNORECASE,
)
_MAX_HEADER_LINES = 200


@dataclass(frozen=True)
class Target:
    """The parts of a URL the connection layer and request line need."""

    scheme: str
    host: str
    port: int
    path: str

    @property
    def host_header(self) -> str:
        if self.port == DEFAULT_PORTS.get(self.scheme):
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def absolute_url(self) -> str:
        return f"{self.scheme}://{self.host_header}{self.path}"


def split_target(url: str) -> Target:
    """Splits an http(s) URL into scheme, host, port and request path."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise ConnectFailed(f"not an HTTP URL: {url}")
    if not parts.hostname:
        raise ConnectFailed(f"no host in URL: {url}")
    try:
        port = parts.port or DEFAULT_PORTS[scheme]
    except ValueError as e:
        raise ConnectFailed(f"bad port in URL: {url}") from e
    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    return Target(scheme=scheme, host=parts.hostname, port=port, path=path)


@dataclass(frozen=True)
class ContentRange:
    first: int
    last: int
    total: int | None

    @property
    def length(self) -> int:
        return self.last - self.first + 1


def parse_content_range(value: str | None) -> ContentRange | None:
    """Parses `bytes A-B/TOTAL`. A non-numeric TOTAL (`*`) means unknown length."""
    if not value:
        return None
    match = _CONTENT_RANGE_REGEX.match(value)
    if not match:
        return None
    total = match.group("total")
    return ContentRange(
        first=int(match.group("first")),
        last=int(match.group("last")),
        total=int(total) if total.isdigit() else None,
    )


def parse_status_line(line: str) -> tuple[str, int]:
    """Returns (http version, status code) or raises ValueError."""
    match = _STATUS_LINE_REGEX.match(line)
    if not match:
        raise ValueError(f"Malformed status line: {line!r}")
    return match.group("version"), int(match.group("status"))


def build_request(
    target: Target,
    *,
    user_agent: str,
    referer: str | None = None,
    extra_headers: tuple[tuple[str, str], ...] = (),
    range_start: int | None = None,
    range_end: int | None = None,
    absolute_form: bool = False,
    keep_alive: bool = True,
) -> bytes:
    """
    Serialises a GET request.

    Args:
        range_start: First byte to request; None sends no Range header.
        range_end: Inclusive last byte; None requests to the end.
        absolute_form: Use the full URL in the request line (plain HTTP via proxy).
    """
    request_target = target.absolute_url if absolute_form else target.path
    lines = [
        f"GET {request_target} {REQUEST_VERSION}",
        f"Host: {target.host_header}",
        f"User-Agent: {user_agent}",
    ]
    if referer:
        lines.append(f"Referer: {referer}")
    for name, value in extra_headers:
        # Header values must not smuggle extra lines into the request.
        name = name.strip()
        value = re.sub(r"[\r\n]+", " ", value).strip()
        if name:
            lines.append(f"{name}: {value}")
    if range_start is not None:
        end = "" if range_end is None else str(range_end)
        lines.append(f"Range: bytes={range_start}-{end}")
    if keep_alive:
        lines.append("Connection: keep-alive")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1", errors="replace")


@dataclass(frozen=True)
class ResponseHead:
    status_line: str
    version: str
    status: int
    headers: CIMultiDictProxy

    @property
    def keep_alive(self) -> bool:
        tokens = {
            token.strip().lower()
            for value in self.headers.getall("Connection", [])
            for token in value.split(",")
        }
        if self.version == "1.0":
            return "keep-alive" in tokens
        return "close" not in tokens

    @property
    def content_length(self) -> int | None:
        value = self.headers.get("Content-Length", "").strip()
        return int(value) if value.isdigit() else None

    @property
    def location(self) -> str | None:
        value = self.headers.get("Location")
        return value.strip() if value else None


async def read_line(reader: asyncio.StreamReader, idle_timeout: float) -> str:
    """Reads one CRLF- or LF-terminated line, honouring the idle timeout."""
    try:
        raw = await asyncio.wait_for(reader.readline(), idle_timeout)
    except asyncio.TimeoutError as e:
        raise TimedOut(f"no data for {idle_timeout:.0f}s while reading headers") from e
    except ValueError as e:
        raise ConnectFailed(f"header line too long: {e}") from e
    except OSError as e:
        raise ConnectFailed(f"read failed: {e}") from e
    return raw.decode("latin-1")


async def read_header_block(
    reader: asyncio.StreamReader, idle_timeout: float
) -> CIMultiDict:
    """Reads header lines up to (and consuming) the blank line that ends them."""
    pairs: list[list[str]] = []
    for _ in range(_MAX_HEADER_LINES):
        line = await read_line(reader, idle_timeout)
        if not line:
            raise ConnectFailed("connection closed inside response headers")
        line = line.rstrip("\r\n")
        if not line:
            return CIMultiDict([(name, value) for name, value in pairs])
        if line[0] in " \t" and pairs:
            # Obsolete line folding: continue the previous header.
            pairs[-1][1] = f"{pairs[-1][1]} {line.strip()}"
            continue
        name, sep, value = line.partition(":")
        if sep:
            pairs.append([name.strip(), value.strip()])
    raise ConnectFailed("too many response header lines")


async def read_response_head(
    reader: asyncio.StreamReader, idle_timeout: float
) -> ResponseHead:
    """Reads the status line and header block of a response."""
    status_line = (await read_line(reader, idle_timeout)).rstrip("\r\n")
    if not status_line:
        raise ConnectFailed("null response")
    try:
        version, status = parse_status_line(status_line)
    except ValueError as e:
        raise ConnectFailed(str(e)) from e
    headers = await read_header_block(reader, idle_timeout)
    return ResponseHead(
        status_line=status_line,
        version=version,
        status=status,
        headers=CIMultiDictProxy(headers),
    )
