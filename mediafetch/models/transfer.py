"""
Data structures describing a single retrieval: what to fetch, how far it got,
and the pieces a parallel transfer is split into.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from multidict import CIMultiDict, CIMultiDictProxy

if TYPE_CHECKING:
    from mediafetch.net.connection import Connection


class OutputKind(Enum):
    FILE = "file"
    MEMORY = "memory"


@dataclass(frozen=True)
class OutputTarget:
    """Where the body of a resource ends up."""

    kind: OutputKind
    path: Path | None = None

    @classmethod
    def file(cls, path: str | Path) -> "OutputTarget":
        return cls(OutputKind.FILE, Path(path))

    @classmethod
    def memory(cls) -> "OutputTarget":
        return cls(OutputKind.MEMORY)

    @property
    def is_file(self) -> bool:
        return self.kind is OutputKind.FILE


@dataclass(frozen=True)
class ResourceDescriptor:
    """Everything the discovery layer hands the engine for one fetch."""

    url: str
    output: OutputTarget = field(default_factory=OutputTarget.memory)
    referer: str | None = None
    extra_headers: tuple[tuple[str, str], ...] = ()
    expected_bytes: int | None = None


@dataclass
class TransferState:
    """Progress of the current redirect hop. Reset whenever a redirect is followed."""

    bytes_written: int = 0
    document_length: int | None = None
    last_http_status: int | None = None
    headers: CIMultiDictProxy = field(
        default_factory=lambda: CIMultiDictProxy(CIMultiDict())
    )

    def reset(self) -> None:
        self.bytes_written = 0
        self.document_length = None
        self.last_http_status = None
        self.headers = CIMultiDictProxy(CIMultiDict())


class SegmentState(Enum):
    PENDING = "pending"
    FETCHING = "fetching"
    DONE = "done"
    FAILED = "failed"


@dataclass
class Segment:
    """One contiguous byte range of a resource, fetched by one connection."""

    index: int
    range_start: int
    range_len: int
    state: SegmentState = SegmentState.PENDING
    bytes_written: int = 0
    connection: Optional["Connection"] = field(default=None, repr=False)

    @property
    def range_end(self) -> int:
        """Exclusive end offset."""
        return self.range_start + self.range_len


@dataclass
class FetchResult:
    """What the caller receives once a transfer completed and was length-verified."""

    status_line: str
    status: int
    headers: CIMultiDictProxy
    bytes_written: int
    final_url: str
    body: bytes | None = None
    path: Path | None = None
    elapsed: float = 0.0
    segments: int = 1

    @property
    def content_type(self) -> str | None:
        value = self.headers.get("Content-Type")
        return value.split(";")[0].strip() if value else None
