"""
Retrieval Engine Layer.

This package contains the single-stream fetcher, the redirect/retry
supervisor, the segmented parallel scheduler and the bandwidth governor,
tied together by `MediaDownloader`.
"""

from .downloader import MediaDownloader, partial_path
from .fetcher import HttpResponse, SingleStreamFetcher
from .governor import BandwidthGovernor, SlidingWindowGovernor, make_governor
from .monitor import ProgressReporter, TransferMonitor
from .segmented import SegmentedScheduler, chunk_size_for, plan_segments
from .sinks import FileSink, MemorySink, preallocate
from .supervisor import (
    AttemptOutcome,
    RedirectPolicy,
    RetrySupervisor,
    SupervisorState,
    next_state,
)

__all__ = [
    "AttemptOutcome",
    "BandwidthGovernor",
    "FileSink",
    "HttpResponse",
    "MediaDownloader",
    "MemorySink",
    "ProgressReporter",
    "RedirectPolicy",
    "RetrySupervisor",
    "SegmentedScheduler",
    "SingleStreamFetcher",
    "SlidingWindowGovernor",
    "SupervisorState",
    "TransferMonitor",
    "chunk_size_for",
    "make_governor",
    "next_state",
    "partial_path",
    "plan_segments",
    "preallocate",
]
