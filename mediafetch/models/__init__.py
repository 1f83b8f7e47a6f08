"""
Data Models Layer.

This package contains the configuration model and the data structures that
describe a transfer: descriptors, progress state, segments and results.
"""

from .config import FetchConfig, ProxySpec, parse_proxy
from .stats import TransferStats
from .transfer import (
    FetchResult,
    OutputKind,
    OutputTarget,
    ResourceDescriptor,
    Segment,
    SegmentState,
    TransferState,
)

__all__ = [
    "FetchConfig",
    "FetchResult",
    "OutputKind",
    "OutputTarget",
    "ProxySpec",
    "ResourceDescriptor",
    "Segment",
    "SegmentState",
    "TransferState",
    "TransferStats",
    "parse_proxy",
]
