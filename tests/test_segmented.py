"""Tests for segment planning and parallel segmented transfers."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import pytest
from origin import Origin, Reply, Request, serve_bytes

from mediafetch.engine import segmented
from mediafetch.engine.downloader import MediaDownloader, partial_path
from mediafetch.engine.fetcher import SingleStreamFetcher
from mediafetch.engine.segmented import chunk_size_for, plan_segments
from mediafetch.exceptions import RateLimited, SegmentFailed
from mediafetch.net.connection import ConnectionManager
from mediafetch.models.config import FetchConfig
from mediafetch.models.transfer import OutputTarget, ResourceDescriptor

SIZE = 4_000_000
DATA = os.urandom(SIZE)


def make_config(**overrides) -> FetchConfig:
    defaults = {
        "retry_delay": 0,
        "idle_timeout": 5,
        "max_workers": 4,
        "segment_threshold": 1_000_000,
        "min_chunk_size": 10 * 1024,
    }
    defaults.update(overrides)
    return FetchConfig(**defaults)


def assert_covers(segments, length: int) -> None:
    position = 0
    for index, segment in enumerate(segments):
        assert segment.index == index
        assert segment.range_start == position
        assert segment.range_len > 0
        position = segment.range_end
    assert position == length


def test_plan_for_25mb_with_4_workers() -> None:
    length = 25_000_000
    chunk = chunk_size_for(length, max_workers=4, min_chunk_size=10 * 1024)
    segments = plan_segments(length, chunk)
    assert chunk == 6_250_000
    assert [s.range_len for s in segments] == [6_250_000] * 4
    assert_covers(segments, length)


@pytest.mark.parametrize(
    ("length", "workers", "min_chunk"),
    [(1, 30, 10240), (10_485_761, 30, 10240), (100_003, 7, 1), (50_000, 30, 10240)],
)
def test_plan_covers_every_byte_once(length: int, workers: int, min_chunk: int) -> None:
    segments = plan_segments(length, chunk_size_for(length, workers, min_chunk))
    assert_covers(segments, length)
    assert len(segments) <= workers


def test_small_resources_use_min_chunk_size() -> None:
    assert chunk_size_for(50_000, 30, 10240) == 10240
    assert len(plan_segments(50_000, 10240)) == 5


def test_empty_plan_and_bad_chunk() -> None:
    assert plan_segments(0, 10) == []
    with pytest.raises(ValueError):
        plan_segments(10, 0)


def fetch_file(handler, target: Path, config: FetchConfig | None = None):
    async def scenario():
        async with Origin(handler) as origin:
            descriptor = ResourceDescriptor(
                url=origin.url("/video"),
                output=OutputTarget.file(target),
                expected_bytes=SIZE,
            )
            async with MediaDownloader(config or make_config()) as downloader:
                result = await downloader.fetch(descriptor)
            return origin, result

    return asyncio.run(scenario())


def test_segmented_fetch_assembles_file(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"
    origin, result = fetch_file(lambda request: serve_bytes(DATA, request), target)

    assert target.read_bytes() == DATA
    assert not partial_path(target).exists()
    assert result.segments == 4
    assert result.bytes_written == SIZE

    ranges = sorted(request.headers["range"] for request in origin.requests)
    assert ranges == [
        "bytes=0-",
        "bytes=1000000-1999999",
        "bytes=2000000-2999999",
        "bytes=3000000-3999999",
    ]


def test_origin_without_ranges_falls_back_to_one_stream(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"
    origin, result = fetch_file(
        lambda request: serve_bytes(DATA, request, honour_range=False), target
    )

    assert target.read_bytes() == DATA
    assert result.segments == 1
    assert len(origin.requests) == 1


def test_failed_segment_aborts_transfer(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    def handler(request: Request) -> Reply:
        if request.range == (0, None):
            return serve_bytes(DATA, request)
        return Reply(500, b"no")

    with pytest.raises(SegmentFailed):
        fetch_file(handler, target)
    assert not target.exists()
    assert not partial_path(target).exists()


def test_small_expected_size_uses_single_stream(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"
    config = make_config(segment_threshold=SIZE + 1)
    origin, result = fetch_file(lambda request: serve_bytes(DATA, request), target, config)

    assert target.read_bytes() == DATA
    assert result.segments == 1
    assert "range" not in origin.requests[0].headers


def first_range_or(reply_for_segment):
    """Serves the `bytes=0-` request normally and every other segment with `reply_for_segment`."""

    def handler(request: Request) -> Reply:
        if request.range == (0, None):
            return serve_bytes(DATA, request)
        return reply_for_segment(request)

    return handler


def assert_no_file_left(target: Path) -> None:
    assert not target.exists()
    assert not partial_path(target).exists()


def test_segment_from_wrong_offset_aborts_transfer(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    def wrong_slice(request: Request) -> Reply:
        first, last = request.range
        body = DATA[: last - first + 1]
        return Reply(206, body, {"Content-Range": f"bytes 0-{len(body) - 1}/{SIZE}"})

    with pytest.raises(SegmentFailed):
        fetch_file(first_range_or(wrong_slice), target)
    assert_no_file_left(target)


def test_first_range_from_wrong_offset_falls_back_to_whole_document(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    def handler(request: Request) -> Reply:
        if request.range == (0, None):
            return Reply(
                206, DATA[1000:], {"Content-Range": f"bytes 1000-{SIZE - 1}/{SIZE}"}
            )
        return serve_bytes(DATA, request)

    origin, result = fetch_file(handler, target)
    assert target.read_bytes() == DATA
    assert result.segments == 1
    assert "range" not in origin.requests[1].headers


def test_short_segment_aborts_transfer(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    def short(request: Request) -> Reply:
        reply = serve_bytes(DATA, request)
        reply.truncate_at = 500_000
        return reply

    with pytest.raises(SegmentFailed, match="ended after 500000"):
        fetch_file(first_range_or(short), target)
    assert_no_file_left(target)


def test_stalled_segment_aborts_transfer(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    def stalled(request: Request) -> Reply:
        reply = serve_bytes(DATA, request)
        reply.stall_at = 1000
        reply.stall_for = 5
        return reply

    with pytest.raises(SegmentFailed, match="no data"):
        fetch_file(first_range_or(stalled), target, make_config(idle_timeout=0.3))
    assert_no_file_left(target)


def test_rate_limited_segment_is_fatal(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    with pytest.raises(RateLimited):
        fetch_file(first_range_or(lambda request: Reply(429, b"slow down")), target)
    assert_no_file_left(target)


def test_segments_respect_worker_limit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "video.mp4"
    in_use = 0
    peak = 0
    connect = SingleStreamFetcher.connect
    release = ConnectionManager.release

    async def counting_connect(self, url):
        nonlocal in_use, peak
        conn = await connect(self, url)
        in_use += 1
        peak = max(peak, in_use)
        return conn

    def counting_release(self, conn, reusable):
        nonlocal in_use
        in_use -= 1
        release(self, conn, reusable)

    monkeypatch.setattr(SingleStreamFetcher, "connect", counting_connect)
    monkeypatch.setattr(ConnectionManager, "release", counting_release)
    monkeypatch.setattr(segmented, "chunk_size_for", lambda length, workers, minimum: 500_000)

    async def handler(request: Request) -> Reply:
        if request.range != (0, None):
            await asyncio.sleep(0.05)
        return serve_bytes(DATA, request)

    origin, result = fetch_file(handler, target, make_config(max_workers=3))
    assert target.read_bytes() == DATA
    assert result.segments == 8
    assert len(origin.requests) == 8
    assert 1 < peak <= 3
    assert in_use == 0
