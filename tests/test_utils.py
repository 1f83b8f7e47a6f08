"""Tests for formatting helpers, URL helpers and the structured event logger."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mediafetch.utils.formatting import format_bps, format_duration, format_size, format_summary
from mediafetch.utils.path import filename_from_url, resolve_output
from mediafetch.utils.structured_logger import create_structured_logger
from mediafetch.utils.urls import apply_signature, content_type_ext, resolve_location


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, "0 B"), (512, "512 B"), (1536, "1.5 KB"), (145 * 1024 * 1024, "145.0 MB")],
)
def test_format_size(value: int, expected: str) -> None:
    assert format_size(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(12_400_000, "12.4 Mbps"), (1_500, "1.5 Kbps"), (999, "999 bps")],
)
def test_format_bps(value: float, expected: str) -> None:
    assert format_bps(value) == expected


def test_format_duration() -> None:
    assert format_duration(0) == "0s"
    assert format_duration(61) == "1m 1s"
    assert format_duration(2 * 3600 + 34 * 60 + 12) == "2h 34m 12s"


def test_format_summary() -> None:
    assert format_summary(2 * 1024 * 1024, 2.0) == "2.0 MB in 2s (8.4 Mbps)"


@pytest.mark.parametrize(
    ("location", "expected"),
    [
        ("http://cdn.example/v", "http://cdn.example/v"),
        ("/other?x=1", "http://media.example/other?x=1"),
        ("next", "http://media.example/a/next"),
    ],
)
def test_resolve_location(location: str, expected: str) -> None:
    assert resolve_location("http://media.example/a/b", location) == expected


def test_apply_signature_replaces_and_appends() -> None:
    assert (
        apply_signature("http://m.example/v?id=1&signature=old&x=2", "AB.CD")
        == "http://m.example/v?id=1&signature=AB.CD&x=2"
    )
    assert apply_signature("http://m.example/v?id=1", "AB.CD") == (
        "http://m.example/v?id=1&signature=AB.CD"
    )
    assert apply_signature("http://m.example/v", "a/b") == "http://m.example/v?signature=a%2Fb"


@pytest.mark.parametrize(
    ("content_type", "ext"),
    [
        ("video/x-flv", "flv"),
        ("video/webm; codecs=vp8", "webm"),
        ("video/3gpp", "3gpp"),
        ("video/quicktime", "mov"),
        ("audio/mp4", "m4a"),
        ("video/mp4", "mp4"),
        (None, "mp4"),
    ],
)
def test_content_type_ext(content_type: str | None, ext: str) -> None:
    assert content_type_ext(content_type) == ext


def test_structured_logger_writes_json_lines(tmp_path: Path) -> None:
    base, events = create_structured_logger(tmp_path, enable_json=True)
    with base:
        events.transfer_started("http://m.example/v", "memory", 100, False)
        events.transfer_completed("http://m.example/v", 100, 0.5, 1.6, 1)

    lines = base.json_path.read_text(encoding="utf-8").splitlines()
    entries = [json.loads(line) for line in lines]
    assert [e["event"] for e in entries] == ["transfer_started", "transfer_completed"]
    assert entries[0]["expected_bytes"] == 100
    assert entries[1]["level"] == "INFO"
    assert entries[0]["session_id"] == entries[1]["session_id"]


def test_structured_logger_without_dir_writes_nothing(tmp_path: Path) -> None:
    base, events = create_structured_logger(None, enable_json=True)
    events.transfer_failed("http://m.example/v", "boom", "RateLimited", 0)
    assert base.json_path is None
    base.close()


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://m.example/media/clip.webm?x=1", "clip.webm"),
        ("http://m.example/videoplayback?id=1", "videoplayback.mp4"),
        ("http://m.example/", "download.mp4"),
        ("http://m.example/a%3Ab%3F.flv", "ab.flv"),
    ],
)
def test_filename_from_url(url: str, expected: str) -> None:
    assert filename_from_url(url) == expected


def test_resolve_output(tmp_path: Path) -> None:
    assert resolve_output(tmp_path, "http://m.example/clip.mp4") == tmp_path / "clip.mp4"
    target = tmp_path / "new" / "video.mp4"
    assert resolve_output(target, "http://m.example/clip.mp4") == target
    assert target.parent.is_dir()
