"""End-to-end transfers against a localhost origin."""

from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path

import pytest
from origin import Origin, Reply, Request, serve_bytes

from mediafetch.engine.downloader import MediaDownloader, partial_path
from mediafetch.exceptions import (
    CaptchaRedirect,
    ProxyError,
    RateLimited,
    RetriesExhausted,
    TooManyRedirects,
    TruncatedTransfer,
)
from mediafetch.models.config import FetchConfig
from mediafetch.models.transfer import OutputTarget, ResourceDescriptor

DATA = os.urandom(300_000)


def make_config(**overrides) -> FetchConfig:
    defaults = {"retry_delay": 0, "idle_timeout": 5, "connect_timeout": 5}
    defaults.update(overrides)
    return FetchConfig(**defaults)


async def fetch(origin: Origin, config: FetchConfig | None = None, **kwargs):
    descriptor = ResourceDescriptor(url=origin.url("/video"), **kwargs)
    async with MediaDownloader(config or make_config()) as downloader:
        return await downloader.fetch(descriptor)


def test_fetch_into_memory() -> None:
    async def scenario():
        async with Origin(lambda request: serve_bytes(DATA, request)) as origin:
            result = await fetch(origin)
            return origin, result

    origin, result = asyncio.run(scenario())
    assert result.body == DATA
    assert result.bytes_written == len(DATA)
    assert result.status == 200
    assert result.content_type == "video/mp4"
    assert len(origin.requests) == 1
    assert "range" not in origin.requests[0].headers


def test_request_carries_referer_and_extra_headers() -> None:
    async def scenario():
        async with Origin(lambda request: serve_bytes(b"ok", request)) as origin:
            await fetch(
                origin,
                referer="https://www.youtube.com/watch?v=abc",
                extra_headers=(("Cookie", "a=1"),),
            )
            return origin.requests[0]

    request = asyncio.run(scenario())
    assert request.target == "/video"
    assert request.headers["referer"] == "https://www.youtube.com/watch?v=abc"
    assert request.headers["cookie"] == "a=1"
    assert request.headers["connection"] == "keep-alive"


def test_body_without_length_is_read_to_close() -> None:
    def handler(request: Request) -> Reply:
        return Reply(200, DATA, send_length=False, keep_alive=False)

    async def scenario():
        async with Origin(handler) as origin:
            return await fetch(origin)

    assert asyncio.run(scenario()).body == DATA


def test_truncated_body_is_resumed_byte_identical() -> None:
    cut = 123_457

    def handler(request: Request) -> Reply:
        reply = serve_bytes(DATA, request)
        if request.range is None:
            reply.truncate_at = cut
        return reply

    async def scenario():
        async with Origin(handler) as origin:
            result = await fetch(origin)
            return origin, result

    origin, result = asyncio.run(scenario())
    assert result.body == DATA
    assert len(origin.requests) == 2
    assert origin.requests[1].headers["range"] == f"bytes={cut}-"


def test_resume_ignored_by_server_restarts_from_zero() -> None:
    def handler(request: Request) -> Reply:
        reply = serve_bytes(DATA, request, honour_range=False)
        if len(origin.requests) == 1:
            reply.truncate_at = 1000
        return reply

    async def scenario():
        async with Origin(handler) as server:
            nonlocal origin
            origin = server
            return await fetch(server)

    origin = None
    result = asyncio.run(scenario())
    assert result.body == DATA
    assert len(origin.requests) == 2


def test_truncation_beyond_resume_budget_fails() -> None:
    def handler(request: Request) -> Reply:
        reply = serve_bytes(DATA, request)
        reply.truncate_at = 10
        return reply

    async def scenario():
        async with Origin(handler) as origin:
            with pytest.raises(TruncatedTransfer) as excinfo:
                await fetch(origin, make_config(max_resumes=2))
            return origin, excinfo.value

    origin, error = asyncio.run(scenario())
    assert len(origin.requests) == 3
    assert error.bytes_received == 30
    assert error.expected == len(DATA)


def test_redirects_are_followed_with_referer() -> None:
    def handler(request: Request) -> Reply:
        if request.target == "/video":
            return Reply(302, headers={"Location": "/cdn/video"})
        return serve_bytes(DATA, request)

    async def scenario():
        async with Origin(handler) as origin:
            result = await fetch(origin)
            return origin, result

    origin, result = asyncio.run(scenario())
    assert result.body == DATA
    assert result.final_url.endswith("/cdn/video")
    assert origin.requests[1].headers["referer"].endswith("/video")
    # The empty 302 body leaves the connection reusable.
    assert origin.connections == 1


def test_redirect_loop_stops_after_budget() -> None:
    def handler(request: Request) -> Reply:
        return Reply(302, headers={"Location": "/video"})

    async def scenario():
        async with Origin(handler) as origin:
            with pytest.raises(TooManyRedirects):
                await fetch(origin)
            return origin

    origin = asyncio.run(scenario())
    assert len(origin.requests) == 21


def test_rate_limit_is_not_retried() -> None:
    async def scenario():
        async with Origin(lambda request: Reply(429, b"slow down")) as origin:
            with pytest.raises(RateLimited):
                await fetch(origin)
            return origin

    assert len(asyncio.run(scenario()).requests) == 1


def test_captcha_redirect_is_not_followed() -> None:
    def handler(request: Request) -> Reply:
        return Reply(302, headers={"Location": "https://www.google.com/sorry/index"})

    async def scenario():
        async with Origin(handler) as origin:
            with pytest.raises(CaptchaRedirect):
                await fetch(origin)
            return origin

    assert len(asyncio.run(scenario()).requests) == 1


def test_server_errors_are_retried() -> None:
    def handler(request: Request) -> Reply:
        if len(origin.requests) == 1:
            return Reply(503, b"busy")
        return serve_bytes(DATA, request)

    async def scenario():
        async with Origin(handler) as server:
            nonlocal origin
            origin = server
            return await fetch(server)

    origin = None
    assert asyncio.run(scenario()).body == DATA
    assert len(origin.requests) == 2


def test_error_budget_runs_out() -> None:
    async def scenario():
        async with Origin(lambda request: Reply(500, b"oops")) as origin:
            with pytest.raises(RetriesExhausted):
                await fetch(origin, make_config(error_budget=2))
            return origin

    assert len(asyncio.run(scenario()).requests) == 3


def test_connections_are_reused_between_fetches() -> None:
    async def scenario():
        async with Origin(lambda request: serve_bytes(DATA, request)) as origin:
            descriptor = ResourceDescriptor(url=origin.url("/video"))
            async with MediaDownloader(make_config()) as downloader:
                await downloader.fetch(descriptor)
                await downloader.fetch(descriptor)
            return origin

    origin = asyncio.run(scenario())
    assert len(origin.requests) == 2
    assert origin.connections == 1


def test_bandwidth_limit_stretches_transfer() -> None:
    size = 50_000
    limit = 1_000_000

    async def scenario():
        async with Origin(lambda request: serve_bytes(DATA[:size], request)) as origin:
            started = time.monotonic()
            await fetch(origin, make_config(bandwidth_limit=limit, buffer_size=4096))
            return time.monotonic() - started

    assert asyncio.run(scenario()) >= size * 8 / limit


def test_fetch_to_file_renames_part(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    async def scenario():
        async with Origin(lambda request: serve_bytes(DATA, request)) as origin:
            return await fetch(origin, output=OutputTarget.file(target))

    result = asyncio.run(scenario())
    assert result.path == target
    assert result.body is None
    assert target.read_bytes() == DATA
    assert not partial_path(target).exists()


def test_failed_fetch_removes_part(tmp_path: Path) -> None:
    target = tmp_path / "video.mp4"

    async def scenario():
        async with Origin(lambda request: Reply(429)) as origin:
            with pytest.raises(RateLimited):
                await fetch(origin, output=OutputTarget.file(target))

    asyncio.run(scenario())
    assert not target.exists()
    assert not partial_path(target).exists()


def test_plain_http_goes_through_proxy_in_absolute_form() -> None:
    async def scenario():
        async with Origin(lambda request: serve_bytes(b"proxied", request)) as proxy:
            config = make_config(proxy=f"127.0.0.1:{proxy.port}")
            descriptor = ResourceDescriptor(url="http://media.example/video?id=7")
            async with MediaDownloader(config) as downloader:
                result = await downloader.fetch(descriptor)
            return proxy.requests[0], result

    request, result = asyncio.run(scenario())
    assert result.body == b"proxied"
    assert request.target == "http://media.example/video?id=7"
    assert request.headers["host"] == "media.example"


def test_refused_tunnel_is_fatal() -> None:
    async def scenario():
        async with Origin(lambda request: Reply(403)) as proxy:
            config = make_config(proxy=f"http://127.0.0.1:{proxy.port}")
            descriptor = ResourceDescriptor(url="https://media.example/video")
            async with MediaDownloader(config) as downloader:
                with pytest.raises(ProxyError):
                    await downloader.fetch(descriptor)
            return proxy

    proxy = asyncio.run(scenario())
    assert [r.method for r in proxy.requests] == ["CONNECT"]
    assert proxy.requests[0].target == "media.example:443"


def test_probe_reads_only_the_head_of_the_body() -> None:
    async def scenario():
        async with Origin(lambda request: serve_bytes(DATA, request)) as origin:
            async with MediaDownloader(make_config()) as downloader:
                result = await downloader.probe(origin.url("/video"), max_bytes=1024)
            return origin, result

    origin, result = asyncio.run(scenario())
    assert result.bytes_written == len(DATA)
    assert result.body == DATA[:1024]
    assert result.content_type == "video/mp4"
    assert origin.requests[0].headers["range"] == "bytes=0-"


def test_resume_answered_from_another_offset_restarts_from_zero() -> None:
    cut = 50_000

    def handler(request: Request) -> Reply:
        if request.range is not None:
            # Always the head of the document, whatever was asked for.
            return Reply(
                206,
                DATA[:150_000],
                {"Content-Range": f"bytes 0-149999/{len(DATA)}"},
            )
        reply = serve_bytes(DATA, request)
        if len(origin.requests) == 1:
            reply.truncate_at = cut
        return reply

    async def scenario():
        async with Origin(handler) as server:
            nonlocal origin
            origin = server
            return await fetch(server)

    origin = None
    result = asyncio.run(scenario())
    assert result.body == DATA
    assert len(origin.requests) == 3
    assert origin.requests[1].headers["range"] == f"bytes={cut}-"
    assert "range" not in origin.requests[2].headers


def test_stale_pooled_connection_is_replaced_for_free() -> None:
    async def scenario():
        async with Origin(lambda request: serve_bytes(DATA, request)) as origin:
            descriptor = ResourceDescriptor(url=origin.url("/video"))
            async with MediaDownloader(make_config(error_budget=0)) as downloader:
                await downloader.fetch(descriptor)
                origin.drop_connections()
                result = await downloader.fetch(descriptor)
            return origin, result

    origin, result = asyncio.run(scenario())
    assert result.body == DATA
    assert origin.connections == 2


def test_stalled_stream_is_resumed() -> None:
    stall = 100_000

    def handler(request: Request) -> Reply:
        reply = serve_bytes(DATA, request)
        if request.range is None:
            reply.stall_at = stall
            reply.stall_for = 2
        return reply

    async def scenario():
        async with Origin(handler) as origin:
            result = await fetch(origin, make_config(idle_timeout=0.3))
            return origin, result

    origin, result = asyncio.run(scenario())
    assert result.body == DATA
    assert len(origin.requests) == 2
    assert origin.requests[1].headers["range"] == f"bytes={stall}-"
