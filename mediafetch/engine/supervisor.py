"""
Redirect/retry supervision for single-stream transfers.

Each request produces an `AttemptOutcome`; `next_state` maps it to what happens
next. That function is pure, so the whole retry policy can be tested without
sockets. `RetrySupervisor` runs the loop and enforces the budgets.
"""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple
from urllib.parse import urlsplit

from mediafetch.engine.fetcher import HttpResponse, SingleStreamFetcher
from mediafetch.engine.monitor import TransferMonitor
from mediafetch.exceptions import (
    CaptchaRedirect,
    FatalTransferError,
    HttpError,
    MediaFetchError,
    RateLimited,
    RetriesExhausted,
    TooManyRedirects,
    TruncatedTransfer,
)
from mediafetch.models.config import FetchConfig
from mediafetch.models.transfer import FetchResult, ResourceDescriptor, TransferState
from mediafetch.utils.structured_logger import TransferLogger
from mediafetch.utils.urls import resolve_location

log = logging.getLogger(__name__)

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


class SupervisorState(Enum):
    REQUESTING = "requesting"
    REDIRECTED = "redirected"
    PARTIAL_SUCCESS = "partial_success"
    SUCCESS = "success"
    RETRYABLE_ERROR = "retryable_error"
    FATAL_ERROR = "fatal_error"


@dataclass(frozen=True)
class AttemptOutcome:
    """What one request/response exchange produced."""

    url: str
    status: int | None = None
    status_line: str = ""
    location: str | None = None
    error: MediaFetchError | None = None
    bytes_received: int = 0  # body bytes read during this attempt
    bytes_total: int = 0  # bytes of the result held after this attempt
    expected_total: int | None = None
    error_body: bytes = b""


@dataclass(frozen=True)
class RedirectPolicy:
    """Permanent-failure patterns: CAPTCHA redirect targets and rate-limit wording."""

    captcha_hosts: tuple[str, ...]
    rate_limit: re.Pattern

    @classmethod
    def from_config(cls, config: FetchConfig) -> "RedirectPolicy":
        return cls(
            captcha_hosts=tuple(config.captcha_hosts),
            rate_limit=re.compile(config.rate_limit_pattern, re.IGNORECASE),
        )

    def is_captcha(self, url: str) -> bool:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
        path = parts.path or "/"
        for entry in self.captcha_hosts:
            entry_host, _, entry_path = entry.lower().partition("/")
            if host == entry_host and path.startswith(f"/{entry_path}"):
                return True
        return False

    def is_rate_limited(self, body: bytes) -> bool:
        return bool(body) and bool(self.rate_limit.search(body.decode("latin-1")))


def next_state(
    outcome: AttemptOutcome, policy: RedirectPolicy
) -> tuple[SupervisorState, MediaFetchError | None]:
    """
    Classifies one attempt.

    Returns:
        The next state and, for error states, the error describing it.
    """
    error = outcome.error
    if error is not None:
        if not error.retryable:
            return SupervisorState.FATAL_ERROR, error
        if outcome.bytes_received > 0:
            return SupervisorState.PARTIAL_SUCCESS, error
        return SupervisorState.RETRYABLE_ERROR, error

    status = outcome.status
    if status in REDIRECT_STATUSES:
        if not outcome.location:
            return SupervisorState.FATAL_ERROR, FatalTransferError(
                f"{outcome.status_line} without Location: {outcome.url}"
            )
        target = resolve_location(outcome.url, outcome.location)
        if policy.is_captcha(target):
            return SupervisorState.FATAL_ERROR, CaptchaRedirect(
                status, outcome.status_line, target
            )
        return SupervisorState.REDIRECTED, None

    if status == 429 or (
        not 200 <= status < 300 and policy.is_rate_limited(outcome.error_body)
    ):
        return SupervisorState.FATAL_ERROR, RateLimited(
            status, outcome.status_line, outcome.url, outcome.error_body
        )
    if not 200 <= status < 300:
        return SupervisorState.RETRYABLE_ERROR, HttpError(
            status, outcome.status_line, outcome.url, outcome.error_body
        )

    if outcome.expected_total is not None and outcome.bytes_total < outcome.expected_total:
        return SupervisorState.PARTIAL_SUCCESS, None
    return SupervisorState.SUCCESS, None


class _Budgets:
    """Counts redirects, resumes and errors for one transfer."""

    def __init__(self, config: FetchConfig):
        self.config = config
        self.redirects = 0
        self.resumes = 0
        self.errors = 0

    def redirect(self, url: str) -> None:
        self.redirects += 1
        if self.redirects > self.config.max_redirects:
            raise TooManyRedirects(f"too many redirects ({self.redirects}) from {url}")

    def resume(self, url: str, bytes_received: int, expected: int | None) -> None:
        self.resumes += 1
        if self.resumes > self.config.max_resumes:
            raise TruncatedTransfer(
                f"transfer kept ending early ({bytes_received} of "
                f"{expected if expected is not None else '?'} bytes): {url}",
                bytes_received=bytes_received,
                expected=expected,
            )

    def error(self, error: MediaFetchError) -> float:
        """Counts an error and returns the backoff delay before the next attempt."""
        self.errors += 1
        if self.errors > self.config.error_budget:
            raise RetriesExhausted(
                f"giving up after {self.errors} failed attempts: {error}", last_error=error
            ) from error
        return self.config.retry_delay * (2 ** (self.errors - 1))


class Opened(NamedTuple):
    """A 2xx response whose body has not been read yet."""

    response: HttpResponse
    url: str
    referer: str | None


class RetrySupervisor:
    """Drives the fetcher until the resource is complete or the failure is final."""

    def __init__(
        self,
        fetcher: SingleStreamFetcher,
        config: FetchConfig,
        events: TransferLogger | None = None,
    ):
        self.fetcher = fetcher
        self.config = config
        self.policy = RedirectPolicy.from_config(config)
        self.events = events

    async def fetch(
        self,
        descriptor: ResourceDescriptor,
        sink,
        monitor: TransferMonitor,
        opened: Opened | None = None,
    ) -> FetchResult:
        """
        Fetches `descriptor` into `sink`, following redirects and resuming
        truncated bodies with byte ranges.

        Args:
            opened: A response that was already requested (e.g. a probe); its
                body is consumed as the first attempt.

        Raises:
            FatalTransferError: A permanent failure or an exhausted budget.
        """
        budgets = _Budgets(self.config)
        state = TransferState()
        url = opened.url if opened else descriptor.url
        referer = opened.referer if opened else descriptor.referer
        started = time.monotonic()

        while True:
            outcome, response = await self._attempt(
                descriptor, url, referer, state, sink, monitor, opened
            )
            opened = None
            decision, error = next_state(outcome, self.policy)

            if decision is SupervisorState.SUCCESS:
                log.debug(f"Completed {url}: {state.bytes_written} bytes")
                return FetchResult(
                    status_line=response.status_line,
                    status=response.status,
                    headers=response.headers,
                    bytes_written=state.bytes_written,
                    final_url=url,
                    elapsed=time.monotonic() - started,
                )
            if decision is SupervisorState.FATAL_ERROR:
                raise error
            if decision is SupervisorState.REDIRECTED:
                referer, url = url, await self._follow(budgets, outcome, state, sink, monitor)
            elif decision is SupervisorState.PARTIAL_SUCCESS:
                budgets.resume(url, state.bytes_written, state.document_length)
                self._note_resume(url, state, budgets.resumes, error)
            else:
                delay = budgets.error(error)
                log.warning(f"[yellow]{error}; retrying in {delay:.1f}s[/yellow]")
                await asyncio.sleep(delay)

    async def open(self, descriptor: ResourceDescriptor) -> Opened:
        """
        Requests `bytes=0-` and follows redirects until a 2xx head arrives.

        The caller owns the returned response and must stream or finish it.
        """
        budgets = _Budgets(self.config)
        url = descriptor.url
        referer = descriptor.referer
        state = TransferState()

        while True:
            response = None
            try:
                conn = await self.fetcher.connect(url)
                response = await self.fetcher.request(
                    conn, descriptor, url, referer=referer, open_range=True
                )
            except MediaFetchError as e:
                outcome = AttemptOutcome(url=url, error=e)
            else:
                if response.ok:
                    return Opened(response, url, referer)
                await response.read_error_body()
                self.fetcher.finish(response)
                outcome = self._outcome(url, response, state)

            decision, error = next_state(outcome, self.policy)
            if decision is SupervisorState.FATAL_ERROR:
                raise error
            if decision is SupervisorState.REDIRECTED:
                referer, url = url, await self._follow(budgets, outcome, state)
            else:
                delay = budgets.error(error)
                log.warning(f"[yellow]{error}; retrying in {delay:.1f}s[/yellow]")
                await asyncio.sleep(delay)

    async def _attempt(
        self,
        descriptor: ResourceDescriptor,
        url: str,
        referer: str | None,
        state: TransferState,
        sink,
        monitor: TransferMonitor,
        opened: Opened | None,
    ) -> tuple[AttemptOutcome, HttpResponse | None]:
        start_byte = state.bytes_written
        if opened is not None:
            response = opened.response
        else:
            try:
                conn = await self.fetcher.connect(url)
                response = await self.fetcher.request(
                    conn, descriptor, url, start_byte=start_byte, referer=referer
                )
            except MediaFetchError as e:
                return (
                    AttemptOutcome(url=url, error=e, bytes_total=state.bytes_written),
                    None,
                )

        error = None
        try:
            if response.misplaced:
                error = response.range_error()
                log.warning(f"[yellow]{error}; restarting from zero[/yellow]")
                await self._restart(state, sink, monitor)
            elif response.ok:
                if start_byte and not response.range_honoured:
                    log.warning(
                        f"[yellow]Server ignored the resume range for {url}; "
                        f"restarting from zero[/yellow]"
                    )
                    await self._restart(state, sink, monitor)
                self._learn_length(response, state)
                monitor.set_total(state.document_length)

                async def on_progress(n: int) -> None:
                    state.bytes_written += n
                    await monitor.advance(n)

                try:
                    await response.stream_to(sink, on_progress=on_progress)
                except MediaFetchError as e:
                    error = e
            else:
                await response.read_error_body()
        finally:
            self.fetcher.finish(response)

        outcome = self._outcome(url, response, state, error)
        return outcome, response

    @staticmethod
    async def _restart(state: TransferState, sink, monitor: TransferMonitor) -> None:
        await sink.rewind()
        state.bytes_written = 0
        monitor.rewind(0)

    @staticmethod
    def _learn_length(response: HttpResponse, state: TransferState) -> None:
        if response.document_length is not None:
            state.document_length = response.document_length
        elif response.body_length is not None:
            state.document_length = state.bytes_written + response.body_length

    @staticmethod
    def _outcome(
        url: str,
        response: HttpResponse,
        state: TransferState,
        error: MediaFetchError | None = None,
    ) -> AttemptOutcome:
        state.last_http_status = response.status
        state.headers = response.headers
        return AttemptOutcome(
            url=url,
            status=response.status,
            status_line=response.status_line,
            location=response.head.location,
            error=error,
            bytes_received=response.bytes_read if response.ok else 0,
            bytes_total=state.bytes_written,
            expected_total=state.document_length,
            error_body=response.error_body,
        )

    async def _follow(
        self,
        budgets: _Budgets,
        outcome: AttemptOutcome,
        state: TransferState,
        sink=None,
        monitor: TransferMonitor | None = None,
    ) -> str:
        budgets.redirect(outcome.url)
        target = resolve_location(outcome.url, outcome.location)
        log.debug(f"{outcome.status_line}: {outcome.url} -> {target}")
        if self.events:
            self.events.redirect_followed(
                outcome.url, target, outcome.status, budgets.redirects
            )
        state.reset()
        if sink is not None:
            await sink.rewind()
        if monitor is not None:
            monitor.rewind(0)
        return target

    def _note_resume(
        self,
        url: str,
        state: TransferState,
        attempt: int,
        error: MediaFetchError | None,
    ) -> None:
        reason = f" ({error})" if error else ""
        log.warning(
            f"[yellow]Transfer ended at {state.bytes_written} of "
            f"{state.document_length or '?'} bytes{reason}; resuming[/yellow]"
        )
        if self.events:
            self.events.resume_scheduled(
                url, state.bytes_written, state.document_length, attempt
            )
