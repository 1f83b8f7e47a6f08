"""
Progress reporters. Both take `report(ratio, bps, is_final)` calls from the
engine; neither is required, and non-interactive use passes none.
"""

import sys
import time
from collections.abc import Callable
from typing import TextIO

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TextColumn

from mediafetch.utils.formatting import format_bps

TEXT_COLUMNS = 72


class TextProgressReporter:
    """
    A row of dots that grows with the transfer, followed by a percentage and
    the current throughput. Redraws at most once per second; the final call
    erases the line.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        columns: int = TEXT_COLUMNS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stream = stream or sys.stderr
        self.columns = columns
        self._clock = clock
        self._last_draw: float | None = None
        self._width = 0

    def render(self, ratio: float | None, bps: float) -> str:
        label = format_bps(bps)
        if ratio is None:
            return label
        ratio = min(max(ratio, 0.0), 1.0)
        ticks = "." * int(self.columns * ratio)
        return f"{ticks:<{self.columns}} {int(100 * ratio):3d}% {label}"

    def report(self, ratio: float | None, bps: float, is_final: bool) -> None:
        now = self._clock()
        if is_final:
            if self._width:
                self.stream.write("\r" + " " * self._width + "\r")
                self.stream.flush()
            self._width = 0
            self._last_draw = None
            return
        if self._last_draw is not None and now - self._last_draw < 1.0:
            return
        line = self.render(ratio, bps)
        padding = " " * max(0, self._width - len(line))
        self.stream.write(f"\r{line}{padding}")
        self.stream.flush()
        self._width = len(line)
        self._last_draw = now


class RichProgressReporter:
    """Shows one rich progress bar for the current transfer."""

    def __init__(self, console: Console, description: str = "Downloading"):
        self.console = console
        self.progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            "[progress.percentage]{task.percentage:>3.0f}%",
            "•",
            TextColumn("{task.fields[rate]}"),
            console=console,
            transient=True,
        )
        self._task: TaskID = self.progress.add_task(
            description, total=None, rate=format_bps(0)
        )

    def report(self, ratio: float | None, bps: float, is_final: bool) -> None:
        if ratio is None:
            self.progress.update(self._task, rate=format_bps(bps))
        else:
            self.progress.update(
                self._task, total=1000, completed=int(ratio * 1000), rate=format_bps(bps)
            )
        if is_final:
            self.progress.stop()

    def __enter__(self) -> "RichProgressReporter":
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()
