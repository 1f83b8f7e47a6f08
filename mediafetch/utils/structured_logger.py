"""
Structured logging system for better log analysis and debugging.
Provides JSON-formatted logs with context and metadata.
"""

import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.markup import escape


class StructuredLogger:
    """
    Logger that writes human-readable lines to the standard logger and,
    optionally, one JSON object per event to a `.jsonl` file.

    Usage:
        logger = StructuredLogger("mediafetch", log_dir=Path("logs"))
        logger.info("transfer_completed", url="https://...", bytes_written=1024)
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        enable_json: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            log_dir: Directory for JSON log files (None = disabled)
            enable_json: Enable JSON file logging
            enable_console: Enable console output
        """
        self.name = name
        self.log_dir = log_dir
        self.enable_json = enable_json and log_dir is not None
        self.enable_console = enable_console

        self._logger = logging.getLogger(name)

        self._json_file = None
        self.json_path: Path | None = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.json_path = log_dir / f"mediafetch_{timestamp}.jsonl"
            self._json_file = open(self.json_path, "a", encoding="utf-8")  # noqa: SIM115

        # Added to every JSON entry
        self._session_context: dict[str, Any] = {
            "session_id": f"{int(time.time())}_{id(self)}",
            "start_time": datetime.now().isoformat(),
        }

    def _format_message(self, event: str, **context) -> str:
        parts = [f"[{event}]"]
        for key, value in context.items():
            parts.append(f"{key}={value}")
        return escape(" ".join(parts))

    def _write_json(self, level: str, event: str, **context) -> None:
        if not self._json_file or self._json_file.closed:
            return

        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "event": event,
            **self._session_context,
            **context,
        }

        try:
            self._json_file.write(json.dumps(entry, default=str) + "\n")
            self._json_file.flush()
        except OSError as e:
            print(f"JSON logging failed: {e}", file=sys.stderr)

    def _emit(self, level: int, event: str, **context) -> None:
        if self.enable_console:
            self._logger.log(level, self._format_message(event, **context))
        if self.enable_json:
            self._write_json(logging.getLevelName(level), event, **context)

    def debug(self, event: str, **context) -> None:
        self._emit(logging.DEBUG, event, **context)

    def info(self, event: str, **context) -> None:
        self._emit(logging.INFO, event, **context)

    def warning(self, event: str, **context) -> None:
        self._emit(logging.WARNING, event, **context)

    def error(self, event: str, **context) -> None:
        self._emit(logging.ERROR, event, **context)

    def close(self) -> None:
        """Close JSON log file."""
        if self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class TransferLogger:
    """Specialized logger for transfer lifecycle events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def transfer_started(
        self, url: str, target: str, expected_bytes: int | None, segmented: bool
    ):
        self.logger.info(
            "transfer_started",
            url=url,
            target=target,
            expected_bytes=expected_bytes,
            segmented=segmented,
        )

    def redirect_followed(self, from_url: str, to_url: str, status: int, hop: int):
        self.logger.debug(
            "redirect_followed",
            from_url=from_url,
            to_url=to_url,
            status=status,
            hop=hop,
        )

    def resume_scheduled(self, url: str, start_byte: int, expected: int | None, attempt: int):
        """Log a truncated transfer being resumed from `start_byte`."""
        self.logger.warning(
            "resume_scheduled",
            url=url,
            start_byte=start_byte,
            expected=expected,
            attempt=attempt,
        )

    def segment_completed(self, index: int, range_start: int, range_len: int, duration_s: float):
        self.logger.debug(
            "segment_completed",
            index=index,
            range_start=range_start,
            range_len=range_len,
            duration_s=round(duration_s, 3),
        )

    def transfer_completed(
        self,
        url: str,
        bytes_written: int,
        duration_s: float,
        avg_speed_mbps: float,
        segments: int,
    ):
        """Log transfer completed."""
        self.logger.info(
            "transfer_completed",
            url=url,
            bytes_written=bytes_written,
            size_mb=round(bytes_written / (1024 * 1024), 2),
            duration_s=round(duration_s, 2),
            avg_speed_mbps=round(avg_speed_mbps, 2),
            segments=segments,
        )

    def transfer_failed(self, url: str, error: str, error_type: str, bytes_written: int):
        """Log transfer failed."""
        self.logger.error(
            "transfer_failed",
            url=url,
            error=error,
            error_type=error_type,
            bytes_written=bytes_written,
        )


def create_structured_logger(
    log_dir: Path | None = None,
    enable_json: bool = False,
    enable_console: bool = False,
) -> tuple[StructuredLogger, TransferLogger]:
    """
    Create the structured loggers.

    Returns:
        Tuple of (base_logger, transfer_logger)
    """
    base = StructuredLogger(
        "mediafetch.events",
        log_dir=log_dir,
        enable_json=enable_json,
        enable_console=enable_console,
    )
    return base, TransferLogger(base)
