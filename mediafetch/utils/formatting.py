"""
Helper functions for formatting data into human-readable strings.
"""


def format_size(bytes_size: int) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 MB')."""
    if bytes_size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while bytes_size >= 1024 and i < len(units) - 1:
        bytes_size /= 1024
        i += 1
    if i == 0:
        return f"{bytes_size} B"
    return f"{bytes_size:.1f} {units[i]}"


def format_bps(bps: float) -> str:
    """Formats a bit rate (e.g., '12.4 Mbps'). Uses decimal prefixes, as line rates do."""
    if bps >= 1_000_000:
        return f"{bps / 1_000_000:.1f} Mbps"
    if bps >= 1_000:
        return f"{bps / 1_000:.1f} Kbps"
    return f"{int(bps)} bps"


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_summary(bytes_written: int, elapsed: float) -> str:
    """One-line completion summary: size, time taken and average throughput."""
    rate = bytes_written * 8 / elapsed if elapsed > 0 else 0.0
    return (
        f"{format_size(bytes_written)} in {format_duration(elapsed)} "
        f"({format_bps(rate)})"
    )
