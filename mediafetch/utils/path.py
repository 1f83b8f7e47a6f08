"""
Utilities for choosing output file paths.
"""

from pathlib import Path
from urllib.parse import unquote, urlsplit

from pathvalidate import sanitize_filename

from mediafetch.utils.urls import content_type_ext

DEFAULT_STEM = "download"


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def filename_from_url(url: str, content_type: str | None = None) -> str:
    """
    Derives a safe file name from the last path segment of a URL, adding an
    extension for `content_type` when the segment has none.
    """
    segment = unquote(urlsplit(url).path.rsplit("/", 1)[-1])
    name = sanitize_filename(segment, platform="universal").strip(". ")
    if not name:
        name = DEFAULT_STEM
    if not Path(name).suffix:
        name = f"{name}.{content_type_ext(content_type)}"
    return name


def resolve_output(output: Path, url: str) -> Path:
    """Returns `output`, or a file inside it named after the URL if it is a directory."""
    if output.is_dir():
        return output / filename_from_url(url)
    create_dir(output.parent)
    return output
