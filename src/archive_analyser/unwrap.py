"""Wrapped-literal loader for archive data files.

All the archive files look something like:

    window.YTD.tweets.part0 = [
      ...
    ]

We strip the JS assignment to get to the inner JSON.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import psutil

from .config import settings
from .errors import FileAccessError, FormatError, ParseError


logger = logging.getLogger(__name__)


def memory_in_use() -> int:
    """Resident set size of this process, in bytes."""
    return psutil.Process().memory_info().rss


def unwrap(
    raw_text: str,
    name: str = "<text>",
    marker: str = None,
    max_offset: int = None,
) -> Any:
    """Strip the assignment prefix from `raw_text` and parse the JSON after it."""
    marker = marker if marker is not None else settings.wrapper_marker
    max_offset = max_offset if max_offset is not None else settings.marker_max_offset

    # Only look near the start; the marker may also occur deep inside the data.
    pos = raw_text.find(marker, 0, max_offset + len(marker))
    if pos < 0:
        raise FormatError(
            f"{name} file doesn't seem to be in the expected wrapped-literal format."
        )

    try:
        value = json.loads(raw_text[pos + len(marker):])
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Couldn't decode JSON from {name} file: {e}") from e

    # An empty array is fine (e.g. an account with no followers); null is not.
    if value is None:
        raise ParseError(f"Couldn't decode JSON from {name} file: payload is null.")
    return value


def load_document(path: Path) -> Any:
    """Read and unwrap one archive file, logging a memory checkpoint."""
    path = Path(path)
    try:
        # Invalid UTF-8 becomes U+FFFD instead of failing the whole file.
        text = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise FileAccessError(f"Could not open file '{path}', does it exist?") from e

    doc = unwrap(text, name=path.name)
    del text

    logger.info(f"Memory used after loading '{path.name}': {memory_in_use()} bytes")
    return doc
