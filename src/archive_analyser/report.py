"""Report renderer - one minimal HTML table per result set."""
from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import Iterable, Sequence
from urllib.parse import urlparse

from .classify import RankedAccount
from .config import settings
from .errors import FileAccessError
from .models import RecordStore


logger = logging.getLogger(__name__)

MUTUALS = "mutuals"
ENGAGED_NON_MUTUALS = "nonzero-reply-non-mutual-followers"
UNENGAGED_NON_MUTUALS = "zero-reply-non-mutual-followers"


def is_link(text: str) -> bool:
    """True for a well-formed http(s) URL."""
    try:
        parsed = urlparse(text)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def profile_url(account_id: str, template: str = None) -> str:
    return (template or settings.profile_url_template).format(account_id=account_id)


def build_rows(
    entries: Iterable[RankedAccount],
    store: RecordStore,
    url_template: str = None,
) -> list[list[str]]:
    """Table rows: id label, screen names, reply count, profile link."""
    rows = []
    for account_id, score in entries:
        record = store.get(account_id)
        names = sorted(record.display_names) if record else []
        rows.append([
            f"ID: {account_id}",
            "/".join(names),
            f"reply count: {score}",
            profile_url(account_id, url_template),
        ])
    return rows


def _cell(value: str) -> str:
    content = html.escape(str(value))
    if is_link(str(value)):
        content = f'<a href="{content}">{content}</a>'
    return f"<td>{content}</td>"


def render_table(name: str, rows: Sequence[Sequence[str]]) -> str:
    """Render a self-contained HTML document with a title line and one row per entry."""
    title = f"{html.escape(name)} (total: {len(rows)})"
    lines = [
        "<!doctype html>",
        "<meta charset=utf-8>",
        f"<title>{title}</title>",
        f"<h1>{title}</h1>",
        "<table>",
    ]
    for row in rows:
        lines.append("<tr>" + "".join(_cell(c) for c in row) + "</tr>")
    lines.append("</table>")
    return "\n".join(lines) + "\n"


def write_report(
    name: str,
    entries: Sequence[RankedAccount],
    store: RecordStore,
    output_dir: Path = None,
) -> Path:
    """Render `entries` and write `<output_dir>/<name>.html`."""
    output_dir = Path(output_dir if output_dir is not None else settings.output_dir)
    path = output_dir / f"{name}{settings.report_extension}"

    document = render_table(name, build_rows(entries, store))
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(document)
    except OSError as e:
        raise FileAccessError(f"Couldn't open '{path}' for writing.") from e

    logger.info(f"Table written to '{path}'")
    return path
