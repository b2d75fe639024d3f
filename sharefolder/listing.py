"""
Directory listing model and its HTML rendering.

build_listing() reads one directory level; render_listing() is a pure function
of the resulting DirectoryListing, so the same directory state always renders
to the same page.
"""

import html
import logging
import os
import stat
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from urllib.parse import quote

logger = logging.getLogger(__name__)

ICON_DIR = "📁"
ICON_FILE = "📄"
NO_VALUE = "-"
TIME_FORMAT = "%Y-%m-%d %H:%M"

STYLE = (
    "<style>\n"
    "  body { font-family: Arial, sans-serif; margin: 20px; }\n"
    "  h1 { color: #333; }\n"
    "  table { border-collapse: collapse; width: 100%; }\n"
    "  th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }\n"
    "  th { background-color: #f2f2f2; }\n"
    "  a { text-decoration: none; color: #0066cc; }\n"
    "  a:hover { text-decoration: underline; }\n"
    "  .file-icon { color: #666; }\n"
    "  .dir-icon { color: #ff6600; }\n"
    "</style>"
)


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    is_dir: bool
    size: int
    mtime: float
    url: str


@dataclass(frozen=True)
class DirectoryListing:
    path: str  # url path without surrounding slashes, "" for the root
    entries: List[DirectoryEntry] = field(default_factory=list)


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def format_mtime(mtime: float) -> str:
    return datetime.fromtimestamp(mtime).strftime(TIME_FORMAT)


def entry_url(url_path: str, name: str, is_dir: bool) -> str:
    """Root-relative link to a child of url_path."""
    url = f"/{url_path}/{name}" if url_path else f"/{name}"
    if is_dir:
        url += "/"
    return url


def display_text(text: str) -> str:
    """Printable form of a name; bytes that are not UTF-8 show as U+FFFD."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def parent_url(url_path: str) -> str:
    parts = url_path.split("/")
    if len(parts) <= 1:
        return "/"
    return "/" + "/".join(parts[:-1]) + "/"


def sort_key(entry: DirectoryEntry):
    # Directories first, then by name
    return (not entry.is_dir, entry.name)


def build_listing(dir_path: str, url_path: str) -> DirectoryListing:
    """Collect the immediate children of dir_path.

    Children whose metadata cannot be read are left out instead of failing
    the whole listing. OSError from opening the directory itself propagates.
    """
    url_path = url_path.strip("/")
    entries = []
    with os.scandir(dir_path) as it:
        for child in it:
            try:
                st = child.stat()
            except OSError as e:
                logger.debug(f"Skipping unreadable entry {child.path}: {e}")
                continue
            is_dir = stat.S_ISDIR(st.st_mode)
            entries.append(DirectoryEntry(
                name=child.name,
                is_dir=is_dir,
                size=st.st_size,
                mtime=st.st_mtime,
                url=entry_url(url_path, child.name, is_dir),
            ))
    entries.sort(key=sort_key)
    return DirectoryListing(path=url_path, entries=entries)


def _row(href: str, label: str, kind: str, size: str, modified: str) -> str:
    link = html.escape(quote(href, errors="surrogateescape"))
    return (
        "<tr>"
        f"<td><a href=\"{link}\">{label}</a></td>"
        f"<td>{kind}</td>"
        f"<td>{size}</td>"
        f"<td>{modified}</td>"
        "</tr>"
    )


def render_listing(listing: DirectoryListing) -> str:
    display = html.escape(display_text("/" + listing.path), quote=False)
    title = f"Directory listing for {display}"

    out = []
    out.append("<!DOCTYPE html>")
    out.append("<html><head>")
    out.append('<meta charset="utf-8">')
    out.append(f"<title>{title}</title>")
    out.append(STYLE)
    out.append("</head><body>")
    out.append(f"<h1>{title}</h1>")
    out.append("<table>")
    out.append("<thead><tr><th>Name</th><th>Type</th><th>Size</th><th>Modified</th></tr></thead>")
    out.append("<tbody>")

    if listing.path:
        out.append(_row(
            parent_url(listing.path),
            f"{ICON_DIR} ..",
            f"<span class=\"dir-icon\">{ICON_DIR}</span> Directory",
            NO_VALUE,
            NO_VALUE,
        ))

    for entry in listing.entries:
        name = html.escape(display_text(entry.name), quote=False)
        if entry.is_dir:
            label = f"{ICON_DIR} {name}"
            kind = f"<span class=\"dir-icon\">{ICON_DIR}</span> Directory"
            size = NO_VALUE
        else:
            label = f"{ICON_FILE} {name}"
            kind = f"<span class=\"file-icon\">{ICON_FILE}</span> File"
            size = format_size(entry.size)
        out.append(_row(entry.url, label, kind, size, format_mtime(entry.mtime)))

    out.append("</tbody>")
    out.append("</table>")
    out.append("</body></html>")
    return "\n".join(out)
