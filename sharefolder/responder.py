"""
Turn a ResolvedEntry into a Flask response.

Files are streamed from an open handle as attachments; directories are listed
and rendered to HTML.
"""

import logging
import os
import unicodedata
from urllib.parse import quote

from flask import Response

from sharefolder.errors import InternalError
from sharefolder.listing import build_listing, render_listing
from sharefolder.mime import mime_type_for

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def iter_file(handle, path, size):
    """Yield the file's bytes, always closing the handle.

    A failure after the headers are out can't change the status any more, so
    it is only logged.
    """
    sent = 0
    try:
        while True:
            chunk = handle.read(CHUNK_SIZE)
            if not chunk:
                break
            sent += len(chunk)
            yield chunk
    except OSError as e:
        logger.error(f"Error reading file {path}: {e}")
    finally:
        handle.close()
        if sent != size:
            logger.warning(f"Stream for {path} ended after {sent} of {size} bytes")


def attachment_options(filename):
    """Content-Disposition parameters, with an RFC 5987 form for non-ASCII names."""
    try:
        filename.encode("ascii")
    except UnicodeEncodeError:
        simple = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
        quoted = quote(filename, safe="", errors="surrogateescape")
        return {"filename": simple, "filename*": f"UTF-8''{quoted}"}
    return {"filename": filename}


def download_name(entry):
    """Base name of the path the client asked for, not of its symlink target."""
    name = entry.request_path.rstrip("/").rsplit("/", 1)[-1]
    return name or os.path.basename(entry.path)


def serve_file(entry):
    try:
        handle = open(entry.path, "rb")
    except OSError as e:
        raise InternalError(f"Error reading file: {e}") from e

    try:
        size = os.fstat(handle.fileno()).st_size
    except OSError as e:
        handle.close()
        raise InternalError(f"Error reading file: {e}") from e

    filename = download_name(entry)
    response = Response(
        iter_file(handle, entry.path, size),
        status=200,
        content_type=mime_type_for(filename),
        direct_passthrough=True,
    )
    response.headers["Content-Length"] = str(size)
    response.headers.set("Content-Disposition", "attachment", **attachment_options(filename))
    # HEAD responses never start the generator
    response.call_on_close(handle.close)
    return response


def serve_directory(entry):
    try:
        listing = build_listing(entry.path, entry.request_path)
    except OSError as e:
        raise InternalError(f"Error reading directory: {e}") from e

    try:
        body = render_listing(listing)
    except (ValueError, TypeError) as e:
        raise InternalError(f"Error generating HTML: {e}") from e

    return Response(body, status=200, content_type="text/html; charset=utf-8")


def respond(entry):
    if entry.is_dir:
        return serve_directory(entry)
    return serve_file(entry)
