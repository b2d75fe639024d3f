"""
Map a request path onto the serve root.

Every request goes through resolve() before the filesystem is touched for
content; it refuses anything that would land outside the root.
"""

import errno
import logging
import os
import stat
from dataclasses import dataclass

from sharefolder.errors import Forbidden, InternalError, NotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedEntry:
    path: str  # canonical absolute path
    request_path: str  # as received from the transport
    is_dir: bool
    size: int = 0
    mtime: float = 0.0


def canonical(path: str) -> str:
    """Absolute, normalized form of path with symlinks followed."""
    return os.path.realpath(os.path.abspath(path))


def is_within(path: str, root: str) -> bool:
    """True if path is root itself or lies below it.

    A bare startswith() would accept /srv/files-secret for /srv/files, so the
    character after the prefix has to be a separator.
    """
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


def resolve(request_path: str, serve_root: str) -> ResolvedEntry:
    rel = request_path[1:] if request_path.startswith("/") else request_path

    if ".." in rel or rel.startswith("/"):
        logger.warning(f"Directory traversal blocked: {request_path!r}")
        raise Forbidden("Forbidden: Directory traversal not allowed")

    candidate = os.path.join(serve_root, rel)
    try:
        abs_path = canonical(candidate)
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot canonicalize {candidate!r}: {e}")
        raise NotFound("Not Found") from e

    root = canonical(serve_root)
    if not is_within(abs_path, root):
        logger.warning(f"Path outside serve directory: {request_path!r} -> {abs_path}")
        raise Forbidden("Forbidden: Path outside serve directory")

    try:
        st = os.stat(abs_path)
    except (FileNotFoundError, ValueError) as e:
        raise NotFound("Not Found") from e
    except OSError as e:
        if e.errno in (errno.ENOTDIR, errno.ENAMETOOLONG, errno.ELOOP):
            raise NotFound("Not Found") from e
        raise InternalError(f"Error reading path: {e}") from e

    if stat.S_ISDIR(st.st_mode):
        return ResolvedEntry(abs_path, request_path, True, 0, st.st_mtime)
    return ResolvedEntry(abs_path, request_path, False, st.st_size, st.st_mtime)
