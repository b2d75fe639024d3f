DEFAULT_TYPE = "application/octet-stream"

# Extension (lower case) -> content type
MIME_TYPES = {
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".pdf": "application/pdf",
    ".txt": "text/plain",
    ".md": "text/markdown",
}


def mime_type_for(name: str) -> str:
    """Content type for a file name, judged by its extension only."""
    # ".md" on its own counts as an extension, unlike os.path.splitext
    _, dot, ext = name.lower().rpartition(".")
    if not dot:
        return DEFAULT_TYPE
    return MIME_TYPES.get("." + ext, DEFAULT_TYPE)
