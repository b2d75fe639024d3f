"""
Errors raised while resolving or serving a request.

They are werkzeug HTTP exceptions so Flask can turn them straight into a
status code; the app registers a handler that renders them as plain text.
"""

from werkzeug.exceptions import HTTPException


class ShareError(HTTPException):
    """Base class for every request-level failure."""


class Forbidden(ShareError):
    """Traversal attempt or a path outside the serve root."""

    code = 403
    description = "Forbidden"


class NotFound(ShareError):
    code = 404
    description = "Not Found"


class InternalError(ShareError):
    """Filesystem or rendering failure other than a missing entry."""

    code = 500
    description = "Internal Server Error"
