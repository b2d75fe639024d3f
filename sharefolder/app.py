"""
Flask application: one catch-all GET route backed by the resolver and responder.
"""

from flask import Flask, current_app, request
from werkzeug.exceptions import HTTPException

from sharefolder.errors import ShareError
from sharefolder.resolver import resolve
from sharefolder.responder import respond


def raw_request_path(environ):
    """PATH_INFO as sent, decoded the way the filesystem decodes names.

    request.path collapses leading slashes and replaces undecodable bytes, so
    neither "//etc" nor a link to a non-UTF-8 file name would survive it.
    """
    raw = environ.get("PATH_INFO", "").encode("latin-1")
    return raw.decode("utf-8", "surrogateescape")


def dispatch(url_path):
    """Resolve url_path against the configured root and build the response."""
    entry = resolve(url_path, current_app.config["SHARE_ROOT"])
    return respond(entry)


def handle_http_error(e):
    if isinstance(e, ShareError) and e.code >= 500:
        current_app.logger.error(f"{request.method} {request.path}: {e.description}")
    return e.description, e.code, {"Content-Type": "text/plain; charset=utf-8"}


def create_app(root):
    """Build the app serving root, which must be an existing absolute directory."""
    app = Flask(__name__)
    app.config["SHARE_ROOT"] = root

    @app.route("/", defaults={"req_path": ""}, methods=["GET"])
    @app.route("/<path:req_path>", methods=["GET"])
    def serve(req_path):
        return dispatch(raw_request_path(request.environ))

    app.register_error_handler(HTTPException, handle_http_error)
    return app
