"""Share a single directory tree over HTTP for browsing and download."""

from sharefolder.app import create_app

__all__ = ["create_app"]
__version__ = "1.0.0"
