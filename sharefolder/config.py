"""Startup configuration, validated once before the server starts."""

import os
from dataclasses import dataclass

DEFAULT_PORT = 8000
DEFAULT_HOST = "0.0.0.0"


class ConfigError(Exception):
    """Invalid startup configuration; the message is shown to the user."""


@dataclass(frozen=True)
class ServerConfig:
    root: str
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST

    @classmethod
    def from_args(cls, args):
        if not args.folder:
            raise ConfigError("Error: --folder is required")

        root = os.path.abspath(os.path.expanduser(args.folder))
        if not os.path.exists(root):
            raise ConfigError(f"Error: Folder '{root}' does not exist")
        if not os.path.isdir(root):
            raise ConfigError(f"Error: not a directory -> {root}")

        if not 0 < args.port < 65536:
            raise ConfigError(f"Error: Invalid port {args.port}")

        return cls(root=root, port=args.port, host=args.host)
