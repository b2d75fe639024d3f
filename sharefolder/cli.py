#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Share a directory over HTTP for browsing and download.
Usage:
    sharefolder --folder /path/to/dir -p 8000
"""

import argparse
import logging
import sys

from sharefolder.app import create_app
from sharefolder.config import DEFAULT_HOST, DEFAULT_PORT, ConfigError, ServerConfig


def build_parser():
    parser = argparse.ArgumentParser(description="Share a directory over HTTP")
    parser.add_argument("--folder", help="Folder to serve files from (required)")
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT, help=f"Port to serve on (default: {DEFAULT_PORT})")
    parser.add_argument("--host", default=DEFAULT_HOST, help=f"Address to bind (default: {DEFAULT_HOST})")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        config = ServerConfig.from_args(args)
    except ConfigError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    app = create_app(config.root)

    print(f"Serving files from: {config.root}")
    print(f"Server running on: http://localhost:{config.port}")
    print("Press Ctrl+C to stop the server")

    try:
        app.run(host=config.host, port=config.port, threaded=True)
    except OSError as e:
        print(f"Error: cannot listen on {config.host}:{config.port}: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
    print("\nServer stopped.")


if __name__ == "__main__":
    main()
