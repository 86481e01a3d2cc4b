"""Slotstream CLI — slotstream serve.

Entry point for the ``slotstream`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the slotstream CLI."""
    parser = argparse.ArgumentParser(
        prog="slotstream",
        description="Stream a live, slot-patched HTML document to the browser.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # slotstream serve
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the grid streaming server",
    )
    serve_parser.add_argument(
        "root", nargs="?", default=".", help="Directory holding slotstream.yaml/.toml",
    )
    # None means "not given" so config file values survive.
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--capacity", type=int, default=None, help="Pending chunks kept per stream",
    )
    serve_parser.add_argument("--debug", action="store_true", default=None, help="Chirp debug mode")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from slotstream import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from slotstream._errors import ConfigError
    from slotstream.app import serve

    if args.command == "serve":
        try:
            serve(
                root=args.root,
                host=args.host,
                port=args.port,
                capacity=args.capacity,
                debug=args.debug,
            )
        except ConfigError as exc:
            print(f"  Config error: {exc}", file=sys.stderr)
            sys.exit(2)


if __name__ == "__main__":
    main()
