"""Perch CLI — preview one API document in Swagger UI.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Serve an API document (JSON, YAML, TOML or a Python script) in Swagger UI.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default="",
        help="Local file path or http(s) URL of the document",
    )
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", "-p", type=int, default=None, help="Bind port number")
    parser.add_argument("--title", default=None, help="Page title of the viewer")
    parser.add_argument("--url", default=None, help="Document URL the viewer links to")
    parser.add_argument("--no-json", action="store_true", help="Do not offer the JSON download")
    parser.add_argument("--no-yaml", action="store_true", help="Do not offer the YAML download")
    parser.add_argument("--no-toml", action="store_true", help="Do not offer the TOML download")
    parser.add_argument("--username", default=None, help="Basic-auth user for a remote document")
    parser.add_argument("--password", default=None, help="Basic-auth password (remote only)")
    parser.add_argument(
        "--allow-remote-scripts",
        action="store_true",
        help="Execute a Python script served by a remote source",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("debug", "info", "warning", "error"),
        help="Logging verbosity",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.source.strip():
        parser.print_help()
        sys.exit(2)

    from perch.cli._run import run_server

    run_server(args)
