"""``perch <source>`` — load the document and start the server."""

import argparse
import logging
import sys

import anyio

from perch.app import DocsServer
from perch.config import ServerConfig
from perch.errors import PerchError


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Build a ServerConfig, letting CLI flags override the defaults."""
    defaults = ServerConfig()
    return ServerConfig(
        host=args.host if args.host is not None else defaults.host,
        port=args.port if args.port is not None else defaults.port,
        log_level=args.log_level or defaults.log_level,
        title=args.title or defaults.title,
        swagger_url=args.url,
        export_json=not args.no_json,
        export_yaml=not args.no_yaml,
        export_toml=not args.no_toml,
        allow_remote_scripts=args.allow_remote_scripts,
        username=args.username,
        password=args.password,
    )


def run_server(args: argparse.Namespace) -> None:
    """Load ``args.source`` and serve it until interrupted.

    Any document or configuration problem is reported on stderr and
    ends the process with exit status 1.
    """
    config = config_from_args(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    try:
        server = anyio.run(DocsServer.from_source, args.source, config)
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    server.run()
