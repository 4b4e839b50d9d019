"""Command-line interface for remote-control."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from remotecontrol import __version__


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file path, merged over the system and user config",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="remote-control",
        description="Navigate remote contexts and run their commands",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="mode", help="Operating mode")

    server_parser = subparsers.add_parser("server", help="Run the context server")
    _add_common(server_parser)
    server_parser.add_argument(
        "--version",
        action="version",
        version=f"remote-control-server {__version__}",
    )
    server_parser.add_argument("--host", help="Address to bind (default: 0.0.0.0)")
    server_parser.add_argument("--port", type=int, help="Context server port (default: 4000)")
    server_parser.add_argument(
        "--amf-port",
        type=int,
        help="Also serve the AMF personality on this port",
    )

    client_parser = subparsers.add_parser("client", help="Run the interactive client")
    _add_common(client_parser)
    client_parser.add_argument(
        "--version",
        action="version",
        version=f"remote-control-client {__version__}",
    )
    client_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    client_parser.add_argument("--connect", metavar="URL", help="Connect to a server on startup")
    client_parser.add_argument(
        "--history",
        type=Path,
        metavar="FILE",
        help="Persist command history to FILE",
    )

    return parser


def run_server(parsed: argparse.Namespace) -> int:
    from remotecontrol.config import load_config
    from remotecontrol.logging import get_logger, setup_logging
    from remotecontrol.server import serve

    config = load_config(config_path=parsed.config)
    overrides: dict[str, Any] = {"debug": config.server.debug or parsed.debug}
    if parsed.host:
        overrides["host"] = parsed.host
    if parsed.port is not None:
        overrides["port"] = parsed.port
    if parsed.amf_port is not None:
        overrides["amf_port"] = parsed.amf_port
    # The loaded config may be the shared cached instance
    server = dataclasses.replace(config.server, **overrides)

    setup_logging(config.logging, debug=server.debug)
    log = get_logger("cli")

    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        log.info("Interrupted")
    except OSError as e:
        log.error("Server failed to start: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def run_client(parsed: argparse.Namespace) -> int:
    from rich.console import Console

    from remotecontrol.client import ClientCommands, ClientSession, RemoteClient
    from remotecontrol.client.repl import InteractiveRepl
    from remotecontrol.config import load_config
    from remotecontrol.logging import setup_logging

    config = load_config(config_path=parsed.config)
    overrides: dict[str, Any] = {}
    if parsed.no_color:
        overrides["no_color"] = True
    if parsed.connect:
        overrides["server_url"] = parsed.connect
    if parsed.history:
        overrides["history_file"] = str(parsed.history)
    client_config = dataclasses.replace(config.client, **overrides)

    setup_logging(config.logging, debug=parsed.debug)

    commands = ClientCommands(
        session=ClientSession(),
        client=RemoteClient(timeout=client_config.request_timeout),
        console=Console(no_color=client_config.no_color),
    )
    history = Path(client_config.history_file).expanduser() if client_config.history_file else None
    repl = InteractiveRepl(commands, history_file=history)

    try:
        asyncio.run(repl.run(connect_url=client_config.server_url))
    except KeyboardInterrupt:
        pass
    return 0


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.mode == "server":
        return run_server(parsed)
    elif parsed.mode == "client":
        return run_client(parsed)
    else:
        parser.print_help()
        return 1


def main_server() -> None:
    """Console script: remote-control-server."""
    sys.exit(run_cli(["server", *sys.argv[1:]]))


def main_client() -> None:
    """Console script: remote-control-client."""
    sys.exit(run_cli(["client", *sys.argv[1:]]))


def main() -> None:
    sys.exit(run_cli(sys.argv[1:]))
