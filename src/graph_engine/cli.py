"""graph-engine CLI entry point.

Usage: graph-engine [run|serve|send] ...
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import socket
import sys

from graph_engine.config import EngineLimits


def _add_limit_args(p: argparse.ArgumentParser) -> None:
    defaults = EngineLimits()
    p.add_argument(
        "--max-nodes", type=int, default=defaults.max_nodes,
        help=f"Largest adjacency list accepted (default: {defaults.max_nodes})",
    )
    p.add_argument(
        "--max-stack-depth", type=int, default=defaults.max_stack_depth,
        help=f"Bound on DFS/Hierholzer work stacks (default: {defaults.max_stack_depth})",
    )
    p.add_argument(
        "--max-words", type=int, default=defaults.max_words,
        help=f"Largest word list accepted (default: {defaults.max_words})",
    )


def _add_address_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--host", default="127.0.0.1", help="Server address (default: 127.0.0.1)")
    p.add_argument("--port", type=int, default=7421, help="Server port (default: 7421)")


def _limits(args: argparse.Namespace) -> EngineLimits:
    return EngineLimits(
        max_nodes=args.max_nodes,
        max_stack_depth=args.max_stack_depth,
        max_words=args.max_words,
    )


def _read_request(path: str | None) -> object:
    if path is None or path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def _run(args: argparse.Namespace) -> int:
    from graph_engine.engine.dispatcher import Dispatcher

    try:
        obj = _read_request(args.file)
    except json.JSONDecodeError as exc:
        print(f"graph-engine: invalid JSON: {exc}", file=sys.stderr)
        return 2
    response = Dispatcher(_limits(args)).dispatch_dict(obj)
    print(json.dumps(response, indent=2 if args.pretty else None))
    return 1 if response["kind"] == "ERROR" else 0


def _serve(args: argparse.Namespace) -> int:
    from graph_engine.engine.dispatcher import Dispatcher
    from graph_engine.engine.server import EngineServer

    async def _main() -> None:
        server = EngineServer(args.host, args.port, Dispatcher(_limits(args)))
        await server.start()
        try:
            await server.serve_forever()
        finally:
            await server.stop()

    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        pass
    return 0


def _send(args: argparse.Namespace) -> int:
    from graph_engine.engine.protocol import EngineRequest, recv_response, send_envelope
    from graph_engine.errors import InvalidInputError

    try:
        request = EngineRequest.from_dict(_read_request(args.file))
    except json.JSONDecodeError as exc:
        print(f"graph-engine: invalid JSON: {exc}", file=sys.stderr)
        return 2
    except InvalidInputError as exc:
        print(f"graph-engine: invalid request: {exc}", file=sys.stderr)
        return 2
    with socket.create_connection((args.host, args.port), timeout=args.timeout) as sock:
        send_envelope(sock, request)
        response = recv_response(sock)
    print(json.dumps(response.to_dict(), indent=2 if args.pretty else None))
    return 1 if response.is_error else 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="graph-engine",
        description="Cycle detection, Eulerian paths and word ladders over JSON requests.",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command")

    p = subparsers.add_parser("run", help="Dispatch one JSON request in-process.")
    p.add_argument("file", nargs="?", help="Request file (default: stdin)")
    p.add_argument("--pretty", action="store_true", help="Indent the JSON output.")
    _add_limit_args(p)

    p = subparsers.add_parser("serve", help="Serve requests over TCP.")
    _add_address_args(p)
    _add_limit_args(p)

    p = subparsers.add_parser("send", help="Send one JSON request to a running server.")
    p.add_argument("file", nargs="?", help="Request file (default: stdin)")
    p.add_argument("--pretty", action="store_true", help="Indent the JSON output.")
    p.add_argument(
        "--timeout", type=float, default=30.0,
        help="Socket timeout in seconds (default: 30)",
    )
    _add_address_args(p)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        sys.exit(_run(args))
    if args.command == "serve":
        sys.exit(_serve(args))
    if args.command == "send":
        sys.exit(_send(args))
