"""Command line entry point."""

from __future__ import annotations

import argparse
import asyncio
import sys

from chatdispatch.config import Settings
from chatdispatch.log import configure_logging
from chatdispatch.tools import CATALOGS


def _ask(args: argparse.Namespace, settings: Settings) -> int:
    from chatdispatch.server import build_agents

    agent = build_agents(settings)[args.catalog]
    result = asyncio.run(agent.run(args.prompt))
    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1
    print(result.response)
    return 0


def _serve(args: argparse.Namespace, settings: Settings) -> int:
    from chatdispatch.server import create_app

    create_app(settings).run(host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="chatdispatch", description="Tool-calling chat assistant")
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="answer one prompt")
    ask.add_argument("prompt")
    ask.add_argument("--catalog", choices=sorted(CATALOGS), default="ai")
    ask.set_defaults(func=_ask)

    serve = sub.add_parser("serve", help="run the HTTP server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.set_defaults(func=_serve)

    args = parser.parse_args(argv)
    settings = Settings()
    configure_logging(settings.log_level)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
