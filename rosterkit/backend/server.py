"""Command line entry point that serves the backend with uvicorn."""

from __future__ import annotations

import argparse
import logging
import threading
import webbrowser

import uvicorn

from .config import BackendSettings, load_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(settings: BackendSettings, argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rosterkit backend")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--open", action="store_true", help="open the API docs in a browser")
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def build_docs_url(host: str, port: int) -> str:
    return f"http://{host}:{port}/docs"


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    args = parse_args(settings, argv)
    configure_logging(args.log_level)

    if args.open:
        threading.Timer(1.0, webbrowser.open, args=(build_docs_url(args.host, args.port),)).start()

    uvicorn.run(
        "rosterkit.backend.api:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
