"""Run the HTTP server.

Usage:
    python -m ctr_engine.tools.serve
    python -m ctr_engine.tools.serve --port 8080
    COUNTERS_TABLE=counters ctr-engine --port 8080
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ctr_engine.config import settings

DEFAULT_PORT = 80


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the CTR engine over HTTP")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="bind the HTTP server to this port")
    parser.add_argument("--host", default="0.0.0.0", help="bind the HTTP server to this address")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s | %(name)s | %(message)s",
    )
    uvicorn.run(
        "ctr_engine.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
