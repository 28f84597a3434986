#!/usr/bin/env python3
"""Minimal FastAPI app showing call logging on a controller.

Exposes GET /greet?name=Ada through a woven controller. Every request logs
the request line, the call arguments, the result and the execution time.

Usage:
    python scripts/greeting_server.py
    python scripts/greeting_server.py --port 8765 --log-file ~/greeting.jsonl
"""

from __future__ import annotations

import argparse

import uvicorn
from fastapi import FastAPI

from logaspect import LoggingConfig, LogLevel, configure_call_logger, controller, install_request_context, logged


@controller
@logged(level=LogLevel.INFO)
class GreetingController:
    """Greets people."""

    def greet(self, name: str) -> str:
        return f"Hello, {name}"

    @logged(level=LogLevel.DEBUG)
    async def ping(self) -> dict:
        return {"status": "ok"}


def create_app() -> FastAPI:
    app = FastAPI(title="greeting-server")
    greetings = GreetingController()
    app.add_api_route("/greet", greetings.greet, methods=["GET"])
    app.add_api_route("/ping", greetings.ping, methods=["GET"])
    install_request_context(app)
    return app


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Greeting server with call logging")
    parser.add_argument(
        "--port",
        type=int,
        default=8765,
        help="HTTP port (default: 8765)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="HTTP host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write call lines as JSONL to this file",
    )
    args = parser.parse_args()

    configure_call_logger(LoggingConfig(level=LogLevel.DEBUG, log_file=args.log_file))
    uvicorn.run(create_app(), host=args.host, port=args.port)
