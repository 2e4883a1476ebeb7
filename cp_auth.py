"""Command line interface for the Chaum-Pedersen authentication service."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from cpauth.client import AuthClient
from cpauth.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_URL
from cpauth.errors import AuthError

logger = logging.getLogger("cp_auth")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the authentication server")
    serve_parser.add_argument("--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST})")
    serve_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})")

    for name, help_text in (
        ("register", "Register a username and password"),
        ("login", "Prove knowledge of the password and obtain a session id"),
    ):
        client_parser = subparsers.add_parser(name, help=help_text)
        client_parser.add_argument("username")
        client_parser.add_argument("password")
        client_parser.add_argument("--url", default=DEFAULT_URL, help=f"Server URL (default: {DEFAULT_URL})")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    namespace = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=getattr(logging, namespace.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if namespace.command == "serve":
        import uvicorn

        logger.info("Building the server at %s:%s", namespace.host, namespace.port)
        uvicorn.run("cpauth.server:app", host=namespace.host, port=namespace.port)
        return 0

    client = AuthClient(namespace.url)
    try:
        if namespace.command == "register":
            client.register(namespace.username, namespace.password)
            print(json.dumps({"user": namespace.username, "registered": True}, indent=2))
            return 0

        if namespace.command == "login":
            session_id = client.login(namespace.username, namespace.password)
            print(json.dumps({"user": namespace.username, "session_id": session_id}, indent=2))
            return 0
    except AuthError as exc:
        print(f"{namespace.command} failed: {exc}", file=sys.stderr)
        return 1

    raise RuntimeError("Unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
