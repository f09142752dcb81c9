"""Command that starts the HTTP server."""

from __future__ import annotations

import argparse
import logging
import os
import socket
from collections.abc import Sequence
from wsgiref.simple_server import WSGIServer, make_server

from dotenv import find_dotenv, load_dotenv

from sealbox.app import create_app
from sealbox.config import SealboxConfig
from sealbox.errors import SealboxError

log = logging.getLogger(__name__)


class _IPv6Server(WSGIServer):
    address_family = socket.AF_INET6


def parse_listen_addr(addr: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6host]:port``) into host and port."""
    host, sep, port_text = addr.strip().rpartition(":")
    if not sep or not host or not port_text.isdigit():
        raise ValueError(f"invalid listen address: {addr!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(f"invalid listen address: {addr!r}")
    port = int(port_text)
    if not host or port > 65535:
        raise ValueError(f"invalid listen address: {addr!r}")
    return host, port


def _setup_logging() -> None:
    level = os.environ.get("LOG_LEVEL", "DEBUG").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.DEBUG),
        format="%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server until interrupted; return the exit status."""
    argparse.ArgumentParser(
        prog="sealbox-server", description="Run the Sealbox secret storage server."
    ).parse_args(argv)

    load_dotenv(find_dotenv(usecwd=True))
    _setup_logging()
    log.info("Sealbox Server starting up...")

    try:
        config = SealboxConfig.from_env()
    except ValueError as exc:
        log.error("Failed to load configuration: %s", exc)
        return 1

    try:
        app = create_app(config)
    except SealboxError as exc:
        log.error("Failed to initialise application: %s", exc)
        return 1

    addr = config.listen_addr
    log.info("Listening on %s", addr)
    try:
        host, port = parse_listen_addr(addr)
        server_class = _IPv6Server if ":" in host else WSGIServer
        server = make_server(host, port, app, server_class=server_class)
    except (ValueError, OSError) as exc:
        log.error("Failed to bind address %s: %s", addr, exc)
        return 1

    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            log.info("Shutting down")
        except Exception as exc:  # noqa: BLE001
            log.error("Server crashed: %s", exc)
    return 0