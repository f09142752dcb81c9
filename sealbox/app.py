"""HTTP application serving the secrets API."""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable, Iterable, Mapping
from http import HTTPStatus
from typing import Any
from urllib.parse import quote, unquote

from sealbox.config import SealboxConfig
from sealbox.errors import InvalidMethodError, SealboxError
from sealbox.path import Params, PathRejection, Version, extract_params
from sealbox.repo import Secret, SecretRepo, SqliteSecretRepo

log = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"

_ROOT_METHODS = ("GET", "HEAD")
_SECRET_METHODS = ("GET", "PUT", "DELETE", "POST", "HEAD", "OPTIONS")

Response = tuple[int, dict[str, str], bytes]


def _json(status: int, payload: Any) -> Response:
    body = json.dumps(payload).encode()
    return status, {"content-type": "application/json", "content-length": str(len(body))}, body


def _text(status: int, text: str) -> Response:
    body = text.encode()
    return (
        status,
        {"content-type": "text/plain; charset=utf-8", "content-length": str(len(body))},
        body,
    )


def _empty(status: int, **headers: str) -> Response:
    return status, {"content-length": "0", **headers}, b""


def _match_secret_route(path: str) -> dict[str, str] | None:
    if not path.startswith("/"):
        return None
    parts = path[1:].split("/")
    if len(parts) != 3 or parts[1] != "secrets" or not parts[0] or not parts[2]:
        return None
    return {"version": unquote(parts[0]), "secret_key": unquote(parts[2])}


class AppState:
    """Shared resources used by request handlers."""

    def __init__(self, config: SealboxConfig) -> None:
        self.secret_repo: SecretRepo = SqliteSecretRepo(config.store_path)


class SealboxApp:
    """Routes requests to the secrets API; usable as a WSGI application."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    def handle(
        self, method: str, path: str, headers: Mapping[str, str] | None = None
    ) -> Response:
        """Answer one request; returns status, response headers and body."""
        method = method.upper()
        request_headers = {k.lower(): v for k, v in (headers or {}).items()}
        request_id = request_headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        log.info("http_request request_id=%s %s %s", request_id, method, path)

        status, response_headers, body = self._route(method, path)
        response_headers[REQUEST_ID_HEADER] = request_id
        if method == "HEAD":
            body = b""
        return status, response_headers, body

    def _route(self, method: str, path: str) -> Response:
        if path == "/":
            if method in _ROOT_METHODS:
                return _text(200, "Hello, Sealbox!")
            return _empty(405, allow=",".join(_ROOT_METHODS))

        captured = _match_secret_route(path)
        if captured is None:
            return _empty(404)
        if method not in _SECRET_METHODS:
            return _empty(405, allow=",".join(_SECRET_METHODS))

        try:
            params = extract_params(captured)
        except PathRejection as rejection:
            return _json(rejection.status, rejection.error.to_dict())

        try:
            return _json(200, self._dispatch(method, params))
        except SealboxError as error:
            return _json(*error.to_response())

    def _dispatch(self, method: str, params: Params) -> dict[str, str]:
        repo = self.state.secret_repo
        if params.version is Version.V1:
            if method == "GET":
                repo.get_secret(params.secret_key)
                return {"secret": ""}
            if method == "PUT":
                repo.save_secret(Secret.create(params.secret_key))
                return {"result": "Ok"}
            if method == "DELETE":
                repo.delete_secret(params.secret_key)
                return {"result": "Ok"}
        raise InvalidMethodError()

    def __call__(
        self, environ: Mapping[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        raw_path = environ.get("PATH_INFO", "/") or "/"
        path = quote(raw_path.encode("latin-1").decode("utf-8", "replace"), safe="/")
        headers = {
            key[5:].replace("_", "-").lower(): value
            for key, value in environ.items()
            if key.startswith("HTTP_")
        }
        status, response_headers, body = self.handle(
            environ.get("REQUEST_METHOD", "GET"), path, headers
        )
        start_response(
            f"{status} {HTTPStatus(status).phrase}", list(response_headers.items())
        )
        return [body]


def create_app(config: SealboxConfig) -> SealboxApp:
    """Build the application with storage opened from ``config``."""
    log.info("Initializing API routes")
    return SealboxApp(AppState(config))