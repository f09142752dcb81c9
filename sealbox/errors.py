"""Error types and their HTTP representation."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

log = logging.getLogger(__name__)


class SealboxError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    template: str = "Unknown error"

    def __init__(self, detail: Any = "") -> None:
        self.detail = str(detail)
        super().__init__(self.template.format(self.detail))

    def to_response(self) -> tuple[int, dict[str, str]]:
        """Return the status code and JSON body describing this error."""
        message = str(self)
        log.debug("Responding with error: %s", message)
        return int(self.status), {"error": message}


class NotFoundError(SealboxError):
    status = HTTPStatus.NOT_FOUND
    template = "Secret not found: {}"


class StorageError(SealboxError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    template = "Storage failure: {}"


class BadRequestError(SealboxError):
    status = HTTPStatus.BAD_REQUEST
    template = "Invalid request: {}"


class InvalidMethodError(SealboxError):
    status = HTTPStatus.METHOD_NOT_ALLOWED
    template = "Invalid method"


class DatabaseError(SealboxError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    template = "Database error: {}"


class UnknownError(SealboxError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    template = "Unknown error"