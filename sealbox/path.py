"""Extraction of route parameters from a matched request path."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus


class Version(enum.Enum):
    """API versions accepted in the route."""

    V1 = "v1"
    V2 = "v2"
    V3 = "v3"


@dataclass(frozen=True)
class Params:
    """Parameters of the secrets route."""

    version: Version
    secret_key: str


@dataclass(frozen=True)
class PathError:
    """JSON body describing why path parameters were rejected."""

    message: str
    location: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"message": self.message, "location": self.location}


class PathRejection(Exception):
    """Raised when the path parameters cannot be turned into ``Params``."""

    def __init__(self, status: int, error: PathError) -> None:
        super().__init__(error.message)
        self.status = int(status)
        self.error = error


_FIELDS = ("version", "secret_key")


def _bad_request(message: str, location: str | None = None) -> PathRejection:
    return PathRejection(HTTPStatus.BAD_REQUEST, PathError(message, location))


def extract_params(path_params: Mapping[str, str]) -> Params:
    """Build ``Params`` from the captured path segments, or raise PathRejection."""
    if not path_params:
        raise PathRejection(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            PathError("No paths parameters found for matched route"),
        )
    if len(path_params) != len(_FIELDS):
        raise _bad_request(
            "Wrong number of path arguments for `Path`. "
            f"Expected {len(_FIELDS)} but got {len(path_params)}"
        )
    for name in _FIELDS:
        if name not in path_params:
            raise _bad_request(f"missing field `{name}`")

    raw_version = path_params["version"]
    try:
        version = Version(raw_version)
    except ValueError:
        expected = ", ".join(f"`{v.value}`" for v in Version)
        raise _bad_request(
            f"unknown variant `{raw_version}`, expected one of {expected}"
        ) from None
    return Params(version=version, secret_key=path_params["secret_key"])