import sqlite3

import pytest

from sealbox.errors import (
    BadRequestError,
    DatabaseError,
    InvalidMethodError,
    NotFoundError,
    SealboxError,
    StorageError,
    UnknownError,
)


def test_not_found_response():
    assert NotFoundError("db-pass").to_response() == (
        404,
        {"error": "Secret not found: db-pass"},
    )


def test_storage_error_response():
    status, body = StorageError("disk").to_response()
    assert status == 500
    assert body == {"error": "Storage failure: disk"}


def test_bad_request_response():
    status, body = BadRequestError("bad").to_response()
    assert status == 400
    assert body == {"error": "Invalid request: bad"}


def test_invalid_method_response():
    assert InvalidMethodError().to_response() == (405, {"error": "Invalid method"})


def test_database_error_wraps_sqlite_error():
    error = DatabaseError(sqlite3.OperationalError("boom"))
    assert str(error) == "Database error: boom"
    assert error.to_response()[0] == 500


def test_unknown_error_response():
    assert UnknownError().to_response() == (500, {"error": "Unknown error"})


@pytest.mark.parametrize(
    "error",
    [
        NotFoundError("k"),
        StorageError("s"),
        BadRequestError("b"),
        InvalidMethodError(),
        DatabaseError("d"),
        UnknownError(),
    ],
)
def test_all_errors_are_catchable_as_base(error):
    with pytest.raises(SealboxError) as info:
        raise error
    assert info.value.to_response()[1]["error"] == str(error)