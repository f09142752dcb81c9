import json
import uuid
from wsgiref.util import setup_testing_defaults

import pytest

from sealbox.app import SealboxApp, create_app
from sealbox.config import SealboxConfig


@pytest.fixture
def app(tmp_path):
    config = SealboxConfig(
        master_key="secret",
        auth_token="token",
        store_path=str(tmp_path / "store.db"),
        listen_addr="127.0.0.1:0",
    )
    application = create_app(config)
    yield application
    application.state.secret_repo.close()


def body_json(response):
    return json.loads(response[2])


def test_root(app):
    status, _, body = app.handle("GET", "/")
    assert status == 200
    assert body == b"Hello, Sealbox!"


def test_root_rejects_post(app):
    assert app.handle("POST", "/")[0] == 405


def test_put_saves_secret(app):
    response = app.handle("PUT", "/v1/secrets/db")
    assert response[0] == 200
    assert body_json(response) == {"result": "Ok"}
    assert app.state.secret_repo.get_secret("db").key == "db"


def test_get_returns_secret_body(app):
    app.handle("PUT", "/v1/secrets/db")
    response = app.handle("GET", "/v1/secrets/db")
    assert response[0] == 200
    assert body_json(response) == {"secret": ""}


def test_delete_removes_secret(app):
    app.handle("PUT", "/v1/secrets/db")
    response = app.handle("DELETE", "/v1/secrets/db")
    assert body_json(response) == {"result": "Ok"}
    assert app.state.secret_repo.get_secret("db") is None


def test_percent_encoded_key_is_decoded(app):
    app.handle("PUT", "/v1/secrets/a%20b")
    assert app.state.secret_repo.get_secret("a b").key == "a b"


@pytest.mark.parametrize(
    "method,path",
    [("POST", "/v1/secrets/db"), ("OPTIONS", "/v1/secrets/db"), ("PUT", "/v2/secrets/db")],
)
def test_unsupported_combination_is_invalid_method(app, method, path):
    response = app.handle(method, path)
    assert response[0] == 405
    assert body_json(response) == {"error": "Invalid method"}


def test_unrouted_method_is_rejected(app):
    status, headers, body = app.handle("PATCH", "/v1/secrets/db")
    assert status == 405
    assert body == b""


def test_unknown_version_is_bad_request(app):
    response = app.handle("GET", "/v9/secrets/db")
    assert response[0] == 400
    payload = body_json(response)
    assert "unknown variant `v9`" in payload["message"]
    assert payload["location"] is None


@pytest.mark.parametrize("path", ["/nothing", "/v1/secrets/", "/v1/other/db", "/v1/secrets/db/x"])
def test_unknown_paths_are_not_found(app, path):
    assert app.handle("GET", path)[0] == 404


def test_request_id_is_propagated(app):
    _, headers, _ = app.handle("GET", "/", {"X-Request-Id": "abc"})
    assert headers["x-request-id"] == "abc"


def test_request_id_is_generated(app):
    _, headers, _ = app.handle("GET", "/")
    assert uuid.UUID(headers["x-request-id"]).version == 4


def test_head_has_empty_body(app):
    status, _, body = app.handle("HEAD", "/")
    assert status == 200
    assert body == b""


def test_wsgi_interface(app):
    environ = {"REQUEST_METHOD": "PUT", "PATH_INFO": "/v1/secrets/db", "HTTP_X_REQUEST_ID": "rid"}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    assert captured["status"] == "200 OK"
    assert captured["headers"]["x-request-id"] == "rid"
    assert json.loads(body) == {"result": "Ok"}


def test_app_is_wsgi_callable_type(app):
    assert isinstance(app, SealboxApp)
    assert app.handle("GET", "/")[1]["content-length"] == str(len(b"Hello, Sealbox!"))