# sealbox

A small secret storage service you host yourself. It runs an HTTP API
(a WSGI application) and keeps its records in a SQLite database.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

`SealboxConfig.from_env()` reads four variables. Each must be set and not
blank; otherwise a `ValueError` names the first one that is missing (checked
in the order below).

| Variable      | Meaning                                                        |
|---------------|----------------------------------------------------------------|
| `MASTER_KEY`  | Required at start-up; not used for anything else yet           |
| `AUTH_TOKEN`  | Required at start-up; not used for anything else yet           |
| `STORE_PATH`  | Path of the SQLite database file                               |
| `LISTEN_ADDR` | `host:port` or `[ipv6-host]:port`, such as `127.0.0.1:8080`    |

The `repr` of a `SealboxConfig` hides the master key and the auth token.

Example `.env`:

```
MASTER_KEY=secret
AUTH_TOKEN=token
STORE_PATH=./sealbox.db
LISTEN_ADDR=127.0.0.1:8080
```

## Running

```
sealbox-server
```

The command first loads a `.env` file found from the working directory
upwards, if there is one, then reads the configuration. Logging goes to
standard error at the level named by `LOG_LEVEL` (default `DEBUG`).

It exits with status 1 when the configuration is incomplete, when the
database cannot be opened, or when `LISTEN_ADDR` is malformed or cannot be
bound. Otherwise it serves requests with the standard library's
`wsgiref` server until interrupted, then exits with status 0.

## HTTP API

| Method          | Path                | Status | Body                        |
|-----------------|---------------------|--------|-----------------------------|
| `GET`, `HEAD`   | `/`                 | 200    | `Hello, Sealbox!`           |
| `GET`           | `/v1/secrets/{key}` | 200    | `{"secret": ""}`            |
| `PUT`           | `/v1/secrets/{key}` | 200    | `{"result": "Ok"}`          |
| `DELETE`        | `/v1/secrets/{key}` | 200    | `{"result": "Ok"}`          |

- The version segment must be `v1`, `v2` or `v3`. Any other value gives
  `400` with a JSON body holding `message` and `location`.
- On `/{version}/secrets/{key}`, the methods `GET`, `PUT`, `DELETE`, `POST`,
  `HEAD` and `OPTIONS` are routed; any combination other than the three
  above gives `405` with `{"error": "Invalid method"}`. Other methods give
  `405` with an empty body and an `Allow` header.
- Other methods on `/` give `405` with an `Allow` header; unknown paths
  give `404`.
- Responses to `HEAD` have an empty body.
- Every response carries an `x-request-id` header: the one the client sent,
  or a new UUID.

## What it does not do yet

- `PUT` stores an empty placeholder record for the key (namespace `""`,
  version 1, no data); it does not read a request body.
- `GET` looks the key up but always answers `{"secret": ""}`; no stored
  value is returned.
- Nothing is encrypted, and requests are not authenticated: `MASTER_KEY`
  and `AUTH_TOKEN` are only checked for presence.

## Using it as a library

```python
from sealbox.app import create_app
from sealbox.config import SealboxConfig

config = SealboxConfig.from_env({
    "MASTER_KEY": "secret",
    "AUTH_TOKEN": "token",
    "STORE_PATH": "sealbox.db",
    "LISTEN_ADDR": "127.0.0.1:8080",
})
app = create_app(config)  # a WSGI application

status, headers, body = app.handle("PUT", "/v1/secrets/example")
# 200, {..., "x-request-id": "..."}, b'{"result": "Ok"}'
```

Other pieces:

- `sealbox.repo`: the `Secret` dataclass, the abstract `SecretRepo`, and
  `SqliteSecretRepo(db_path)` with `get_secret`, `save_secret`,
  `delete_secret` and `close` (also usable as a context manager).
  `get_secret` returns the highest version of a key, or `None`.
- `sealbox.path`: `extract_params` turns captured route segments into
  `Params`, raising `PathRejection` with a status and a `PathError`.
- `sealbox.errors`: `SealboxError` and its subclasses; `to_response()`
  gives the HTTP status and `{"error": message}` body.
- `sealbox.server`: `parse_listen_addr` and the `main` command.