import logging
import sqlite3

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from app.core.logging import RequestIdFilter, request_id_ctx
from app.infrastructure.database import is_unique_violation
from app.main import create_app
from tests.conftest import RecordingBlobStore, auth_headers, make_settings, register, upload


def _client_for(tmp_path, environment: str):
    app = create_app(make_settings(tmp_path, environment=environment), blob_store=RecordingBlobStore(tmp_path / "blobs"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return TestClient(app, raise_server_exceptions=False)


def test_unexpected_error_hides_internals_in_production(tmp_path):
    with _client_for(tmp_path, "production") as client:
        response = client.get("/boom")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_unexpected_error_exposes_diagnostics_outside_production(tmp_path):
    with _client_for(tmp_path, "development") as client:
        response = client.get("/boom")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal Server Error"
    assert body["details"] == "kaboom"
    assert "RuntimeError" in body["stack"]


@pytest.mark.parametrize("environment, has_stack", [("production", False), ("test", True)])
def test_storage_failure_body(tmp_path, environment, has_stack):
    store = RecordingBlobStore(tmp_path / "blobs")
    app = create_app(make_settings(tmp_path, environment=environment), blob_store=store)
    with TestClient(app) as client:
        token = register(client, "alice", "secret1")["token"]
        store.fail_put = True
        response = upload(client, token)
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Storage Error"
    assert ("stack" in body) is has_stack


def test_validation_errors_list_fields(client):
    response = client.post("/api/auth/register", json={"username": "al"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Error"
    fields = {item["field"] for item in body["details"]}
    assert {"body.username", "body.password"} <= fields


def test_client_errors_carry_message(client, alice):
    response = upload(client, alice["token"], title="")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Error"
    assert body["message"] == "Title is required and must be at most 200 characters"
    assert "stack" not in body


def test_unknown_route_is_not_found(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated_when_absent(client, alice):
    response = client.get("/api/audio", headers=auth_headers(alice["token"]))
    assert len(response.headers["X-Request-ID"]) == 32


def test_request_id_filter_stamps_records():
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "hello", None, None)
    token = request_id_ctx.set("abc")
    try:
        assert RequestIdFilter().filter(record)
    finally:
        request_id_ctx.reset(token)
    assert record.request_id == "abc"

    RequestIdFilter().filter(record)
    assert record.request_id == "-"


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO audio_files ...", {}, sqlite3.IntegrityError(message))


@pytest.mark.parametrize(
    "message, status_code, error",
    [
        ("UNIQUE constraint failed: accounts.username", 409, "Duplicate Entry"),
        ("FOREIGN KEY constraint failed", 500, "Internal Server Error"),
        ("NOT NULL constraint failed: audio_files.title", 500, "Internal Server Error"),
        ("CHECK constraint failed: ck_audio_files_category", 500, "Internal Server Error"),
    ],
)
def test_integrity_errors_map_by_kind(tmp_path, message, status_code, error):
    app = create_app(make_settings(tmp_path), blob_store=RecordingBlobStore(tmp_path / "blobs"))

    @app.get("/constraint")
    async def constraint():
        raise _integrity_error(message)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/constraint")
    assert response.status_code == status_code
    assert response.json()["error"] == error


class _PgError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__("constraint violated")
        self.sqlstate = sqlstate


def test_unique_violation_uses_sqlstate_when_present():
    assert is_unique_violation(IntegrityError("stmt", {}, _PgError("23505")))
    assert not is_unique_violation(IntegrityError("stmt", {}, _PgError("23503")))
