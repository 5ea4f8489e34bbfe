from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import DatabaseSettings, SecuritySettings, Settings, StorageSettings
from app.infrastructure.storage import BlobStoreError, LocalBlobStore
from app.main import create_app

MP3_BYTES = b"ID3\x04\x00\x00\x00\x00\x00\x00" + b"\xff\xfb\x90\x00" * 64


class RecordingBlobStore(LocalBlobStore):
    """Local store that records calls and can be told to fail."""

    def __init__(self, root: Path) -> None:
        super().__init__(root)
        self.calls: list[tuple[str, str]] = []
        self.fail_put = False
        self.fail_delete = False

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        self.calls.append(("put", key))
        if self.fail_put:
            raise BlobStoreError(f"Failed to store object {key}")
        await super().put(key, data, content_type)

    async def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        if self.fail_delete:
            raise BlobStoreError(f"Failed to delete object {key}")
        await super().delete(key)


def make_settings(tmp_path: Path, **overrides) -> Settings:
    values = dict(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"),
        security=SecuritySettings(secret_key="test-secret-key", bcrypt_rounds=4),
        storage=StorageSettings(
            provider="local",
            local_root=tmp_path / "blobs",
            max_upload_bytes=1024 * 1024,
        ),
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def blob_store(tmp_path) -> RecordingBlobStore:
    return RecordingBlobStore(tmp_path / "blobs")


@pytest.fixture
def app(settings, blob_store):
    return create_app(settings, blob_store=blob_store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, username: str = "alice", password: str = "secret1", email: str | None = None) -> dict:
    payload = {"username": username, "password": password}
    if email:
        payload["email"] = email
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def upload(
    client: TestClient,
    token: str,
    *,
    title: str = "Morning Session",
    category: str | None = "Music",
    description: str | None = None,
    file_name: str = "song.mp3",
    content: bytes = MP3_BYTES,
    content_type: str = "audio/mpeg",
    include_file: bool = True,
):
    data = {"title": title}
    if category is not None:
        data["category"] = category
    if description is not None:
        data["description"] = description
    files = {"audio": (file_name, content, content_type)} if include_file else None
    return client.post("/api/audio/upload", data=data, files=files, headers=auth_headers(token))


@pytest.fixture
def alice(client) -> dict:
    return register(client, "alice", "secret1", "alice@example.com")


@pytest.fixture
def bob(client) -> dict:
    return register(client, "bob", "secret2", "bob@example.com")


@pytest.fixture
def lenient_client(app):
    """Client that returns 500 responses instead of re-raising server errors."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
