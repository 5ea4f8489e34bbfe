import uuid

import pytest

from tests.conftest import auth_headers, register, upload

MISSING_ID = str(uuid.UUID(int=0))


def test_listing_is_newest_first(client, alice):
    first = upload(client, alice["token"], title="first").json()
    second = upload(client, alice["token"], title="second").json()
    third = upload(client, alice["token"], title="third").json()

    listing = client.get("/api/audio", headers=auth_headers(alice["token"])).json()
    assert [item["id"] for item in listing] == [third["id"], second["id"], first["id"]]


def test_listing_filters_by_category(client, alice):
    upload(client, alice["token"], title="song", category="Music")
    podcast = upload(client, alice["token"], title="show", category="Podcast").json()

    response = client.get("/api/audio", params={"category": "Podcast"}, headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [podcast["id"]]


def test_listing_rejects_unknown_category(client, alice):
    response = client.get("/api/audio", params={"category": "Jazz"}, headers=auth_headers(alice["token"]))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid category filter"


def test_listing_only_returns_own_files(client, alice, bob):
    upload(client, alice["token"], title="alice's")
    upload(client, bob["token"], title="bob's")

    listing = client.get("/api/audio", headers=auth_headers(bob["token"])).json()
    assert [item["title"] for item in listing] == ["bob's"]


def test_owner_can_read_single_record(client, alice):
    created = upload(client, alice["token"]).json()
    response = client.get(f"/api/audio/{created['id']}", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.parametrize("suffix, method", [("", "get"), ("/play", "get"), ("", "delete")])
def test_non_owner_is_forbidden(client, alice, bob, blob_store, suffix, method):
    created = upload(client, alice["token"]).json()
    response = getattr(client, method)(f"/api/audio/{created['id']}{suffix}", headers=auth_headers(bob["token"]))
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "Forbidden"
    assert created["s3_key"] not in str(body)
    assert blob_store.exists(created["s3_key"])


@pytest.mark.parametrize("suffix, method", [("", "get"), ("/play", "get"), ("", "delete")])
def test_missing_record_is_not_found(client, alice, suffix, method):
    response = getattr(client, method)(f"/api/audio/{MISSING_ID}{suffix}", headers=auth_headers(alice["token"]))
    assert response.status_code == 404
    assert response.json()["error"] == "Audio file not found"


def test_malformed_id_is_a_validation_error(client, alice):
    response = client.get("/api/audio/not-a-uuid", headers=auth_headers(alice["token"]))
    assert response.status_code == 400


def test_playback_url_is_signed_for_the_storage_key(client, alice, settings):
    created = upload(client, alice["token"]).json()
    response = client.get(f"/api/audio/{created['id']}/play", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    body = response.json()
    assert body["expires_in"] == settings.storage.presign_expires_seconds
    assert created["s3_key"].split("/")[-1] in body["url"]
    assert "expires=" in body["url"]


def test_delete_removes_blob_then_record(client, alice, blob_store):
    created = upload(client, alice["token"]).json()
    blob_store.calls.clear()

    response = client.delete(f"/api/audio/{created['id']}", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    assert response.json() == {"message": "Audio file deleted successfully"}
    assert blob_store.calls == [("delete", created["s3_key"])]
    assert not blob_store.exists(created["s3_key"])

    listing = client.get("/api/audio", headers=auth_headers(alice["token"])).json()
    assert listing == []


def test_deleting_twice_succeeds_once(client, alice):
    created = upload(client, alice["token"]).json()
    url = f"/api/audio/{created['id']}"

    assert client.delete(url, headers=auth_headers(alice["token"])).status_code == 200
    assert client.delete(url, headers=auth_headers(alice["token"])).status_code == 404


def test_blob_delete_failure_keeps_record(client, alice, blob_store):
    created = upload(client, alice["token"]).json()
    blob_store.fail_delete = True

    response = client.delete(f"/api/audio/{created['id']}", headers=auth_headers(alice["token"]))
    assert response.status_code == 500
    assert response.json()["error"] == "Storage Error"

    still_there = client.get(f"/api/audio/{created['id']}", headers=auth_headers(alice["token"]))
    assert still_there.status_code == 200
    assert blob_store.exists(created["s3_key"])

    blob_store.fail_delete = False
    retry = client.delete(f"/api/audio/{created['id']}", headers=auth_headers(alice["token"]))
    assert retry.status_code == 200


def test_duplicate_probe_finds_previous_upload(client, alice):
    created = upload(client, alice["token"], file_name="take1.mp3").json()
    user_id = alice["user"]["id"]

    response = client.get(f"/api/audio/check/take1.mp3/{user_id}", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    body = response.json()
    assert "uploaded previously" in body["message"]
    assert body["audio_file"]["id"] == created["id"]


def test_duplicate_probe_reports_absence_without_error(client, alice):
    user_id = alice["user"]["id"]
    response = client.get(f"/api/audio/check/never.mp3/{user_id}", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    assert response.json() == {"message": "Audio file not found, proceed with upload", "audio_file": None}


def test_duplicate_probe_is_advisory(client, alice):
    upload(client, alice["token"], file_name="take1.mp3")
    again = upload(client, alice["token"], file_name="take1.mp3")
    assert again.status_code == 201


def test_duplicate_probe_for_other_account_is_forbidden(client, alice, bob):
    upload(client, alice["token"], file_name="take1.mp3")
    response = client.get(
        f"/api/audio/check/take1.mp3/{alice['user']['id']}",
        headers=auth_headers(bob["token"]),
    )
    assert response.status_code == 403


def test_end_to_end_session(client):
    alice = register(client, "alice", "secret1")
    assert alice["token"]

    wrong = client.post("/api/auth/login", json={"username": "alice", "password": "wrong"})
    assert wrong.status_code == 401

    assert upload(client, alice["token"], category="Jazz").status_code == 400

    created = upload(client, alice["token"], category="Music")
    assert created.status_code == 201
    assert created.json()["category"] == "Music"

    mallory = register(client, "mallory", "secret3")
    play = client.get(f"/api/audio/{created.json()['id']}/play", headers=auth_headers(mallory["token"]))
    assert play.status_code == 403

    missing = client.delete(f"/api/audio/{MISSING_ID}", headers=auth_headers(alice["token"]))
    assert missing.status_code == 404
