from tests.conftest import auth_headers, register, upload


def test_me_returns_own_profile(client, alice):
    response = client.get("/api/users/me", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == alice["user"]["id"]
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert "password_hash" not in body
    assert body["created_at"] and body["updated_at"]


def test_update_own_account(client, alice):
    user_id = alice["user"]["id"]
    response = client.put(
        f"/api/users/{user_id}",
        json={"username": "alice2", "email": "alice2@example.com", "password": "newsecret"},
        headers=auth_headers(alice["token"]),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "alice2"
    assert body["email"] == "alice2@example.com"

    old = client.post("/api/auth/login", json={"username": "alice2", "password": "secret1"})
    assert old.status_code == 401
    new = client.post("/api/auth/login", json={"username": "alice2", "password": "newsecret"})
    assert new.status_code == 200
    assert new.json()["user"]["id"] == user_id


def test_partial_update_keeps_other_fields(client, alice):
    user_id = alice["user"]["id"]
    response = client.put(
        f"/api/users/{user_id}",
        json={"email": "new@example.com"},
        headers=auth_headers(alice["token"]),
    )
    assert response.status_code == 200
    assert response.json()["username"] == "alice"

    login = client.post("/api/auth/login", json={"username": "alice", "password": "secret1"})
    assert login.status_code == 200
    assert login.json()["user"]["email"] == "new@example.com"


def test_update_other_account_is_forbidden(client, alice, bob):
    response = client.put(
        f"/api/users/{bob['user']['id']}",
        json={"username": "hijacked"},
        headers=auth_headers(alice["token"]),
    )
    assert response.status_code == 403

    login = client.post("/api/auth/login", json={"username": "bob", "password": "secret2"})
    assert login.status_code == 200


def test_update_to_taken_username_conflicts(client, alice, bob):
    response = client.put(
        f"/api/users/{alice['user']['id']}",
        json={"username": "bob"},
        headers=auth_headers(alice["token"]),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "Duplicate Entry"


def test_update_rejects_short_password(client, alice):
    response = client.put(
        f"/api/users/{alice['user']['id']}",
        json={"password": "123"},
        headers=auth_headers(alice["token"]),
    )
    assert response.status_code == 400


def test_delete_other_account_is_forbidden(client, alice, bob):
    response = client.delete(f"/api/users/{bob['user']['id']}", headers=auth_headers(alice["token"]))
    assert response.status_code == 403
    assert client.get("/api/users/me", headers=auth_headers(bob["token"])).status_code == 200


def test_delete_own_account_cascades_to_audio(client, alice, blob_store):
    created = upload(client, alice["token"]).json()

    response = client.delete(f"/api/users/{alice['user']['id']}", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}

    # the token outlives the account; the records do not
    listing = client.get("/api/audio", headers=auth_headers(alice["token"]))
    assert listing.status_code == 200
    assert listing.json() == []
    lookup = client.get(f"/api/audio/{created['id']}", headers=auth_headers(alice["token"]))
    assert lookup.status_code == 404

    # blobs are not cleaned up by account deletion
    assert blob_store.exists(created["s3_key"])

    me = client.get("/api/users/me", headers=auth_headers(alice["token"]))
    assert me.status_code == 404
    assert me.json()["error"] == "User not found"

    login = client.post("/api/auth/login", json={"username": "alice", "password": "secret1"})
    assert login.status_code == 401


def test_username_is_reusable_after_delete(client, alice):
    client.delete(f"/api/users/{alice['user']['id']}", headers=auth_headers(alice["token"]))
    again = register(client, "alice", "another1", "alice@example.com")
    assert again["user"]["id"] != alice["user"]["id"]


def test_upload_after_account_delete_stores_nothing(client, alice, blob_store):
    client.delete(f"/api/users/{alice['user']['id']}", headers=auth_headers(alice["token"]))
    blob_store.calls.clear()

    response = upload(client, alice["token"])
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"
    assert [op for op, _ in blob_store.calls if op == "put"] == []
