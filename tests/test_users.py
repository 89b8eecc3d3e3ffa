# test user account endpoints
from common.extensions import db
from marina.models import User

def _signup(client, username="bob", email="bob@example.com", password="pw123"):
    return client.post("/users", json={
        "username": username,
        "email": email,
        "password": password,
    })

def test_create_user(client):
    resp = _signup(client)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "User created"
    assert body["user"] == {"username": "bob", "email": "bob@example.com"}

def test_create_user_missing_fields(client):
    resp = client.post("/users", json={"username": "bob", "password": "pw"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert "required" in body["message"].lower()
    assert [d["field"] for d in body["details"]] == ["email"]

def test_create_user_long_password(client):
    password = "p" * 100
    resp = _signup(client, password=password)
    assert resp.status_code == 201
    resp = client.post("/login", json={"username": "bob", "password": password})
    assert resp.status_code == 200

def test_create_user_empty_password(client):
    resp = _signup(client, password="")
    assert resp.status_code == 400

def test_create_user_duplicate_username(client):
    assert _signup(client).status_code == 201
    resp = _signup(client, email="other@example.com")
    assert resp.status_code == 400
    assert "taken" in resp.get_json()["message"].lower()
    assert db.session.scalar(db.select(db.func.count(User.id))) == 1

def test_list_users_hides_password(client, headers):
    _signup(client)
    _signup(client, username="carol", email="carol@example.com")
    resp = client.get("/users", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == [
        {"username": "bob", "email": "bob@example.com"},
        {"username": "carol", "email": "carol@example.com"},
    ]

def test_get_user(client, headers):
    _signup(client)
    resp = client.get("/users/bob", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"username": "bob", "email": "bob@example.com"}

def test_get_user_not_found(client, headers):
    resp = client.get("/users/nobody", headers=headers)
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "User not found"

def test_delete_user(client, headers):
    _signup(client)
    resp = client.delete("/users/bob", headers=headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["deletedUser"] == {"username": "bob", "email": "bob@example.com"}
    assert "password" not in str(body) and "pw_hash" not in body["deletedUser"]

    assert client.get("/users/bob", headers=headers).status_code == 404

def test_delete_user_not_found(client, headers):
    resp = client.delete("/users/nobody", headers=headers)
    assert resp.status_code == 404

def test_deleted_user_cannot_login(client):
    _signup(client)
    token = client.post("/login", json={"username": "bob", "password": "pw123"}).get_json()["accessToken"]
    client.delete("/users/bob", headers={"Authorization": f"Bearer {token}"})
    resp = client.post("/login", json={"username": "bob", "password": "pw123"})
    assert resp.status_code == 404
