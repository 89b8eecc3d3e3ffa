# test login, bearer token checks and credential storage
import re
from datetime import timedelta

import pytest
from cryptography.fernet import Fernet
from flask_jwt_extended import create_access_token, decode_token

from common.extensions import db
from marina.config import Config
from marina.models import EncryptedString, User

JWT_PATTERN = re.compile(r"^[A-Za-z0-9-_]+\.[A-Za-z0-9-_]+\.[A-Za-z0-9-_]+$")

PROTECTED = [
    ("get", "/dashboard"),
    ("get", "/users"),
    ("get", "/users/alice"),
    ("delete", "/users/alice"),
    ("get", "/catways"),
    ("get", "/catways/1"),
    ("post", "/catways"),
    ("put", "/catways/1"),
    ("delete", "/catways/1"),
    ("get", "/reservations"),
    ("get", "/reservations/1"),
    ("post", "/reservations"),
    ("put", "/reservations/1"),
    ("delete", "/reservations/1"),
]

def _signup(client, username="alice", password="s3cret", email="alice@example.com"):
    return client.post("/users", json={
        "username": username,
        "email": email,
        "password": password,
    })

def _login(client, username="alice", password="s3cret"):
    return client.post("/login", json={"username": username, "password": password})

### public endpoints

def test_root_is_public(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_json()["links"]["login"] == "/login"

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}

### login

def test_login_success_returns_token(client):
    _signup(client)
    resp = _login(client)
    assert resp.status_code == 200
    token = resp.get_json()["accessToken"]
    assert JWT_PATTERN.match(token)

    # identity and one hour of validity
    claims = decode_token(token)
    assert claims["sub"] == "alice"
    assert claims["name"] == "alice"
    assert claims["exp"] - claims["iat"] == 3600

def test_login_unknown_user(client):
    resp = _login(client, username="ghost")
    assert resp.status_code == 404
    assert "not found" in resp.get_json()["message"].lower()

def test_login_wrong_password(client):
    _signup(client)
    resp = _login(client, password="wrong")
    assert resp.status_code == 403
    assert "password" in resp.get_json()["message"].lower()

def test_login_wrong_long_password(client):
    _signup(client)
    resp = _login(client, password="x" * 100)
    assert resp.status_code == 403

def test_long_passwords_differing_after_72_bytes(client):
    _signup(client, password="a" * 72 + "first")
    assert _login(client, password="a" * 72 + "second").status_code == 403
    assert _login(client, password="a" * 72 + "first").status_code == 200

def test_login_missing_fields(client):
    resp = client.post("/login", json={"username": "alice"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert [d["field"] for d in body["details"]] == ["password"]

def test_login_with_form_body(client):
    _signup(client)
    resp = client.post("/login", data={"username": "alice", "password": "s3cret"})
    assert resp.status_code == 200
    assert "accessToken" in resp.get_json()

### token verification

def test_login_token_authenticates_as_user(client):
    _signup(client)
    token = _login(client).get_json()["accessToken"]
    resp = client.get("/dashboard", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.get_json()["username"] == "alice"

@pytest.mark.parametrize("method,path", PROTECTED)
def test_missing_token_is_401(client, method, path):
    resp = getattr(client, method)(path, json={})
    assert resp.status_code == 401
    assert "message" in resp.get_json()

@pytest.mark.parametrize("method,path", PROTECTED)
def test_garbage_token_is_403(client, method, path):
    headers = {"Authorization": "Bearer not.a.token"}
    resp = getattr(client, method)(path, json={}, headers=headers)
    assert resp.status_code == 403

def test_expired_token_is_403(client):
    token = create_access_token(identity="alice", expires_delta=timedelta(seconds=-30))
    resp = client.get("/catways", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Invalid token"

def test_token_signed_with_other_secret_is_403(app, client):
    token = create_access_token(identity="alice")
    app.config["JWT_SECRET_KEY"] = "another-secret"
    resp = client.get("/catways", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403

### credential storage

def test_password_is_hashed(client):
    _signup(client)
    user = db.session.scalars(db.select(User).filter_by(username="alice")).one()
    assert user.pw_hash != "s3cret"
    assert user.pw_hash.startswith("$2")

def test_email_is_encrypted_at_rest(client, tmp_path, monkeypatch):
    key = Fernet.generate_key()
    key_path = tmp_path / "marina_enc.key"
    key_path.write_bytes(key)
    monkeypatch.setenv("MARINA_ENCRYPTION_KEY", str(key_path))

    _signup(client, email="enc@example.com")
    row = db.session.execute(
        db.text("SELECT email FROM users WHERE username = :u"), {"u": "alice"}
    ).mappings().one()

    assert row["email"] != "enc@example.com"
    assert Fernet(key).decrypt(row["email"].encode()).decode() == "enc@example.com"

def test_encrypted_string_randomizes_ciphertext():
    enc_type = EncryptedString()
    first = enc_type.process_bind_param("same-value", None)
    second = enc_type.process_bind_param("same-value", None)
    assert first != second
    assert enc_type.process_result_value(first, None) == "same-value"

### signing key configuration

def test_marina_jwt_secret_wins_over_secret_key(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MARINA_PRIVATE_KEY", raising=False)
    monkeypatch.delenv("MARINA_PUBLIC_KEY", raising=False)
    monkeypatch.setenv("SECRET_KEY", "generic")
    monkeypatch.setenv("MARINA_JWT_SECRET", "marina")
    config = Config()
    assert config.JWT_ALGORITHM == "HS256"
    assert config.JWT_SECRET_KEY == "marina"

    monkeypatch.delenv("MARINA_JWT_SECRET")
    assert Config().JWT_SECRET_KEY == "generic"
