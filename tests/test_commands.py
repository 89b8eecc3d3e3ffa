# test the flask CLI helpers
from flask_jwt_extended import decode_token

from common.extensions import db
from marina.models import User

def test_create_user_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-user", "harbour", "hm@example.com",
                                 "--password", "pw"])
    assert result.exit_code == 0
    assert "Created user: harbour" in result.output
    assert db.session.scalars(db.select(User).filter_by(username="harbour")).first()

def test_create_user_command_duplicate(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["create-user", "harbour", "hm@example.com", "--password", "pw"])
    result = runner.invoke(args=["create-user", "harbour", "hm@example.com",
                                 "--password", "pw"])
    assert result.exit_code != 0
    assert "already taken" in result.output

def test_create_token_command(app, client):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-token", "harbour"])
    assert result.exit_code == 0
    token = result.output.strip()
    assert decode_token(token)["sub"] == "harbour"

    resp = client.get("/dashboard", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.get_json()["username"] == "harbour"

def test_create_token_without_expiry(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-token", "harbour", "--no-expiry"])
    assert "exp" not in decode_token(result.output.strip())
