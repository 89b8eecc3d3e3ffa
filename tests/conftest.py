# common pytest fixtures for the marina service
import pytest
from flask_jwt_extended import create_access_token

from common.extensions import db
from marina.app import create_test_app

@pytest.fixture
def app():
    app = create_test_app()
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    db.drop_all()
    ctx.pop()

@pytest.fixture
def client(app):
    return app.test_client()

# headers carrying a valid bearer token for an arbitrary username
@pytest.fixture
def auth_headers(app):
    def _make(username="skipper"):
        token = create_access_token(identity=username,
                                    additional_claims={"name": username})
        return {"Authorization": f"Bearer {token}"}
    return _make

@pytest.fixture
def headers(auth_headers):
    return auth_headers()
