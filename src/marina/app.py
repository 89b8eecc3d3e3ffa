# app factory for the marina service
from flask import Flask, current_app, jsonify

from common.app_factory import create_flask_app
from common.extensions import bcrypt, db, jwt
from .commands import commands
from .config import Config, TestConfig
from .routes import blueprints

# missing bearer token
@jwt.unauthorized_loader
def _missing_token(reason: str):
    current_app.logger.warning(f"Missing token: {reason}")
    return jsonify({"message": "Access denied: missing token"}), 401

# bad signature, malformed token or bad header
@jwt.invalid_token_loader
def _invalid_token(reason: str):
    current_app.logger.warning(f"Invalid token: {reason}")
    return jsonify({"message": "Invalid token"}), 403

@jwt.expired_token_loader
def _expired_token(_jwt_header, jwt_payload: dict):
    current_app.logger.warning(f"Expired token for {jwt_payload.get('sub')}")
    return jsonify({"message": "Invalid token"}), 403

# flask app creation generic function
def _create_app(config_object) -> Flask:
    return create_flask_app(
        name=__name__,
        config_obj=config_object,
        extensions=(db, bcrypt, jwt),
        blueprints=blueprints,
        init_app_context_steps=(lambda _: db.create_all(),),
        commands=commands,
    )

# create a normal config app
def create_app() -> Flask:
    return _create_app(Config())

# create a test config app, keyword arguments override config values
def create_test_app(**overrides) -> Flask:
    config = TestConfig()
    for key, value in overrides.items():
        setattr(config, key, value)
    return _create_app(config)

# main Flask entrypoint
if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000) # nosec
