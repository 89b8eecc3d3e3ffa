"""Public pages, login and the authenticated dashboard."""
from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required

from ..services import AuthService

bp = Blueprint("auth", __name__)

# read a JSON body, falling back to an HTML form post
def request_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    return payload

@bp.get("/")
def index():
    return jsonify({
        "message": "Welcome to the marina API",
        "links": {
            "login": "/login",
            "signup": "/users",
            "catways": "/catways",
            "reservations": "/reservations",
        },
    }), 200

@bp.get("/health")
def health():
    return jsonify({"status": "ok"}), 200

# login and generate an access token
@bp.post("/login")
def login():
    access_token = AuthService().login(request_payload())
    return jsonify({"accessToken": access_token}), 200

@bp.get("/dashboard")
@jwt_required()
def dashboard():
    name = get_jwt().get("name", get_jwt_identity())
    return jsonify({"message": f"Welcome, {name}!", "username": name}), 200
