"""User account routes."""
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from ..services import UserService
from .auth import request_payload

bp = Blueprint("users", __name__, url_prefix="/users")

# account creation is public
@bp.post("")
def create_user():
    user = UserService().signup(request_payload())
    return jsonify({"message": "User created", "user": user.to_dict()}), 201

@bp.get("")
@jwt_required()
def list_users():
    users = UserService().list_users()
    return jsonify([user.to_dict() for user in users]), 200

@bp.get("/<string:username>")
@jwt_required()
def get_user(username: str):
    return jsonify(UserService().get(username).to_dict()), 200

@bp.delete("/<string:username>")
@jwt_required()
def delete_user(username: str):
    deleted = UserService().delete(username)
    return jsonify({"message": "User deleted", "deletedUser": deleted}), 200
