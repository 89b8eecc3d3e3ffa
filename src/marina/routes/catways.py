"""Catway (berth) routes."""
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..services import CatwayService

bp = Blueprint("catways", __name__, url_prefix="/catways")

@bp.get("")
@jwt_required()
def list_catways():
    catways = CatwayService().list_catways()
    return jsonify([catway.to_dict() for catway in catways]), 200

@bp.get("/<int:catway_number>")
@jwt_required()
def get_catway(catway_number: int):
    return jsonify(CatwayService().get(catway_number).to_dict()), 200

@bp.post("")
@jwt_required()
def create_catway():
    catway = CatwayService().create(request.get_json(silent=True))
    return jsonify(catway.to_dict()), 201

# partial update, only the fields sent are changed
@bp.put("/<int:catway_number>")
@jwt_required()
def update_catway(catway_number: int):
    catway = CatwayService().update(catway_number, request.get_json(silent=True) or {})
    return jsonify(catway.to_dict()), 200

@bp.delete("/<int:catway_number>")
@jwt_required()
def delete_catway(catway_number: int):
    CatwayService().delete(catway_number)
    return jsonify({"message": "Catway deleted"}), 200
