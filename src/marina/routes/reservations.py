"""Reservation routes, addressed by catway number."""
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..services import ReservationService

bp = Blueprint("reservations", __name__, url_prefix="/reservations")

@bp.get("")
@jwt_required()
def list_reservations():
    reservations = ReservationService().list_reservations()
    return jsonify([reservation.to_dict() for reservation in reservations]), 200

@bp.get("/<int:catway_number>")
@jwt_required()
def get_reservation(catway_number: int):
    return jsonify(ReservationService().get(catway_number).to_dict()), 200

@bp.post("")
@jwt_required()
def create_reservation():
    reservation = ReservationService().create(request.get_json(silent=True))
    return jsonify(reservation.to_dict()), 201

@bp.put("/<int:catway_number>")
@jwt_required()
def update_reservation(catway_number: int):
    reservation = ReservationService().update(catway_number, request.get_json(silent=True))
    return jsonify(reservation.to_dict()), 200

@bp.delete("/<int:catway_number>")
@jwt_required()
def delete_reservation(catway_number: int):
    ReservationService().delete(catway_number)
    return jsonify({"message": "Reservation deleted"}), 200
