"""Database models for the marina service."""

from __future__ import annotations

import os
from datetime import date
from enum import StrEnum

from cryptography.fernet import Fernet
from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from common.extensions import db

# development key, used only when MARINA_ENCRYPTION_KEY is not set
_DEV_ENCRYPTION_KEY = b"5IDyihjJ-nTB3bbQGMXsyVqp8SN2a7tIz0-JfqR9gqM="

def get_encryption_key() -> bytes:
    key_path = os.environ.get("MARINA_ENCRYPTION_KEY")
    if not key_path:
        return _DEV_ENCRYPTION_KEY
    with open(key_path, "rb") as f:
        return f.read().strip()

class EncryptedString(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        f = Fernet(get_encryption_key())
        return f.encrypt(value.encode("utf-8")).decode("utf-8")

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        f = Fernet(get_encryption_key())
        return f.decrypt(value.encode("utf-8")).decode("utf-8")

class CatwayType(StrEnum):
    LONG = "long"
    SHORT = "short"

class User(db.Model):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(80), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(EncryptedString, nullable=False)
    pw_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __init__(self, username: str, email: str, pw_hash: str):
        self.username = username
        self.email = email
        self.pw_hash = pw_hash

    # the password hash never leaves the service
    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "email": self.email,
        }

class Catway(db.Model):
    __tablename__ = "catways"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    catway_number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    catway_state: Mapped[str] = mapped_column(String(255), nullable=False)

    def __init__(self, catway_number: int, type: str, catway_state: str):
        self.catway_number = catway_number
        self.type = type
        self.catway_state = catway_state

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "catwayNumber": self.catway_number,
            "type": self.type,
            "catwayState": self.catway_state,
        }

class Reservation(db.Model):
    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # refers to Catway.catway_number, not enforced by the database
    catway_number: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    client_name: Mapped[str] = mapped_column(String(50), nullable=False)
    boat_name: Mapped[str] = mapped_column(String(50), nullable=False)
    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)

    def __init__(self,
        catway_number: int,
        client_name: str,
        boat_name: str,
        check_in: date,
        check_out: date,
    ):
        self.catway_number = catway_number
        self.client_name = client_name
        self.boat_name = boat_name
        self.check_in = check_in
        self.check_out = check_out

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "catwayNumber": self.catway_number,
            "clientName": self.client_name,
            "boatName": self.boat_name,
            "checkIn": self.check_in.isoformat(),
            "checkOut": self.check_out.isoformat(),
        }
