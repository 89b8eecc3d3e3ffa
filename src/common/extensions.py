"""Flask extension singletons shared by the marina service."""

from __future__ import annotations

from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy


# password hashing
bcrypt = Bcrypt()

# SQLAlchemy extension
db = SQLAlchemy()

# JWTManager extension
jwt = JWTManager()
