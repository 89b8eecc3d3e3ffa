"""HTTP blueprints of the marina service."""
from .auth import bp as auth_bp
from .catways import bp as catways_bp
from .reservations import bp as reservations_bp
from .users import bp as users_bp

blueprints = (auth_bp, users_bp, catways_bp, reservations_bp)
