"""Marina berth and reservation API."""
from .app import create_app, create_test_app

__all__ = ["create_app", "create_test_app"]
