# configuration for the marina service
import os
from datetime import timedelta

# extract a boolean value out of an env variable
def _bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}

class Config:
    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = os.getenv("MARINA_DATABASE_URL",
                                        "sqlite:///marina.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT token stuff (bearer header only, one hour of validity)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_TYPE = "Bearer"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    JWT_PRIVATE_KEY = None
    JWT_PUBLIC_KEY = None
    JWT_ALGORITHM = None
    JWT_SECRET_KEY = None

    # bcrypt only reads the first 72 bytes, longer passwords are pre-hashed
    BCRYPT_HANDLE_LONG_PASSWORDS = True

    # logging
    LOG_LEVEL = os.getenv("MARINA_LOG_LEVEL", "INFO").upper()

    # testing
    TESTING = _bool_env("MARINA_TESTING", False)

    def __init__(self):
        # init keys
        self._init_keys()

    def _init_keys(self):
        # init keys for the normal configuration
        priv_path = os.getenv("MARINA_PRIVATE_KEY")
        pub_path = os.getenv("MARINA_PUBLIC_KEY")

        # if paths are set and valid, read the files
        if priv_path and pub_path and os.path.exists(priv_path) and os.path.exists(pub_path):
            with open(priv_path, "r") as f:
                self.JWT_PRIVATE_KEY = f.read()
            with open(pub_path, "r") as f:
                self.JWT_PUBLIC_KEY = f.read()
            self.JWT_ALGORITHM = "RS256"
            return

        # try default files
        if os.path.exists("jwtRS256.key") and os.path.exists("jwtRS256.key.pub"):
            with open("jwtRS256.key") as f:
                self.JWT_PRIVATE_KEY = f.read()
            with open("jwtRS256.key.pub") as f:
                self.JWT_PUBLIC_KEY = f.read()
            self.JWT_ALGORITHM = "RS256"
            return

        # fallback to symmetric encryption, MARINA_JWT_SECRET wins over SECRET_KEY
        self.JWT_ALGORITHM = "HS256"
        self.JWT_SECRET_KEY = os.getenv(
            "MARINA_JWT_SECRET", os.getenv("SECRET_KEY", "supersecretkey")
        )

class TestConfig(Config):
    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"

    # JWT
    JWT_ALGORITHM = "HS256"
    JWT_SECRET_KEY = "test-secret" # nosec

    # fewer bcrypt rounds for quicker tests
    BCRYPT_LOG_ROUNDS = 4

    # testing
    TESTING = True

    def __init__(self):
        pass
