"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

TWO_DAYS_SECONDS: Final[int] = 2 * 24 * 60 * 60

# Loads .env in development (no-op when the file is absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        HMAC key used to sign access tokens. An empty value makes signing fail.
    JWT_ALGORITHM: str
        JWS algorithm for access tokens (``HS256`` by default).
    JWT_ISSUER: str
        Value written to and required in the ``iss`` claim.
    JWT_AUDIENCE: str
        Client application identifier written to and required in ``aud``.
    ACCESS_TOKEN_EXPIRES: int
        Access token validity window in seconds (two days).
    REFRESH_TOKEN_EXPIRES: int
        Refresh token validity window in seconds (two days). Independent of
        ``ACCESS_TOKEN_EXPIRES``.
    REFRESH_TOKEN_BYTES: int
        Entropy, in bytes, of generated refresh token values.
    REFRESH_TOKEN_MAX_ATTEMPTS: int
        How many times a colliding refresh token value is regenerated.
    API_KEY: str
        Shared secret expected in ``X-API-Key`` for user provisioning.
    REDIS_URL: str
        Optional Redis connection string.
    ACCESS_TOKEN_DENYLIST: str
        ``""`` (no access-token revocation) or ``"redis"``.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT_CHANGE_ME_JWT_CHANGE_ME")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "WellBiteAPI")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "com.cxcarvaj.WellBite")
    ACCESS_TOKEN_EXPIRES = env_int("ACCESS_TOKEN_EXPIRES", TWO_DAYS_SECONDS)
    REFRESH_TOKEN_EXPIRES = env_int("REFRESH_TOKEN_EXPIRES", TWO_DAYS_SECONDS)
    REFRESH_TOKEN_BYTES = env_int("REFRESH_TOKEN_BYTES", 32)
    REFRESH_TOKEN_MAX_ATTEMPTS = env_int("REFRESH_TOKEN_MAX_ATTEMPTS", 3)
    API_KEY = os.getenv("API_KEY", "")

    # Redis (optional) and access-token denylist backend
    REDIS_URL = os.getenv("REDIS_URL", "")
    ACCESS_TOKEN_DENYLIST = os.getenv("ACCESS_TOKEN_DENYLIST", "").strip().lower()

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Pins deterministic JWT and API key secrets.
    - Never talks to Redis.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "testing-secret-key-with-enough-entropy-0123456789"
    API_KEY = "testing-api-key"
    REDIS_URL = ""
    ACCESS_TOKEN_DENYLIST = ""


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    ``JWT_SECRET_KEY`` has no usable default here: signing fails loudly until
    the environment provides one.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
