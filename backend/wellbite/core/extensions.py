"""Flask extension singletons: the database, migrations and Redis connections."""

from __future__ import annotations

import logging
import threading

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Constraint names are matched by ``violates()`` when translating IntegrityError,
# so they must be stable across backends.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
migrate = Migrate(render_as_batch=True)

_redis_clients: dict[str, redis.Redis] = {}
_redis_lock = threading.Lock()


def init_app(app: Flask) -> None:
    """Bind SQLAlchemy and Alembic to ``app``.

    Redis is not touched here; it is only connected when a component asks for
    it through :func:`get_redis`.
    """
    db.init_app(app)

    # Alembic autogenerate needs every table registered on the metadata
    from wellbite import models as _models  # noqa: F401

    migrate.init_app(app, db)


def get_redis(url: str) -> redis.Redis:
    """Return a connected client for ``url``, creating and pinging it once.

    :raises RuntimeError: If ``url`` is empty or the server does not answer.
    """
    if not url:
        raise RuntimeError("Redis is not configured. Set REDIS_URL first.")
    with _redis_lock:
        client = _redis_clients.get(url)
        if client is not None:
            return client
        client = redis.Redis.from_url(url)
        try:
            client.ping()
        except RedisError as exc:
            raise RuntimeError("Failed to connect to Redis") from exc
        _redis_clients[url] = client
    log.info("Redis connection established")
    return client
