"""Advisory lock helpers so only one rankings recompute writes at a time."""

from __future__ import annotations

import hashlib
import logging
import time
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


def advisory_lock_key(name: str) -> int:
    """Return a deterministic signed 64-bit lock key from a lock name."""
    digest = hashlib.sha256(name.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big", signed=True)


def _try_lock(connection: Connection, key: int) -> bool:
    return bool(
        connection.execute(text("SELECT pg_try_advisory_lock(:key)"), {"key": key}).scalar()
    )


@contextmanager
def postgres_advisory_lock(
    engine: Engine,
    *,
    key: int,
    timeout_seconds: float = 0.0,
    poll_interval_seconds: float = 1.0,
) -> Generator[bool, None, None]:
    """
    Hold a session-level PostgreSQL advisory lock for the life of this context.

    The lock lives on its own connection, so it outlasts commits made by the
    caller's session inside the block.

    Yields:
        True once the lock is held.

    Raises:
        TimeoutError: If the lock is still taken when timeout_seconds runs out
            (immediately when the timeout is 0).
    """
    deadline = time.monotonic() + max(timeout_seconds, 0.0)
    with engine.connect() as connection:
        acquired = _try_lock(connection, key)
        while not acquired and time.monotonic() < deadline:
            time.sleep(max(poll_interval_seconds, 0.05))
            acquired = _try_lock(connection, key)

        if not acquired:
            raise TimeoutError(f"Could not acquire advisory lock key={key}")

        logger.debug("Acquired advisory lock key=%s", key)
        try:
            yield True
        finally:
            connection.execute(text("SELECT pg_advisory_unlock(:key)"), {"key": key})
            logger.debug("Released advisory lock key=%s", key)


@contextmanager
def single_writer_lock(
    engine: Engine,
    name: str,
    *,
    timeout_seconds: float = 0.0,
) -> Generator[bool, None, None]:
    """
    Serialise writers on ``name`` where the backend supports it.

    PostgreSQL gets an advisory lock. Other backends (SQLite in tests and
    local development) have no cross-process advisory locks, so the block
    runs unguarded and yields False.
    """
    if engine.dialect.name != "postgresql":
        logger.debug("No advisory locks on %s; running '%s' unguarded", engine.dialect.name, name)
        yield False
        return

    with postgres_advisory_lock(
        engine,
        key=advisory_lock_key(name),
        timeout_seconds=timeout_seconds,
    ) as acquired:
        yield acquired
