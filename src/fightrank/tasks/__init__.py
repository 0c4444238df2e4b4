"""Task runtime utilities for operator-triggered runs."""

from fightrank.tasks.locks import advisory_lock_key, postgres_advisory_lock, single_writer_lock

__all__ = [
    "advisory_lock_key",
    "postgres_advisory_lock",
    "single_writer_lock",
]
