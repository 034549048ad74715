"""MySQL connection pool for the ``book2018`` table.

The pool holds four connections. ``mysql.connector`` raises ``PoolError``
as soon as the pool is exhausted, so checkout is gated by a bounded
semaphore of the same size: a request that finds every connection in
use waits for one to come back instead of failing.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from mysql.connector import pooling

from .config import config


logger = logging.getLogger(__name__)

_pool: Optional[pooling.MySQLConnectionPool] = None
_pool_lock = threading.Lock()
_slots = threading.BoundedSemaphore(config.DB_POOL_SIZE)


def get_pool() -> pooling.MySQLConnectionPool:
    """Return the process-wide pool, creating it on first use."""
    global _pool
    with _pool_lock:
        if _pool is None:
            logger.info(
                "Creating connection pool for %s@%s:%s/%s",
                config.DB_USER, config.DB_HOST, config.DB_PORT, config.DB_NAME,
            )
            _pool = pooling.MySQLConnectionPool(
                pool_name=config.DB_POOL_NAME,
                pool_size=config.DB_POOL_SIZE,
                host=config.DB_HOST,
                port=config.DB_PORT,
                user=config.DB_USER,
                password=config.DB_PASSWORD,
                database=config.DB_NAME,
                time_zone=config.DB_TIMEZONE,
            )
        return _pool


@contextmanager
def connection() -> Iterator[pooling.PooledMySQLConnection]:
    """Borrow a pooled connection; it is always handed back on exit."""
    _slots.acquire()
    try:
        conn = get_pool().get_connection()
    except Exception:
        _slots.release()
        raise
    try:
        yield conn
    finally:
        # close() on a pooled connection returns it to the pool; it
        # resets the session first, which raises if the link is dead.
        try:
            conn.close()
        finally:
            _slots.release()


def ping() -> None:
    """Check that the database is reachable. Raises on failure."""
    with connection() as conn:
        logger.info("Pinging database...")
        conn.ping(reconnect=False)
