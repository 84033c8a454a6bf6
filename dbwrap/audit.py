"""Audit trail and retry decorators for SqlCon execution methods."""

import sqlite3
import logging
import time
import functools
import inspect
from contextlib import contextmanager
from threading import Lock
from typing import Optional, Tuple
from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)

_package = __name__.split('.')[0]

_ddl = '''
    CREATE TABLE IF NOT EXISTS audit (
        id INTEGER PRIMARY KEY,
        ts TEXT DEFAULT CURRENT_TIMESTAMP,
        fn TEXT,
        sql TEXT,
        ok INTEGER,
        err TEXT,
        caller_module TEXT,
        caller_path TEXT
    )
'''


class Audit:
    """Statement log kept in a separate SQLite file."""
    def __init__(self, db: str = 'audit.db'):
        self.db = db
        self.lock = Lock()
        with self._cursor() as conn:
            conn.execute(_ddl)

    @contextmanager
    def _cursor(self):
        with self.lock, sqlite3.connect(self.db) as conn:
            yield conn

    def log(self, fn: str, sql: str, ok: bool, err: Optional[str], caller_module: str, caller_path: str):
        """Append one audit record."""
        with self._cursor() as conn:
            conn.execute(
                'INSERT INTO audit (fn, sql, ok, err, caller_module, caller_path) VALUES (?, ?, ?, ?, ?, ?)',
                (fn, sql, int(ok), err, caller_module, caller_path))

    def records(self, limit: int = 100):
        """Most recent (fn, sql, ok, err, caller_module) records, newest first."""
        with self._cursor() as conn:
            cur = conn.execute(
                'SELECT fn, sql, ok, err, caller_module FROM audit ORDER BY id DESC LIMIT ?', (limit,))
            return cur.fetchall()


def _caller() -> Tuple[str, str]:
    """Module and file of the first frame outside this package."""
    frame = inspect.currentframe()
    try:
        while frame is not None:
            module = frame.f_globals.get('__name__', '__main__')
            if module != _package and not module.startswith(_package + '.'):
                return module, frame.f_code.co_filename
            frame = frame.f_back
    finally:
        del frame
    return 'unknown', 'unknown'


def audited(fn):
    """Record each call in ``self.audit_obj`` when auditing is enabled."""
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        if self.audit_obj is None:
            return fn(self, *args, **kwargs)
        sql = args[0] if args else kwargs.get('sql', f'<{len(self.pending)} batched>')
        caller_module, caller_path = _caller()
        try:
            result = fn(self, *args, **kwargs)
        except Exception as e:
            self.audit_obj.log(fn.__name__, sql, False, str(e), caller_module, caller_path)
            raise
        self.audit_obj.log(fn.__name__, sql, True, None, caller_module, caller_path)
        return result
    return wrapper


def retry(tries: int = 3, delay: float = 2.0):
    """Retry a read when the driver reports a lost connection.

    Errors on a live connection (missing table, syntax) are raised at once.
    """
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            attempt = 1
            while True:
                try:
                    return fn(*args, **kwargs)
                except DBAPIError as e:
                    if not e.connection_invalidated or attempt >= tries:
                        raise
                    logger.warning(f'{fn.__name__} lost connection, retry {attempt}/{tries - 1}: {e.orig}')
                    attempt += 1
                    time.sleep(delay)
        return wrapper
    return decorator
