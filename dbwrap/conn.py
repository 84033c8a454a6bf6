"""SQLAlchemy connection wrapper executing generated SQL text."""

import logging
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional, Union
import pandas as pd
from sqlalchemy import create_engine
from sqlalchemy.engine import Row
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.pool import QueuePool, StaticPool
from .audit import Audit, audited, retry
from .table import TableWrapper

logger = logging.getLogger(__name__)

# Statements are complete SQL text; skip bind parameter processing.
_raw = {'no_parameters': True}


class SqlCon:
    """Database connection executing plain SQL statements.

    Provides immediate execution (``query``/``update``), a statement batch
    (``add_batch``/``execute_batch``) and lazy row streaming (``enumerate``).
    """
    def __init__(
        self, conn: Union[str, URL], pool_size: int = 5, pool_timeout: int = 30,
        echo: bool = False, debug: bool = False, audit_db: Optional[str] = None,
        connect_args: Optional[Dict[str, Any]] = None
    ):
        self.url = make_url(conn)
        self.db = self.url.get_backend_name()
        self.debug = debug
        self.audit_obj = Audit(audit_db) if audit_db else None
        kwargs: Dict[str, Any] = {'echo': echo, 'connect_args': dict(connect_args or {})}
        if self.db == 'sqlite':
            kwargs['poolclass'] = StaticPool
            kwargs['connect_args'].setdefault('check_same_thread', False)
        else:
            kwargs.update(poolclass=QueuePool, pool_size=pool_size, pool_timeout=pool_timeout, pool_recycle=3600)
        self.engine = create_engine(self.url, **kwargs)
        self._batch: List[str] = []
        self._batch_lock = Lock()

    def _log(self, sql: str):
        if self.debug:
            logger.debug(f'SQL: {sql}')

    @contextmanager
    def connect(self):
        """Context-managed connection."""
        conn = self.engine.connect()
        try:
            yield conn
        finally:
            conn.close()

    @retry()
    @audited
    def query(self, sql: str) -> List[Row]:
        """Execute a select and return all rows."""
        self._log(sql)
        with self.connect() as conn:
            result = conn.execution_options(**_raw).exec_driver_sql(sql)
            return list(result.all()) if result.returns_rows else []

    @audited
    def update(self, sql: str) -> int:
        """Execute a modifying statement; returns the affected row count."""
        self._log(sql)
        with self.engine.begin() as conn:
            return conn.execution_options(**_raw).exec_driver_sql(sql).rowcount

    def add_batch(self, sql: str) -> int:
        """Queue a statement for ``execute_batch``; returns the queue length."""
        self._log(f'[batch] {sql}')
        with self._batch_lock:
            self._batch.append(sql)
            return len(self._batch)

    @property
    def pending(self) -> List[str]:
        """Statements waiting for ``execute_batch``."""
        with self._batch_lock:
            return list(self._batch)

    def clear_batch(self):
        """Discard queued statements."""
        with self._batch_lock:
            self._batch.clear()

    @audited
    def execute_batch(self) -> List[int]:
        """Run queued statements in one transaction, in order.

        The queue is emptied on success and kept if the transaction fails.
        """
        with self._batch_lock:
            stmts = list(self._batch)
            if not stmts:
                return []
            logger.info(f'Executing batch of {len(stmts)} statements')
            with self.engine.begin() as conn:
                conn = conn.execution_options(**_raw)
                counts = [conn.exec_driver_sql(s).rowcount for s in stmts]
            del self._batch[:len(stmts)]
            return counts

    def enumerate(self, sql: str) -> Iterator[Row]:
        """Stream rows of a select; the statement runs when iteration starts."""
        self._log(sql)
        with self.connect() as conn:
            result = conn.execution_options(stream_results=True, **_raw).exec_driver_sql(sql)
            for row in result:
                yield row

    @retry()
    def fetch_df(self, sql: str) -> pd.DataFrame:
        """Execute a select and return a DataFrame."""
        self._log(sql)
        with self.connect() as conn:
            result = conn.execution_options(**_raw).exec_driver_sql(sql)
            return pd.DataFrame([tuple(r) for r in result.all()], columns=list(result.keys()))

    def table(self, name: str) -> TableWrapper:
        """Wrapper for table operations."""
        return TableWrapper(self, name)

    def close(self):
        """Dispose of engine resources."""
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
