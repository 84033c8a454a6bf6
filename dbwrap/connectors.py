"""Shortcut connectors building SQLAlchemy URLs for common databases."""

from typing import Any, Optional
from sqlalchemy.engine.url import URL
from .conn import SqlCon

DEFAULT_LOGIN_TIMEOUT = 60


def mssql_url(host: str, user: str, password: str, db: str) -> URL:
    return URL.create('mssql+pyodbc', username=user, password=password, host=host, database=db,
                      query={'driver': 'ODBC Driver 17 for SQL Server'})


def mssql(host: str, user: str, password: str, db: str, timeout: int = DEFAULT_LOGIN_TIMEOUT, **extra: Any) -> SqlCon:
    """Connect to MS SQL Server."""
    return _connect(mssql_url(host, user, password, db), {'timeout': timeout}, extra)


sqlserver = mssql


def oracle_url(host: str, user: str, password: str, service_name: str) -> URL:
    return URL.create('oracle+oracledb', username=user, password=password, host=host,
                      query={'service_name': service_name})


def oracle_sid_url(host: str, user: str, password: str, sid: str) -> URL:
    return URL.create('oracle+oracledb', username=user, password=password, host=host, database=sid)


def oracle(host: str, user: str, password: str, service_name: str, timeout: int = DEFAULT_LOGIN_TIMEOUT,
           **extra: Any) -> SqlCon:
    """Connect to Oracle by service name."""
    return _connect(oracle_url(host, user, password, service_name), {'tcp_connect_timeout': timeout}, extra)


def oracle_by_sid(host: str, user: str, password: str, sid: str, timeout: int = DEFAULT_LOGIN_TIMEOUT,
                  **extra: Any) -> SqlCon:
    """Connect to Oracle by SID."""
    return _connect(oracle_sid_url(host, user, password, sid), {'tcp_connect_timeout': timeout}, extra)


def mysql_url(host: str, user: str, password: str, db: str) -> URL:
    return URL.create('mysql+mysqlconnector', username=user, password=password, host=host, database=db)


def mysql(host: str, user: str, password: str, db: str, timeout: int = DEFAULT_LOGIN_TIMEOUT, **extra: Any) -> SqlCon:
    """Connect to MySQL."""
    return _connect(mysql_url(host, user, password, db), {'connection_timeout': timeout}, extra)


def postgresql_url(host: str, user: str, password: str, db: str) -> URL:
    return URL.create('postgresql+psycopg2', username=user, password=password, host=host, database=db)


def postgresql(host: str, user: str, password: str, db: str, timeout: int = DEFAULT_LOGIN_TIMEOUT,
               **extra: Any) -> SqlCon:
    """Connect to PostgreSQL."""
    return _connect(postgresql_url(host, user, password, db), {'connect_timeout': timeout}, extra)


def sqlite_url(path: Optional[str] = None) -> URL:
    return URL.create('sqlite', database=path)


def sqlite(path: Optional[str] = None, **extra: Any) -> SqlCon:
    """Open an SQLite database; in-memory when ``path`` is None."""
    return SqlCon(sqlite_url(path), **extra)


def _connect(url: URL, timeout_args: dict, extra: dict) -> SqlCon:
    connect_args = {**timeout_args, **extra.pop('connect_args', {})}
    return SqlCon(url, connect_args=connect_args, **extra)
