"""Runtime configuration read from the environment."""

import os


def _flag(name: str) -> bool:
    return os.environ.get(name, '').strip().lower() in ('1', 'true', 'yes')


DB_CONFIG = {
    'conn_str': os.environ.get('SQLHELPER_CONN_STR', 'sqlite://'),
    'audit_db': os.environ.get('SQLHELPER_AUDIT_DB') or None,
    'debug': _flag('SQLHELPER_DEBUG'),
}
