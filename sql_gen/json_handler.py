"""JSON payload handling for SQL statements."""

from typing import Any, Dict
from . import statements
from .conditions import from_json

_insert_cmds = {'insert': statements.insert, 'insert_ignore': statements.insert_ignore, 'replace': statements.replace}


def _require(payload: Dict[str, Any], *required: str):
    missing = [k for k in required if k not in payload]
    if missing:
        raise ValueError(f'Missing required fields: {missing}')


def json_select(payload: Dict[str, Any]) -> str:
    """Generate a select statement from a JSON payload."""
    _require(payload, 'table')
    return statements.select(
        payload['table'],
        select=payload.get('select'),
        where=from_json(payload.get('where')),
        order=payload.get('order'),
    )


def json_count(payload: Dict[str, Any]) -> str:
    """Generate a count statement from a JSON payload."""
    _require(payload, 'table')
    return statements.count(payload['table'], from_json(payload.get('where')))


def json_insert(payload: Dict[str, Any]) -> str:
    """Generate insert, insert ignore or replace from a JSON payload."""
    _require(payload, 'table', 'data')
    cmd = payload.get('cmd', 'insert')
    if cmd not in _insert_cmds:
        raise ValueError(f'Unknown insert command: {cmd}')
    return _insert_cmds[cmd](payload['table'], payload['data'])


def json_update(payload: Dict[str, Any]) -> str:
    """Generate an update statement from a JSON payload."""
    _require(payload, 'table', 'data')
    return statements.update(payload['table'], payload['data'], from_json(payload.get('where')))


def json_delete(payload: Dict[str, Any]) -> str:
    """Generate a delete statement from a JSON payload."""
    _require(payload, 'table')
    return statements.delete(payload['table'], from_json(payload.get('where')))
