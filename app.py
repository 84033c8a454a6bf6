"""Flask app for SQL statement generation and execution."""

import dataclasses
import logging
from typing import Any, Dict, List
from flask import Flask, request, jsonify, Response, g
from werkzeug.exceptions import HTTPException
from sql_gen import SqlGenError
from sql_gen.conditions import from_json
from sql_gen.json_handler import json_select, json_insert, json_update, json_delete, json_count
from dbwrap import SqlCon, TableWrapper
from config import DB_CONFIG

app = Flask(__name__)
logger = logging.getLogger(__name__)


def get_db() -> SqlCon:
    """Get or create the SqlCon instance in Flask context."""
    if 'db' not in g:
        g.db = SqlCon(DB_CONFIG['conn_str'], audit_db=DB_CONFIG.get('audit_db'), debug=DB_CONFIG.get('debug', False))
    return g.db


@app.teardown_appcontext
def close_db(exc):
    db = g.pop('db', None)
    if db is not None:
        db.close()


def read_payload(required: List[str]) -> Dict[str, Any]:
    """Read the JSON body and check required fields."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError('Request body must be a JSON object')
    missing = [k for k in required if k not in payload]
    if missing:
        raise ValueError(f'Missing required fields: {missing}')
    return payload


def table_for(payload: Dict[str, Any]) -> TableWrapper:
    """TableWrapper carrying the payload's select, where and order state."""
    table = get_db().table(payload['table'])
    if payload.get('select') is not None:
        table = dataclasses.replace(table, selected=tuple(str(f) for f in payload['select']))
    where = from_json(payload.get('where'))
    if where:
        table = table.where(*where)
    if payload.get('order') is not None:
        table = dataclasses.replace(table, criteria=tuple(str(c) for c in payload['order']))
    return table


@app.errorhandler(SqlGenError)
@app.errorhandler(ValueError)
def handle_value_error(e: Exception) -> Response:
    """Handle bad input with 400 response."""
    return jsonify({'error': str(e)}), 400


@app.errorhandler(Exception)
def handle_general_error(e: Exception) -> Response:
    """Handle unexpected errors with 500 response."""
    if isinstance(e, HTTPException):
        return e
    logger.error(f'Server error: {e}')
    return jsonify({'error': 'Internal server error'}), 500


@app.route('/sql/select', methods=['POST'])
def select_query():
    """Generate or execute a select."""
    payload = read_payload(['table'])
    if not payload.get('execute'):
        return jsonify({'sql': json_select(payload)})
    rows = [dict(r._mapping) for r in table_for(payload)]
    return jsonify({'result': rows})


@app.route('/sql/count', methods=['POST'])
def count_query():
    """Generate or execute a count."""
    payload = read_payload(['table'])
    if not payload.get('execute'):
        return jsonify({'sql': json_count(payload)})
    return jsonify({'count': table_for(payload).count()})


@app.route('/sql/insert', methods=['POST'])
def insert_query():
    """Generate or execute insert, insert ignore or replace."""
    payload = read_payload(['table', 'data'])
    sql = json_insert(payload)
    if not payload.get('execute'):
        return jsonify({'sql': sql})
    table = table_for(payload)
    insert = getattr(table, payload.get('cmd', 'insert'))
    return jsonify({'rows_affected': insert(payload['data'])})


@app.route('/sql/update', methods=['POST'])
def update_query():
    """Generate or execute an update."""
    payload = read_payload(['table', 'data'])
    sql = json_update(payload)
    if not payload.get('execute'):
        return jsonify({'sql': sql})
    return jsonify({'rows_affected': table_for(payload).update(payload['data'])})


@app.route('/sql/delete', methods=['POST'])
def delete_query():
    """Generate or execute a delete."""
    payload = read_payload(['table'])
    sql = json_delete(payload)
    if not payload.get('execute'):
        return jsonify({'sql': sql})
    return jsonify({'rows_affected': table_for(payload).delete()})


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG if DB_CONFIG.get('debug') else logging.INFO)
    app.run(debug=True)
