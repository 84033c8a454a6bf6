"""SQL statement generation with a naive injection check."""

from .exceptions import SqlGenError, UnsupportedType, InvalidStatement, ArityError
from .values import Expr, ScalarExpr, Criterion, expr, value, esc, gt, ge, lt, le, ne, like, not_like, not_null, not_in
from .conditions import Range
from .validate import check
from .statements import where, order, insert, insert_ignore, replace, update, select, count, delete

__all__ = [
    'SqlGenError', 'UnsupportedType', 'InvalidStatement', 'ArityError',
    'Expr', 'ScalarExpr', 'Criterion', 'expr', 'value', 'esc',
    'gt', 'ge', 'lt', 'le', 'ne', 'like', 'not_like', 'not_null', 'not_in',
    'Range', 'check', 'where', 'order', 'insert', 'insert_ignore', 'replace',
    'update', 'select', 'count', 'delete'
]
