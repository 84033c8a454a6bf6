"""SQL statement generators for table operations.

Every function returns text that has passed :func:`check`.
"""

from typing import Any, Iterable, Mapping, Optional
from .conditions import where_clause
from .validate import check
from .values import value


def _order_clause(text: str) -> str:
    return check(f'order by {text}') if text else ''


def where(*conds: Any) -> str:
    """Generate a where clause; '' when there are no conditions."""
    clause = where_clause(list(conds))
    return check(clause) if clause else clause


def order(*criteria: Any) -> str:
    """Generate an order by clause from sort criteria."""
    return _order_clause(', '.join(c for c in (str(c).strip() for c in criteria) if c))


def insert_stmt(cmd: str, table: str, data: Mapping[str, Any]) -> str:
    cols = list(data)
    return check(f'{cmd} into {table} ({", ".join(cols)}) values ({", ".join(value(data[c]) for c in cols)})')


def insert(table: str, data: Mapping[str, Any]) -> str:
    """Generate an insert statement."""
    return insert_stmt('insert', table, data)


def insert_ignore(table: str, data: Mapping[str, Any]) -> str:
    """Generate an insert ignore statement (MySQL syntax)."""
    return insert_stmt('insert ignore', table, data)


def replace(table: str, data: Mapping[str, Any]) -> str:
    """Generate a replace statement (MySQL syntax)."""
    return insert_stmt('replace', table, data)


def update(table: str, data: Mapping[str, Any], conds: Any = None) -> str:
    """Generate an update statement.

    The caller removes any filter entry from ``data`` beforehand; ``conds``
    is rendered as the where clause.
    """
    sets = ', '.join(f'{k} = {value(v)}' for k, v in data.items())
    return check(f'update {table} set {sets} {where_clause(conds)}'.strip())


def select(table: str, select: Optional[Iterable[str]] = None, where: Any = None,
           order: Optional[Iterable[str]] = None) -> str:
    """Generate a select statement.

    None means unset and takes the default (``*``, no filter, no ordering).
    An empty ``select`` list is not the same as unset.
    """
    cols = ['*'] if select is None else [str(c) for c in select]
    criteria = [] if order is None else [str(c) for c in order]
    parts = [
        f'select {", ".join(cols)} from {table}',
        where_clause({} if where is None else where),
        _order_clause(', '.join(criteria)),
    ]
    return check(' '.join(p for p in parts if p))


def count(table: str, conds: Any = None) -> str:
    """Generate a count statement."""
    return check(f'select count(*) from {table} {where_clause(conds)}'.strip())


def delete(table: str, conds: Any = None) -> str:
    """Generate a delete statement."""
    return check(f'delete from {table} {where_clause(conds)}'.strip())
