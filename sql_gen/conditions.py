"""Where clause rendering for mapping, raw and parameterized conditions."""

from collections.abc import Mapping
from typing import Any, List, Optional
from .exceptions import UnsupportedType
from .values import Criterion, ScalarExpr, is_numeric, value


class Range:
    """Bounded column test: first <= col <= last (or < last when exclusive)."""
    __slots__ = ('first', 'last', 'exclusive')

    def __init__(self, first: Any, last: Any, exclusive: bool = False):
        self.first = first
        self.last = last
        self.exclusive = exclusive

    @classmethod
    def from_range(cls, r: range) -> 'Range':
        """Convert a builtin range (step 1) into an exclusive Range."""
        if r.step != 1:
            raise UnsupportedType(f'Only ranges with step 1 are supported: {r!r}')
        return cls(r.start, r.stop, exclusive=True)

    def to_sql(self, col: str) -> str:
        op = '<' if self.exclusive else '<='
        return f'>= {value(self.first)} and {col} {op} {value(self.last)}'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Range) and (self.first, self.last, self.exclusive) == (other.first, other.last, other.exclusive)

    def __repr__(self) -> str:
        return f'Range({self.first!r}, {self.last!r}, exclusive={self.exclusive})'


def column_test(col: str, v: Any) -> str:
    """Render one mapping entry as a column test."""
    if v is None:
        return f'{col} is null'
    if is_numeric(v) or isinstance(v, (str, ScalarExpr)):
        return f'{col} = {value(v)}'
    if isinstance(v, Criterion):
        return f'{col} {v.to_sql()}'
    if isinstance(v, range):
        v = Range.from_range(v)
    if isinstance(v, Range):
        return f'{col} {v.to_sql(col)}'
    if isinstance(v, (list, tuple)):
        return f'{col} in ({", ".join(value(e) for e in v)})'
    raise UnsupportedType(f'Unsupported class: {type(v).__name__}')


def substitute(template: str, params: List[Any]) -> str:
    """Replace each ? in order; placeholders without a parameter stay as ?."""
    pending = list(params)
    out = []
    for ch in template:
        if ch == '?' and pending:
            out.append(value(pending.pop(0)))
        else:
            out.append(ch)
    return ''.join(out)


def where_unit(cond: Any) -> str:
    """Render a single condition; empty conditions yield ''."""
    if isinstance(cond, list):
        return _conjoin(cond)
    if isinstance(cond, (str, ScalarExpr)):
        text = str(cond).strip()
        return f'({text})' if text else ''
    if isinstance(cond, Mapping):
        return ' and '.join(column_test(k, v) for k, v in cond.items())
    if isinstance(cond, tuple):
        if not cond:
            return ''
        return f'({substitute(str(cond[0]), list(cond[1:]))})'
    raise UnsupportedType('Condition must be a mapping, a string or a (template, *params) tuple')


def _conjoin(conds: List[Any]) -> str:
    parts = [where_unit(c) for c in conds if c is not None]
    return ' and '.join(p for p in parts if p)


def where_clause(conds: Any) -> str:
    """Build 'where ...' from a condition or list of conditions (no check)."""
    clause = _conjoin(conds if isinstance(conds, list) else [conds])
    return f'where {clause}' if clause else ''


def from_json(raw: Any) -> Optional[List[Any]]:
    """Turn JSON-decoded where input into a condition list."""
    if raw is None:
        return None
    items = raw if isinstance(raw, list) else [raw]
    out = []
    for item in items:
        if isinstance(item, list):
            out.append(tuple(item))
        elif isinstance(item, dict):
            out.append({k: _json_value(v) for k, v in item.items()})
        else:
            out.append(item)
    return out


def _json_value(v: Any) -> Any:
    if isinstance(v, dict):
        if 'from' not in v or 'to' not in v:
            raise UnsupportedType(f'Range object needs "from" and "to": {v}')
        return Range(v['from'], v['to'], exclusive=bool(v.get('exclusive', False)))
    return v
