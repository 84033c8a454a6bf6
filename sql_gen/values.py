"""Literal rendering and SQL expression objects."""

from decimal import Decimal
from typing import Any, Sequence
from .exceptions import UnsupportedType


class Expr:
    """Base for objects that render themselves into SQL."""
    __slots__ = ()

    def to_sql(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_sql()

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other) and self.to_sql() == other.to_sql()

    def __hash__(self) -> int:
        return hash((type(self), self.to_sql()))


class ScalarExpr(Expr):
    """Raw SQL fragment, inserted without quoting (e.g. now())."""
    __slots__ = ('text',)

    def __init__(self, text: str):
        self.text = str(text)

    def to_sql(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f'ScalarExpr({self.text!r})'


class Criterion(Expr):
    """Right-hand side of a column test, e.g. '> 10' or 'like 'a%''."""
    __slots__ = ('op', 'operand')

    def __init__(self, op: str, operand: Any = None):
        self.op = op
        self.operand = operand

    def to_sql(self) -> str:
        if self.op in ('is not null', 'is null'):
            return self.op
        if self.op in ('in', 'not in'):
            return f'{self.op} ({", ".join(value(e) for e in self.operand)})'
        return f'{self.op} {value(self.operand)}'

    def __repr__(self) -> str:
        return f'Criterion({self.op!r}, {self.operand!r})'


def expr(text: str) -> ScalarExpr:
    """Mark a string as a raw SQL fragment."""
    return ScalarExpr(text)


def gt(v: Any) -> Criterion:
    return Criterion('>', v)


def ge(v: Any) -> Criterion:
    return Criterion('>=', v)


def lt(v: Any) -> Criterion:
    return Criterion('<', v)


def le(v: Any) -> Criterion:
    return Criterion('<=', v)


def ne(v: Any) -> Criterion:
    """Inequality; None becomes 'is not null'."""
    if v is None:
        return not_null()
    return Criterion('<>', v)


def like(pattern: str) -> Criterion:
    return Criterion('like', pattern)


def not_like(pattern: str) -> Criterion:
    return Criterion('not like', pattern)


def not_null() -> Criterion:
    return Criterion('is not null')


def not_in(values: Sequence[Any]) -> Criterion:
    return Criterion('not in', list(values))


def esc(text: Any) -> str:
    """Double embedded single quotes."""
    return str(text).replace("'", "''")


def is_numeric(data: Any) -> bool:
    return isinstance(data, (int, float, Decimal)) and not isinstance(data, bool)


def value(data: Any) -> str:
    """Format a Python value as an SQL literal."""
    if data is None:
        return 'null'
    if isinstance(data, Decimal):
        return format(data, 'f')
    if is_numeric(data):
        return str(data)
    if isinstance(data, str):
        return f"'{esc(data)}'"
    if isinstance(data, ScalarExpr):
        return data.to_sql()
    raise UnsupportedType(f'Unsupported datatype: {type(data).__name__}')
