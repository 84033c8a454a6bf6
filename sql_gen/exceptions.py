"""Error types raised while generating SQL."""


class SqlGenError(Exception):
    """Base class for SQL generation errors."""


class UnsupportedType(SqlGenError, TypeError):
    """Value or condition has no SQL rendering rule."""


class InvalidStatement(SqlGenError, ValueError):
    """Generated text failed the injection check."""


class ArityError(SqlGenError, TypeError):
    """Operation called without a required argument."""
