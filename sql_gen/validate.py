"""Naive SQL injection check applied to every generated statement."""

import re
from typing import Optional
from .exceptions import InvalidStatement

_rx_quoted = [re.compile(r"'[^']*'"), re.compile(r'`[^`]*`'), re.compile(r'"[^"]*"')]
_rx_comment = re.compile(r'--|/\*|\*/')
_rx_quote = re.compile(r'[\'"`]')
_rx_paren = re.compile(r'[()]')


def strip_quoted(expr: str) -> str:
    """Remove quoted substrings; their contents are never inspected."""
    for rx in _rx_quoted:
        expr = rx.sub('', expr)
    return expr.strip()


def check(expr: Optional[str], is_name: bool = False) -> Optional[str]:
    """Reject expressions with unquoted semicolons, comments or unbalanced quotes.

    Returns the expression unchanged when it passes, and None for None so
    that a missing condition flows through as no clause.
    """
    if expr is None:
        return None
    tag = 'Object name' if is_name else 'Expression'
    test = strip_quoted(expr)
    if ';' in test:
        raise InvalidStatement(f'{tag} cannot contain unquoted semicolons: {expr}')
    if _rx_comment.search(test):
        raise InvalidStatement(f'{tag} cannot contain unquoted comments: {expr}')
    if _rx_quote.search(test):
        raise InvalidStatement(f'Unclosed quotation mark: {expr}')
    if not test:
        raise InvalidStatement(f'{tag} is blank')
    if is_name and _rx_paren.search(test):
        raise InvalidStatement(f'{tag} cannot contain unquoted parentheses: {expr}')
    return expr
