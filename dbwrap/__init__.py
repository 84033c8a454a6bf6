"""Connection wrapper and table operations over generated SQL."""

from .table import TableWrapper
from .conn import SqlCon
from .audit import Audit, audited, retry
from . import connectors

__all__ = ['TableWrapper', 'SqlCon', 'Audit', 'audited', 'retry', 'connectors']
