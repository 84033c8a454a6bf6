"""Table wrapper composing select, where, order and batch state.

Example::

    table = con.table('test.data')
    table.count()
    table.where({'a': 10}).count()
    for row in table.select('a apple', 'b').where({'c': range(1, 11)}).order('b desc'):
        print(row.apple)
    table.update({'a': 'hello', 'b': sql_gen.expr('now()'), 'where': {'c': 3}})
    table.where({'c': 3}).delete()
    table.batch().insert({'a': 10})
"""

import logging
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Mapping, Optional, Tuple
import pandas as pd
from sql_gen import statements
from sql_gen.exceptions import ArityError
from sql_gen.validate import check

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableWrapper:
    """Immutable query state bound to one table.

    ``select``, ``where``, ``order`` and ``batch`` return a new wrapper with
    one field replaced; the original is never modified. The connection must
    provide ``query``, ``update``, ``add_batch`` and ``enumerate``.
    """
    connection: Any = field(repr=False, compare=False)
    name: str
    selected: Optional[Tuple[str, ...]] = None
    conditions: Optional[Tuple[Any, ...]] = None
    criteria: Optional[Tuple[str, ...]] = None
    batched: bool = False

    def __post_init__(self):
        check(self.name, is_name=True)

    def __str__(self) -> str:
        return self.name

    def select(self, *fields: str) -> 'TableWrapper':
        """Select only the given fields; no arguments keeps the current list."""
        if not fields:
            return dataclasses.replace(self)
        return dataclasses.replace(self, selected=tuple(str(f) for f in fields))

    def where(self, *conditions: Any) -> 'TableWrapper':
        """Filter with the given conditions, replacing any previous filter."""
        if not conditions:
            raise ArityError('where() requires at least one condition')
        return dataclasses.replace(self, conditions=conditions)

    def order(self, *criteria: str) -> 'TableWrapper':
        """Sort by the given criteria, replacing any previous ordering."""
        if not criteria:
            raise ArityError('order() requires at least one criterion')
        return dataclasses.replace(self, criteria=tuple(str(c) for c in criteria))

    def batch(self) -> 'TableWrapper':
        """Wrapper whose inserts, updates and deletes are queued on the connection.

        Returns self when already batched. Queued statements run on the
        connection's ``execute_batch``.
        """
        if self.batched:
            return self
        return dataclasses.replace(self, batched=True)

    @property
    def is_batch(self) -> bool:
        return self.batched

    @property
    def sql(self) -> str:
        """Select statement for the current state."""
        return statements.select(
            self.name,
            select=self.selected,
            where=self._filter(),
            order=self.criteria)

    def _filter(self, where: Tuple[Any, ...] = ()) -> Optional[List[Any]]:
        if where:
            return list(where)
        return None if self.conditions is None else list(self.conditions)

    def _modify(self, sql: str) -> int:
        if self.batched:
            return self.connection.add_batch(sql)
        return self.connection.update(sql)

    def count(self, *where: Any) -> int:
        """Number of records, filtered by ``where`` or the current filter."""
        rows = self.connection.query(statements.count(self.name, self._filter(where)))
        return int(rows[0][0])

    def is_empty(self, *where: Any) -> bool:
        return self.count(*where) == 0

    def insert(self, data: Mapping[str, Any]) -> int:
        """Insert one record; returns the affected row count."""
        return self._modify(statements.insert(self.name, data))

    def insert_ignore(self, data: Mapping[str, Any]) -> int:
        """Insert one record, skipping duplicates (non-standard syntax)."""
        return self._modify(statements.insert_ignore(self.name, data))

    def replace(self, data: Mapping[str, Any]) -> int:
        """Replace the record with the same unique key (non-standard syntax)."""
        return self._modify(statements.replace(self.name, data))

    def update(self, data: Mapping[str, Any]) -> int:
        """Update records with the column values in ``data``.

        A ``where`` entry in ``data`` is taken out and used as the filter in
        place of the current one.
        """
        values = dict(data)
        where = values.pop('where', None)
        if where is None:
            where = self._filter()
        return self._modify(statements.update(self.name, values, where))

    def delete(self, *where: Any) -> int:
        """Delete records matching ``where`` or the current filter."""
        return self._modify(statements.delete(self.name, self._filter(where)))

    def truncate_table(self) -> int:
        """Empty the table. Never batched."""
        logger.warning(f'Truncating table {self.name}')
        return self.connection.update(check(f'truncate table {self.name}'))

    def drop_table(self) -> int:
        """Drop the table. Never batched."""
        logger.warning(f'Dropping table {self.name}')
        return self.connection.update(check(f'drop table {self.name}'))

    def __iter__(self) -> Iterator[Any]:
        return iter(self.connection.enumerate(self.sql))

    def each(self, fn: Callable[[Any], Any]):
        """Call ``fn`` with every selected row."""
        for row in self:
            fn(row)

    def to_df(self) -> pd.DataFrame:
        """Selected rows as a DataFrame."""
        return self.connection.fetch_df(self.sql)
