"""Shared test fixtures for sqlhelper."""

from typing import Any, List

import pytest

from dbwrap import SqlCon, TableWrapper


class FakeConnection:
    """In-memory fake satisfying the connection interface used by TableWrapper.

    Records every statement and returns canned rows for queries.
    """

    def __init__(self, rows: List[Any] = None, affected: int = 1) -> None:
        self.rows = rows if rows is not None else [(0,)]
        self.affected = affected
        self.queries: List[str] = []
        self.updates: List[str] = []
        self.batch: List[str] = []
        self.enumerated: List[str] = []

    def query(self, sql: str) -> List[Any]:
        self.queries.append(sql)
        return self.rows

    def update(self, sql: str) -> int:
        self.updates.append(sql)
        return self.affected

    def add_batch(self, sql: str) -> int:
        self.batch.append(sql)
        return len(self.batch)

    def enumerate(self, sql: str):
        self.enumerated.append(sql)
        for row in self.rows:
            yield row

    def table(self, name: str) -> TableWrapper:
        return TableWrapper(self, name)

    def fetch_df(self, sql: str):
        import pandas as pd
        self.queries.append(sql)
        return pd.DataFrame(self.rows)


@pytest.fixture
def fake_con() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def table(fake_con) -> TableWrapper:
    return TableWrapper(fake_con, 'test.data')


@pytest.fixture
def sqlite_con():
    """In-memory SQLite connection with a small ``people`` table."""
    con = SqlCon('sqlite://')
    con.update('create table people (id integer primary key, name text, age integer)')
    people = con.table('people')
    people.insert({'id': 1, 'name': 'Alice', 'age': 30})
    people.insert({'id': 2, 'name': "O'Brien", 'age': 41})
    people.insert({'id': 3, 'name': 'Carol', 'age': None})
    yield con
    con.close()
