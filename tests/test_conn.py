"""Integration tests for SqlCon against in-memory SQLite."""

import pandas as pd
import pytest
from sqlalchemy.exc import DBAPIError, OperationalError

import sql_gen
from dbwrap import Audit, SqlCon, retry
from dbwrap import audit as audit_module


class TestQuery:
    """Tests for query, update and enumerate."""

    def test_count_and_rows(self, sqlite_con):
        people = sqlite_con.table('people')
        assert people.count() == 3
        assert people.count({'age': None}) == 1
        assert not people.is_empty()

    def test_select_iteration(self, sqlite_con):
        people = sqlite_con.table('people').select('id', 'name n').where({'age': sql_gen.gt(35)})
        rows = list(people)
        assert len(rows) == 1
        assert rows[0].n == "O'Brien"
        assert rows[0][0] == 2

    def test_order(self, sqlite_con):
        names = [r.name for r in sqlite_con.table('people').order('id desc')]
        assert names == ['Carol', "O'Brien", 'Alice']

    def test_literal_colon_and_percent_survive(self, sqlite_con):
        people = sqlite_con.table('people')
        people.insert({'id': 4, 'name': 'a:b 100%', 'age': 1})
        assert people.count({'name': 'a:b 100%'}) == 1

    def test_update_returns_rowcount(self, sqlite_con):
        people = sqlite_con.table('people')
        assert people.update({'age': 50, 'where': {'id': [1, 2]}}) == 2
        assert people.where({'age': 50}).count() == 2

    def test_delete(self, sqlite_con):
        people = sqlite_con.table('people')
        assert people.where({'id': sql_gen.Range(1, 2)}).delete() == 2
        assert people.count() == 1

    def test_fetch_df(self, sqlite_con):
        df = sqlite_con.table('people').select('id', 'name').order('id').to_df()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['id', 'name']
        assert df['id'].tolist() == [1, 2, 3]

    def test_fetch_df_empty_keeps_columns(self, sqlite_con):
        df = sqlite_con.table('people').select('id').where({'id': 99}).to_df()
        assert df.empty
        assert list(df.columns) == ['id']


class TestBatch:
    """Tests for statement batches."""

    def test_execute_batch(self, sqlite_con):
        people = sqlite_con.table('people').batch()
        assert people.insert({'id': 10, 'name': 'Dan', 'age': 5}) == 1
        assert people.insert({'id': 11, 'name': 'Eve', 'age': 6}) == 2
        assert sqlite_con.table('people').count() == 3
        assert sqlite_con.execute_batch() == [1, 1]
        assert sqlite_con.pending == []
        assert sqlite_con.table('people').count() == 5

    def test_failed_batch_rolls_back_and_keeps_queue(self, sqlite_con):
        people = sqlite_con.table('people').batch()
        people.insert({'id': 20, 'name': 'Fay', 'age': 1})
        people.insert({'id': 1, 'name': 'Dup', 'age': 1})
        with pytest.raises(Exception):
            sqlite_con.execute_batch()
        assert len(sqlite_con.pending) == 2
        assert sqlite_con.table('people').count() == 3
        sqlite_con.clear_batch()
        assert sqlite_con.execute_batch() == []


class TestAudit:
    """Tests for the audit trail."""

    def test_records_statements(self, tmp_path):
        db = str(tmp_path / 'audit.db')
        with SqlCon('sqlite://', audit_db=db) as con:
            con.update('create table t (a integer)')
            con.table('t').insert({'a': 1})
            assert con.table('t').count() == 1
        records = Audit(db).records()
        assert [r[0] for r in records] == ['query', 'update', 'update']
        assert records[0][1] == 'select count(*) from t'
        assert all(r[2] == 1 for r in records)

    def test_records_failures(self, tmp_path):
        db = str(tmp_path / 'audit.db')
        con = SqlCon('sqlite://', audit_db=db)
        con.update('create table t (a integer primary key)')
        con.update('insert into t (a) values (1)')
        with pytest.raises(Exception):
            con.update('insert into t (a) values (1)')
        con.close()
        fn, sql, ok, err, _ = Audit(db).records(limit=1)[0]
        assert (fn, ok) == ('update', 0)
        assert 'UNIQUE' in err


class TestAuditCaller:
    """Tests for caller attribution in the audit trail."""

    def test_query_and_update_attributed_to_caller(self, tmp_path):
        db = str(tmp_path / 'audit.db')
        with SqlCon('sqlite://', audit_db=db) as con:
            con.update('create table t (a integer)')
            con.query('select a from t')
            con.table('t').count()
        callers = [(r[0], r[4]) for r in Audit(db).records()]
        assert callers == [('query', __name__), ('query', __name__), ('update', __name__)]


class TestRetry:
    """Tests for the retry decorator."""

    def test_missing_table_fails_without_retry(self, sqlite_con, monkeypatch):
        sleeps = []
        monkeypatch.setattr(audit_module.time, 'sleep', sleeps.append)
        with pytest.raises(OperationalError, match='no such table'):
            sqlite_con.table('missing').count()
        assert sleeps == []

    def test_lost_connection_retried(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr(audit_module.time, 'sleep', sleeps.append)
        calls = []

        @retry(tries=3, delay=0.5)
        def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise DBAPIError('select 1', None, Exception('server closed the connection'),
                                 connection_invalidated=True)
            return 'ok'

        assert flaky() == 'ok'
        assert sleeps == [0.5, 0.5]

    def test_gives_up_after_tries(self, monkeypatch):
        monkeypatch.setattr(audit_module.time, 'sleep', lambda s: None)
        calls = []

        @retry(tries=2)
        def down():
            calls.append(1)
            raise DBAPIError('select 1', None, Exception('gone'), connection_invalidated=True)

        with pytest.raises(DBAPIError):
            down()
        assert len(calls) == 2
