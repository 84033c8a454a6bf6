"""Tests for JSON payload statement generation."""

import pytest

from sql_gen import InvalidStatement
from sql_gen.json_handler import json_count, json_delete, json_insert, json_select, json_update


class TestJsonHandler:
    """Tests for json_* generators."""

    def test_select(self):
        payload = {'table': 't', 'select': ['a', 'b'], 'where': {'a': {'from': 1, 'to': 3}}, 'order': ['b desc']}
        assert json_select(payload) == 'select a, b from t where a >= 1 and a <= 3 order by b desc'

    def test_select_parameterized(self):
        assert json_select({'table': 't', 'where': [['a = ?', "x'y"]]}) == "select * from t where (a = 'x''y')"

    def test_missing_table(self):
        with pytest.raises(ValueError, match='Missing required fields'):
            json_select({})

    def test_insert_commands(self):
        assert json_insert({'table': 't', 'data': {'a': 1}}) == 'insert into t (a) values (1)'
        assert json_insert({'table': 't', 'data': {'a': 1}, 'cmd': 'replace'}) == 'replace into t (a) values (1)'

    def test_unknown_insert_command(self):
        with pytest.raises(ValueError, match='Unknown insert command'):
            json_insert({'table': 't', 'data': {'a': 1}, 'cmd': 'upsert'})

    def test_update(self):
        sql = json_update({'table': 't', 'data': {'a': None}, 'where': 'b in (1, 2)'})
        assert sql == 'update t set a = null where (b in (1, 2))'

    def test_delete_and_count(self):
        assert json_delete({'table': 't', 'where': {'a': [1, 2]}}) == 'delete from t where a in (1, 2)'
        assert json_count({'table': 't'}) == 'select count(*) from t'

    def test_injection(self):
        with pytest.raises(InvalidStatement):
            json_delete({'table': 't', 'where': '1=1 --'})
