"""Unit tests for the MemoryRecordStoreDAO and the shared RecordStoreBaseDAO behavior."""

import pytest

from urlshortener.dao.base import RecordStoreBaseDAO
from urlshortener.dao.memory import MemoryRecordStoreDAO


@pytest.fixture
def store():
    return MemoryRecordStoreDAO({'abc': {'userId': 'u1'}})


def test_is_a_record_store(store):
    assert isinstance(store, RecordStoreBaseDAO)


def test_starts_empty_by_default():
    assert MemoryRecordStoreDAO().read() == {}


def test_initial_records(store):
    assert store.get('abc') == {'userId': 'u1'}


def test_initial_records_are_copied():
    records = {'abc': {'userId': 'u1'}}
    store = MemoryRecordStoreDAO(records)
    records['abc']['userId'] = 'mutated'
    assert store.get('abc') == {'userId': 'u1'}


def test_read_returns_a_copy(store):
    store.read()['abc']['userId'] = 'mutated'
    assert store.get('abc') == {'userId': 'u1'}


def test_write_and_put(store):
    store.write({'x': {'userId': 'u2'}})
    store.put('y', {'userId': 'u3'})
    assert store.read() == {'x': {'userId': 'u2'}, 'y': {'userId': 'u3'}}


def test_list_with_predicate(store):
    store.put('def', {'userId': 'u2'})
    assert store.list(lambda record_id, _: record_id == 'def') == {'def': {'userId': 'u2'}}


def test_transaction_is_reentrant(store):
    with store.transaction() as tx:
        assert tx is store
        with store.transaction():
            store.put('nested', {'userId': 'u9'})
        # put() acquires the same lock again
        store.put('outer', {'userId': 'u9'})

    assert set(store.read()) == {'abc', 'nested', 'outer'}


def test_repr(store):
    assert repr(store) == '<MemoryRecordStoreDAO>'


def test_ping(store):
    assert store.ping() is True
