"""
Document store tests.

Tests cover:
- Default document and round trips
- Backend and serialization failures
- Compare-and-set versus plain last-write-wins
- Redis layout: raw JSON at the exact key
"""

import json

import pytest
import redis
from django.core.cache import caches

from apps.weekend.exceptions import ConcurrentUpdateError, DocumentStoreError
from apps.weekend.models import Participant, PackItem, WeekendData, Wish
from apps.weekend.store import (
    CacheDocumentStore,
    DocumentStore,
    RedisDocumentStore,
    get_document_store,
    store_status,
)


class BrokenCache:
    """Cache backend that is always unreachable."""

    def get(self, key, default=None):
        raise ConnectionError('Connection refused')

    def set(self, key, value, timeout=None):
        raise ConnectionError('Connection refused')

    def add(self, key, value, timeout=None):
        raise ConnectionError('Connection refused')


class TestLoadAndSave:

    def test_empty_store_returns_default_document(self, store):
        data = store.load()

        assert data == WeekendData.empty()
        assert data.to_dict() == {
            'participants': [],
            'wishes': [],
            'activities': [],
            'packList': [],
            'expenses': [],
            'schedule': [],
        }

    def test_saved_document_is_loaded_back(self, store):
        data = WeekendData(
            participants=[Participant(name='Anna', emoji='🦊')],
            pack_list=[PackItem(item='Tent', added_by='Anna')],
        )
        store.save(data)

        assert store.load() == data

    def test_document_is_json_under_fixed_key(self, store):
        store.save(WeekendData(participants=[Participant(name='Anna', emoji='🦊', id='p1', joined_at=1)]))

        raw = caches['weekend'].get('weekend-data')
        assert json.loads(raw)['participants'] == [
            {'id': 'p1', 'name': 'Anna', 'emoji': '🦊', 'joinedAt': 1}
        ]

    def test_missing_collections_are_empty(self, store):
        caches['weekend'].set('weekend-data', json.dumps({'participants': []}), timeout=None)

        assert store.load() == WeekendData.empty()

    def test_configured_store_uses_settings(self):
        store = get_document_store()

        assert store.key == 'weekend-data'
        assert store.cache is caches['weekend']
        assert store.use_compare_and_set is False


class TestEditing:

    def test_changes_are_written_back(self, store):
        with store.editing() as data:
            data.wishes.append(Wish(participant_id='p1', participant_name='Anna', category='eten', text='Kaas'))

        assert [w.text for w in store.load().wishes] == ['Kaas']

    def test_nothing_written_when_block_raises(self, store):
        with pytest.raises(RuntimeError):
            with store.editing() as data:
                data.wishes.append(Wish(participant_id='p1', participant_name='Anna', category='eten', text='Kaas'))
                raise RuntimeError('boom')

        assert store.load().wishes == []


class TestFailures:

    def test_unreachable_backend_on_load(self):
        store = CacheDocumentStore(BrokenCache())

        with pytest.raises(DocumentStoreError):
            store.load()

    def test_unreachable_backend_on_save(self):
        store = CacheDocumentStore(BrokenCache())

        with pytest.raises(DocumentStoreError):
            store.save(WeekendData.empty())

    def test_corrupt_document(self, store):
        caches['weekend'].set('weekend-data', '{not json', timeout=None)

        with pytest.raises(DocumentStoreError):
            store.load()

    def test_base_store_has_no_compare_and_set(self):
        store = DocumentStore(compare_and_set=True)

        assert store.use_compare_and_set is False
        with pytest.raises(NotImplementedError):
            store.compare_and_set(None, WeekendData.empty())

    def test_status_reports_backend(self, store):
        status = store_status(store)

        assert status == {
            'backend': 'LocMemCache',
            'key': 'weekend-data',
            'compareAndSet': False,
            'hasData': False,
        }

    def test_status_raises_when_unreachable(self):
        with pytest.raises(DocumentStoreError):
            store_status(CacheDocumentStore(BrokenCache()))


class TestConcurrentWrites:

    def _wish(self, text):
        return Wish(participant_id='p1', participant_name='Anna', category='eten', text=text)

    def test_interleaved_writes_lose_an_update(self, store):
        """Known limitation: last write wins and the first change is gone."""
        with store.editing() as first:
            with store.editing() as second:
                second.wishes.append(self._wish('Kaas'))
            first.wishes.append(self._wish('Wijn'))

        assert [w.text for w in store.load().wishes] == ['Wijn']

    def test_compare_and_set_rejects_stale_write(self, cas_store):
        with pytest.raises(ConcurrentUpdateError):
            with cas_store.editing() as first:
                with cas_store.editing() as second:
                    second.wishes.append(self._wish('Kaas'))
                first.wishes.append(self._wish('Wijn'))

        assert [w.text for w in cas_store.load().wishes] == ['Kaas']

    def test_compare_and_set_accepts_fresh_write(self, cas_store):
        data, token = cas_store.load_with_token()
        data.wishes.append(self._wish('Kaas'))

        assert cas_store.compare_and_set(token, data) is True
        assert [w.text for w in cas_store.load().wishes] == ['Kaas']

    def test_compare_and_set_releases_lock(self, cas_store):
        data, token = cas_store.load_with_token()
        cas_store.compare_and_set(token, data)

        assert caches['weekend'].get('weekend-data:lock') is None


# =============================================================================
# Redis
# =============================================================================

class FakeRedis:
    """
    In-memory stand-in for the parts of ``redis.Redis`` the store uses.

    ``before_exec`` runs between MULTI and EXEC, to simulate another client
    writing while a transaction is open.
    """

    def __init__(self):
        self.values = {}
        self.writes = 0
        self.before_exec = None

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value
        self.writes += 1
        return True

    def pipeline(self):
        return FakePipeline(self)


class FakePipeline:

    def __init__(self, client):
        self.client = client
        self.reset()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.reset()

    def reset(self):
        self.watched_at = None
        self.queued = []

    def watch(self, key):
        self.watched_at = self.client.writes

    def get(self, key):
        return self.client.get(key)

    def multi(self):
        pass

    def set(self, key, value):
        self.queued.append((key, value))

    def execute(self):
        if self.client.before_exec:
            self.client.before_exec()
        if self.watched_at is not None and self.watched_at != self.client.writes:
            raise redis.WatchError('Watched variable changed.')
        return [self.client.set(key, value) for key, value in self.queued]


class DownRedis:

    def get(self, key):
        raise redis.ConnectionError('Connection refused')

    def set(self, key, value):
        raise redis.ConnectionError('Connection refused')


@pytest.fixture
def fake_redis():
    return FakeRedis()


class TestRedisDocumentStore:

    def _wish(self, text):
        return Wish(participant_id='p1', participant_name='Anna', category='eten', text=text)

    def test_document_is_plain_json_at_exact_key(self, fake_redis):
        store = RedisDocumentStore(fake_redis)
        data = WeekendData(participants=[Participant(name='Anna', emoji='🦊', id='p1', joined_at=1)])

        store.save(data)

        assert list(fake_redis.values) == ['weekend-data']
        assert fake_redis.values['weekend-data'] == json.dumps(data.to_dict(), ensure_ascii=False)

    def test_reads_document_written_by_another_client(self, fake_redis):
        fake_redis.set('weekend-data', json.dumps({
            'participants': [{'id': 'p1', 'name': 'Anna', 'emoji': '🦊', 'joinedAt': 1}],
            'packList': [],
        }))

        data = RedisDocumentStore(fake_redis).load()

        assert data.participant_ids() == ['p1']
        assert data.wishes == []

    def test_missing_key_is_empty_document(self, fake_redis):
        assert RedisDocumentStore(fake_redis).load() == WeekendData.empty()

    def test_unreachable_server(self):
        store = RedisDocumentStore(DownRedis())

        with pytest.raises(DocumentStoreError):
            store.load()
        with pytest.raises(DocumentStoreError):
            store.save(WeekendData.empty())

    def test_compare_and_set_rejects_stale_token(self, fake_redis):
        store = RedisDocumentStore(fake_redis, compare_and_set=True)

        with pytest.raises(ConcurrentUpdateError):
            with store.editing() as first:
                with store.editing() as second:
                    second.wishes.append(self._wish('Kaas'))
                first.wishes.append(self._wish('Wijn'))

        assert [w.text for w in store.load().wishes] == ['Kaas']

    def test_compare_and_set_fails_on_write_during_transaction(self, fake_redis):
        store = RedisDocumentStore(fake_redis, compare_and_set=True)
        data, token = store.load_with_token()
        data.wishes.append(self._wish('Wijn'))
        fake_redis.before_exec = lambda: fake_redis.set('weekend-data', '{"wishes": []}')

        assert store.compare_and_set(token, data) is False
        assert fake_redis.values['weekend-data'] == '{"wishes": []}'

    def test_compare_and_set_accepts_fresh_write(self, fake_redis):
        store = RedisDocumentStore(fake_redis, compare_and_set=True)
        data, token = store.load_with_token()
        data.wishes.append(self._wish('Kaas'))

        assert store.compare_and_set(token, data) is True
        assert [w.text for w in store.load().wishes] == ['Kaas']

    def test_status(self, fake_redis):
        assert store_status(RedisDocumentStore(fake_redis)) == {
            'backend': 'Redis',
            'key': 'weekend-data',
            'compareAndSet': False,
            'hasData': False,
        }

    def test_redis_url_selects_redis_store(self, settings):
        settings.WEEKEND_STORE = {
            **settings.WEEKEND_STORE,
            'REDIS_URL': 'redis://localhost:6379/0',
            'KEY': 'weekend-test',
        }

        store = get_document_store()

        assert isinstance(store, RedisDocumentStore)
        assert store.key == 'weekend-test'
