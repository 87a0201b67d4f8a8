"""
Document Store
==============

The whole weekend is one JSON document kept under a fixed key in a
key-value store. This module is the only place that knows where that
document lives.

Classes:
    DocumentStore: Repository contract (load/save, optional compare-and-set).
    RedisDocumentStore: Plain JSON value at the exact key in Redis.
    CacheDocumentStore: In-process fallback on a Django cache backend.

With ``WEEKEND_STORE['REDIS_URL']`` set (``REDIS_URL`` or ``KV_URL`` in
the environment) the document lives in Redis, stored as the raw JSON
string under the configured key, so any other KV client can read and
write it. Without it the document lives in the ``LocMemCache`` behind
``WEEKEND_STORE['CACHE_ALIAS']``, so local development works without any
service (data is lost on restart).

Example:
    Read-modify-write of the document::

        from apps.weekend.store import get_document_store

        store = get_document_store()
        with store.editing() as data:
            data.schedule.append(item)
        # written back here, unless the block raised

Note:
    Without compare-and-set two overlapping ``editing()`` blocks can lose
    one of the updates: whichever writes last replaces the whole document.
    Set ``WEEKEND_STORE_COMPARE_AND_SET=True`` to turn that into a 409
    for the losing request instead.
"""

import functools
import json
import logging
import time
import uuid
from contextlib import contextmanager

import redis
from django.conf import settings
from django.core.cache import caches

from .exceptions import ConcurrentUpdateError, DocumentStoreError
from .models import WeekendData

logger = logging.getLogger(__name__)

DEFAULT_STORE_KEY = 'weekend-data'


class DocumentStore:
    """
    Repository for the single ``WeekendData`` document.

    Subclasses implement ``_read_raw`` and ``_write_raw`` on the stored
    JSON string; the raw string that was read doubles as the token for
    compare-and-set. Stores that can atomically compare that token before
    writing set ``supports_compare_and_set`` and implement
    ``compare_and_set``.
    """

    supports_compare_and_set = False

    def __init__(self, *, compare_and_set: bool = False):
        self.use_compare_and_set = compare_and_set and self.supports_compare_and_set

    @property
    def backend_name(self) -> str:
        return type(self).__name__

    def _read_raw(self):
        raise NotImplementedError

    def _write_raw(self, raw: str) -> None:
        raise NotImplementedError

    @staticmethod
    def _decode(raw) -> WeekendData:
        if raw is None:
            return WeekendData.empty()
        try:
            return WeekendData.from_dict(json.loads(raw))
        except (TypeError, ValueError, KeyError, AttributeError) as exc:
            raise DocumentStoreError(f"Stored document is not valid: {exc}") from exc

    @staticmethod
    def _encode(data: WeekendData) -> str:
        try:
            return json.dumps(data.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise DocumentStoreError(f"Document could not be serialized: {exc}") from exc

    def load_with_token(self):
        raw = self._read_raw()
        return self._decode(raw), raw

    def load(self) -> WeekendData:
        data, _ = self.load_with_token()
        return data

    def save(self, data: WeekendData) -> None:
        self._write_raw(self._encode(data))

    def exists(self) -> bool:
        return self._read_raw() is not None

    def compare_and_set(self, expected_token, data: WeekendData) -> bool:
        raise NotImplementedError(
            f"{type(self).__name__} does not support compare-and-set"
        )

    @contextmanager
    def editing(self):
        """
        Read the document, hand it to the block, then write it back.

        Nothing is written if the block raises.

        Raises:
            DocumentStoreError: If the backend fails on read or write.
            ConcurrentUpdateError: In compare-and-set mode, if the document
                changed since it was read.
        """
        data, token = self.load_with_token()
        yield data
        if self.use_compare_and_set:
            if not self.compare_and_set(token, data):
                raise ConcurrentUpdateError()
        else:
            self.save(data)


class RedisDocumentStore(DocumentStore):
    """
    Document kept as a plain JSON string at ``key`` in Redis, never expiring.

    The client must be created with ``decode_responses=True`` so the value
    read back is the same ``str`` that was written. Compare-and-set is
    Redis' own optimistic transaction: ``WATCH`` the key, compare, then
    ``MULTI``/``EXEC`` the write, which fails if anyone wrote in between.
    """

    supports_compare_and_set = True

    def __init__(self, client, key=DEFAULT_STORE_KEY, *, compare_and_set=False):
        super().__init__(compare_and_set=compare_and_set)
        self.client = client
        self.key = key

    @property
    def backend_name(self) -> str:
        return 'Redis'

    def _read_raw(self):
        try:
            return self.client.get(self.key)
        except redis.RedisError as exc:
            raise DocumentStoreError(f"Reading '{self.key}' failed: {exc}") from exc

    def _write_raw(self, raw):
        try:
            self.client.set(self.key, raw)
        except redis.RedisError as exc:
            raise DocumentStoreError(f"Writing '{self.key}' failed: {exc}") from exc

    def compare_and_set(self, expected_token, data: WeekendData) -> bool:
        raw = self._encode(data)
        try:
            with self.client.pipeline() as pipe:
                pipe.watch(self.key)
                if pipe.get(self.key) != expected_token:
                    logger.info("Document '%s' changed since it was read", self.key)
                    return False
                pipe.multi()
                pipe.set(self.key, raw)
                pipe.execute()
                return True
        except redis.WatchError:
            logger.info("Document '%s' was written during the update", self.key)
            return False
        except redis.RedisError as exc:
            raise DocumentStoreError(f"Writing '{self.key}' failed: {exc}") from exc


class CacheDocumentStore(DocumentStore):
    """
    Document kept as a JSON string in a Django cache backend, never expiring.

    Compare-and-set takes a short lock with ``cache.add`` (atomic on
    LocMemCache), compares the raw stored JSON with the JSON that was
    read, and only then writes.
    """

    supports_compare_and_set = True

    def __init__(self, cache, key=DEFAULT_STORE_KEY, *, compare_and_set=False,
                 lock_timeout=5):
        super().__init__(compare_and_set=compare_and_set)
        self.cache = cache
        self.key = key
        self.lock_key = f'{key}:lock'
        self.lock_timeout = lock_timeout

    @property
    def backend_name(self) -> str:
        return type(self.cache).__name__

    def _read_raw(self):
        try:
            return self.cache.get(self.key)
        except Exception as exc:
            raise DocumentStoreError(f"Reading '{self.key}' failed: {exc}") from exc

    def _write_raw(self, raw):
        try:
            self.cache.set(self.key, raw, timeout=None)
        except Exception as exc:
            raise DocumentStoreError(f"Writing '{self.key}' failed: {exc}") from exc

    def compare_and_set(self, expected_token, data: WeekendData) -> bool:
        raw = self._encode(data)
        owner = uuid.uuid4().hex
        self._acquire_lock(owner)
        try:
            if self._read_raw() != expected_token:
                logger.info("Document '%s' changed since it was read", self.key)
                return False
            self._write_raw(raw)
            return True
        finally:
            self._release_lock(owner)

    def _acquire_lock(self, owner):
        deadline = time.monotonic() + self.lock_timeout
        while True:
            try:
                if self.cache.add(self.lock_key, owner, timeout=self.lock_timeout):
                    return
            except Exception as exc:
                raise DocumentStoreError(f"Locking '{self.key}' failed: {exc}") from exc
            if time.monotonic() >= deadline:
                raise ConcurrentUpdateError()
            time.sleep(0.05)

    def _release_lock(self, owner):
        try:
            if self.cache.get(self.lock_key) == owner:
                self.cache.delete(self.lock_key)
        except Exception:
            # lock expires by itself after lock_timeout
            logger.warning("Could not release lock '%s'", self.lock_key, exc_info=True)


def _store_settings():
    options = {
        'REDIS_URL': '',
        'CACHE_ALIAS': 'default',
        'KEY': DEFAULT_STORE_KEY,
        'COMPARE_AND_SET': False,
        'LOCK_TIMEOUT': 5,
    }
    options.update(getattr(settings, 'WEEKEND_STORE', {}))
    return options


@functools.lru_cache(maxsize=None)
def _redis_client(url):
    # One connection pool per URL for the life of the process
    return redis.Redis.from_url(url, decode_responses=True)


def get_document_store() -> DocumentStore:
    """Build the store configured by the ``WEEKEND_STORE`` setting."""
    options = _store_settings()
    if options['REDIS_URL']:
        return RedisDocumentStore(
            _redis_client(options['REDIS_URL']),
            key=options['KEY'],
            compare_and_set=options['COMPARE_AND_SET'],
        )
    return CacheDocumentStore(
        caches[options['CACHE_ALIAS']],
        key=options['KEY'],
        compare_and_set=options['COMPARE_AND_SET'],
        lock_timeout=options['LOCK_TIMEOUT'],
    )


def store_status(store=None) -> dict:
    """
    Describe the configured backend for the health check.

    Raises:
        DocumentStoreError: If the backend cannot be reached.
    """
    store = store or get_document_store()
    return {
        'backend': store.backend_name,
        'key': store.key,
        'compareAndSet': store.use_compare_and_set,
        'hasData': store.exists(),
    }
