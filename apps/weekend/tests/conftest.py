import pytest
from django.core.cache import caches
from rest_framework.test import APIClient

from apps.weekend.services import (
    add_participant,
    add_activity,
    add_pack_item,
    update_pack_item,
    add_wish,
    add_expense,
    toggle_vote,
)
from apps.weekend.store import CacheDocumentStore, get_document_store


@pytest.fixture(autouse=True)
def clear_weekend_store():
    """Start every test from an empty document."""
    caches['weekend'].clear()
    yield
    caches['weekend'].clear()


@pytest.fixture
def api_client():
    """Return an API client (no authentication in this app)."""
    return APIClient()


@pytest.fixture
def store():
    """The configured document store (in-process under pytest)."""
    return get_document_store()


@pytest.fixture
def cas_store():
    """Store on the same cache with compare-and-set switched on."""
    return CacheDocumentStore(caches['weekend'], compare_and_set=True)


@pytest.fixture
def anna(store):
    participant, _ = add_participant(name='Anna', emoji='🦊', email='anna@example.com', store=store)
    return participant


@pytest.fixture
def bram(store):
    participant, _ = add_participant(name='Bram', emoji='🐻', store=store)
    return participant


@pytest.fixture
def cas(store):
    participant, _ = add_participant(name='Cas', emoji='🐸', store=store)
    return participant


@pytest.fixture
def weekend(store, anna, bram, cas):
    """
    A weekend with some of everything.

    Anna owns a wish, an activity (voted on by Bram and Cas), an expense,
    and is assigned a pack item. Bram owns an activity Anna voted on.
    """
    anna_activity = add_activity(
        participant_id=anna.id,
        participant_name=anna.name,
        title='Kanoën',
        description='Op de rivier',
        store=store,
    )
    bram_activity = add_activity(
        participant_id=bram.id,
        participant_name=bram.name,
        title='Bordspellen',
        store=store,
    )
    toggle_vote(activity_id=anna_activity.id, participant_id=bram.id, store=store)
    toggle_vote(activity_id=anna_activity.id, participant_id=cas.id, store=store)
    toggle_vote(activity_id=bram_activity.id, participant_id=anna.id, store=store)
    toggle_vote(activity_id=bram_activity.id, participant_id=cas.id, store=store)

    add_wish(
        participant_id=anna.id,
        participant_name=anna.name,
        category='eten',
        text='Pannenkoeken',
        store=store,
    )
    add_wish(
        participant_id=bram.id,
        participant_name=bram.name,
        category='drinken',
        text='Speciaalbier',
        store=store,
    )

    tent = add_pack_item(item='Tent', added_by=bram.name, store=store)
    update_pack_item(item_id=tent.id, assigned_to=anna.name, assigned_to_id=anna.id, store=store)
    add_pack_item(item='Gasbrander', added_by=anna.name, store=store)

    add_expense(
        participant_id=anna.id,
        participant_name=anna.name,
        description='Boodschappen',
        amount=3000,
        split_between=[anna.id, bram.id, cas.id],
        store=store,
    )
    add_expense(
        participant_id=bram.id,
        participant_name=bram.name,
        description='Hout',
        amount=1200,
        split_between=[bram.id, cas.id],
        store=store,
    )
    return store.load()

