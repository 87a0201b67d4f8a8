"""
Schedule service.

Day-by-day programme of the weekend.
"""

import logging
from typing import Optional

from apps.weekend.models import ScheduleItem
from apps.weekend.store import DocumentStore, get_document_store

logger = logging.getLogger(__name__)


def add_schedule_item(
    *,
    day: str,
    time: str,
    activity: str,
    added_by: str,
    store: Optional[DocumentStore] = None
) -> ScheduleItem:
    """
    Append an entry to the programme.

    Entries are stored in the order they were added; sorting by day and
    time is left to whoever displays them.

    Args:
        day: Day label, usually one of ``WeekendDay``
        time: ``HH:MM`` (24-hour)
        activity: What happens
        added_by: Name of whoever added it
        store: Document store (defaults to the configured one)

    Returns:
        The created ScheduleItem
    """
    store = store or get_document_store()
    item = ScheduleItem(day=day, time=time, activity=activity, added_by=added_by)

    with store.editing() as data:
        data.schedule.append(item)

    logger.info("Schedule item %s added for %s %s", item.id, day, time)
    return item


def remove_schedule_item(*, item_id: str, store: Optional[DocumentStore] = None) -> None:
    """Remove a schedule entry; unknown ids are ignored."""
    store = store or get_document_store()

    with store.editing() as data:
        data.schedule = [s for s in data.schedule if s.id != item_id]

    logger.info("Schedule item %s removed", item_id)
