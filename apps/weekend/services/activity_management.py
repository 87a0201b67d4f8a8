"""
Activity management service.

Proposing activities and voting on them.
"""

import logging
from typing import Optional

from apps.weekend.models import Activity
from apps.weekend.store import DocumentStore, get_document_store

from .exceptions import ActivityNotFoundError

logger = logging.getLogger(__name__)


def add_activity(
    *,
    participant_id: str,
    participant_name: str,
    title: str,
    description: str = '',
    store: Optional[DocumentStore] = None
) -> Activity:
    """
    Propose a new activity with no votes.

    Args:
        participant_id: Id of the proposing participant
        participant_name: Name to show with the proposal
        title: Short title
        description: Optional longer description
        store: Document store (defaults to the configured one)

    Returns:
        The created Activity
    """
    store = store or get_document_store()
    activity = Activity(
        participant_id=participant_id,
        participant_name=participant_name,
        title=title,
        description=description,
    )

    with store.editing() as data:
        data.activities.append(activity)

    logger.info("Activity %s proposed by %s", activity.id, participant_id)
    return activity


def toggle_vote(
    *,
    activity_id: str,
    participant_id: str,
    store: Optional[DocumentStore] = None
) -> Activity:
    """
    Add the participant's vote, or withdraw it if already cast.

    A withdrawn vote is removed without disturbing the order of the
    remaining votes; a new vote goes to the end. Toggling twice restores
    the original list.

    Args:
        activity_id: Id of the activity
        participant_id: Id of the voting participant
        store: Document store (defaults to the configured one)

    Returns:
        The updated Activity

    Raises:
        ActivityNotFoundError: If no activity has this id (nothing is written)
    """
    store = store or get_document_store()

    with store.editing() as data:
        activity = data.find_activity(activity_id)
        if activity is None:
            raise ActivityNotFoundError("Activity not found")

        if activity.has_vote_from(participant_id):
            activity.votes = [v for v in activity.votes if v != participant_id]
        else:
            activity.votes = activity.votes + [participant_id]

    return activity


def remove_activity(*, activity_id: str, store: Optional[DocumentStore] = None) -> None:
    """Remove an activity; unknown ids are ignored."""
    store = store or get_document_store()

    with store.editing() as data:
        data.activities = [a for a in data.activities if a.id != activity_id]

    logger.info("Activity %s removed", activity_id)
