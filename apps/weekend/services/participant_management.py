"""
Participant management service.

Joining, logging back in by email, and leaving the weekend.
"""

import logging
from typing import Optional, Tuple

from apps.weekend.models import Participant, WeekendData
from apps.weekend.store import DocumentStore, get_document_store

logger = logging.getLogger(__name__)


def add_participant(
    *,
    name: str,
    emoji: str,
    email: str = '',
    store: Optional[DocumentStore] = None
) -> Tuple[Participant, bool]:
    """
    Add a participant, or log an existing one back in by email.

    When an email is given it is stored lower-cased and acts as the login
    key: if a participant with the same email (case-insensitive) already
    exists, that participant is returned unchanged and nothing is written.
    Without an email every call creates a new participant.

    Args:
        name: Display name
        emoji: Avatar emoji
        email: Optional login email
        store: Document store (defaults to the configured one)

    Returns:
        Tuple of (participant, created)
    """
    store = store or get_document_store()
    email = (email or '').strip().lower()

    if email:
        existing = store.load().find_participant_by_email(email)
        if existing is not None:
            logger.info("Participant %s logged back in", existing.id)
            return existing, False

    with store.editing() as data:
        # Re-check on the document that is about to be written
        existing = data.find_participant_by_email(email) if email else None
        if existing is not None:
            return existing, False

        participant = Participant(name=name, emoji=emoji, email=email)
        data.participants.append(participant)

    logger.info("Participant %s joined", participant.id)
    return participant, True


def _cascade_participant_removal(data: WeekendData, participant_id: str) -> None:
    data.wishes = [w for w in data.wishes if w.participant_id != participant_id]
    data.activities = [a for a in data.activities if a.participant_id != participant_id]
    data.expenses = [e for e in data.expenses if e.participant_id != participant_id]

    for item in data.pack_list:
        if item.assigned_to_id == participant_id:
            item.unassign()

    # Votes on activities that survive
    for activity in data.activities:
        if participant_id in activity.votes:
            activity.votes = [v for v in activity.votes if v != participant_id]


def remove_participant(
    *,
    participant_id: str,
    store: Optional[DocumentStore] = None
) -> None:
    """
    Remove a participant and everything that belongs to them.

    Their wishes, activities and expenses are deleted, pack items assigned
    to them become unassigned (the items stay), and their votes are
    withdrawn from the remaining activities. Removing an unknown id is a
    no-op.

    Args:
        participant_id: Id of the participant to remove
        store: Document store (defaults to the configured one)
    """
    store = store or get_document_store()

    with store.editing() as data:
        data.participants = [p for p in data.participants if p.id != participant_id]
        _cascade_participant_removal(data, participant_id)

    logger.info("Participant %s removed", participant_id)
