"""
Wish management service.

Food, drink and other wishes for the weekend.
"""

import logging
from typing import Optional

from apps.weekend.models import Wish
from apps.weekend.store import DocumentStore, get_document_store

logger = logging.getLogger(__name__)


def add_wish(
    *,
    participant_id: str,
    participant_name: str,
    category: str,
    text: str,
    store: Optional[DocumentStore] = None
) -> Wish:
    """
    Append a wish to the list.

    The participant is not looked up; ``participant_name`` is stored as
    given and is not updated later.

    Args:
        participant_id: Id of the participant making the wish
        participant_name: Name to show with the wish
        category: One of ``WishCategory``
        text: The wish itself
        store: Document store (defaults to the configured one)

    Returns:
        The created Wish
    """
    store = store or get_document_store()
    wish = Wish(
        participant_id=participant_id,
        participant_name=participant_name,
        category=category,
        text=text,
    )

    with store.editing() as data:
        data.wishes.append(wish)

    logger.info("Wish %s added by %s", wish.id, participant_id)
    return wish


def remove_wish(*, wish_id: str, store: Optional[DocumentStore] = None) -> None:
    """Remove a wish; unknown ids are ignored."""
    store = store or get_document_store()

    with store.editing() as data:
        data.wishes = [w for w in data.wishes if w.id != wish_id]

    logger.info("Wish %s removed", wish_id)
