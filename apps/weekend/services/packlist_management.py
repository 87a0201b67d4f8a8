"""
Pack list service.

Items to bring, who brings them, and whether they are packed.
"""

import logging
from typing import Optional

from apps.weekend.models import PackItem
from apps.weekend.store import DocumentStore, get_document_store

from .exceptions import PackItemNotFoundError

logger = logging.getLogger(__name__)

_UNSET = object()


def add_pack_item(
    *,
    item: str,
    added_by: str,
    store: Optional[DocumentStore] = None
) -> PackItem:
    """
    Add an unassigned, unchecked item to the pack list.

    Args:
        item: What to bring
        added_by: Name of whoever added it
        store: Document store (defaults to the configured one)

    Returns:
        The created PackItem
    """
    store = store or get_document_store()
    pack_item = PackItem(item=item, added_by=added_by)

    with store.editing() as data:
        data.pack_list.append(pack_item)

    logger.info("Pack item %s added", pack_item.id)
    return pack_item


def update_pack_item(
    *,
    item_id: str,
    assigned_to=_UNSET,
    assigned_to_id=_UNSET,
    checked=_UNSET,
    store: Optional[DocumentStore] = None
) -> PackItem:
    """
    Patch a pack item in place.

    Only the fields that are passed change; everything else keeps its
    current value. Pass an empty string to clear an assignment.

    Args:
        item_id: Id of the pack item
        assigned_to: New assignee name
        assigned_to_id: New assignee participant id
        checked: New packed state
        store: Document store (defaults to the configured one)

    Returns:
        The updated PackItem

    Raises:
        PackItemNotFoundError: If no pack item has this id (nothing is written)
    """
    store = store or get_document_store()

    with store.editing() as data:
        pack_item = data.find_pack_item(item_id)
        if pack_item is None:
            raise PackItemNotFoundError("Pack item not found")

        if assigned_to is not _UNSET:
            pack_item.assigned_to = assigned_to
        if assigned_to_id is not _UNSET:
            pack_item.assigned_to_id = assigned_to_id
        if checked is not _UNSET:
            pack_item.checked = bool(checked)

    return pack_item


def remove_pack_item(*, item_id: str, store: Optional[DocumentStore] = None) -> None:
    """Remove a pack item; unknown ids are ignored."""
    store = store or get_document_store()

    with store.editing() as data:
        data.pack_list = [p for p in data.pack_list if p.id != item_id]

    logger.info("Pack item %s removed", item_id)
