"""
Expense management service.

Logging what was paid and who shares in it. Amounts are integer cents.
"""

import logging
from typing import List, Optional

from apps.weekend.models import Expense
from apps.weekend.store import DocumentStore, get_document_store

logger = logging.getLogger(__name__)


def add_expense(
    *,
    participant_id: str,
    participant_name: str,
    description: str,
    amount: int,
    split_between: List[str],
    store: Optional[DocumentStore] = None
) -> Expense:
    """
    Record an expense paid by one participant.

    Args:
        participant_id: Id of the payer
        participant_name: Name to show with the expense
        description: What was paid for
        amount: Amount in cents (non-negative integer)
        split_between: Participant ids sharing the cost
        store: Document store (defaults to the configured one)

    Returns:
        The created Expense

    Raises:
        ValueError: If amount is negative
    """
    if amount < 0:
        raise ValueError("amount must be a non-negative number of cents")

    store = store or get_document_store()
    expense = Expense(
        participant_id=participant_id,
        participant_name=participant_name,
        description=description,
        amount=int(amount),
        split_between=list(split_between),
    )

    with store.editing() as data:
        data.expenses.append(expense)

    logger.info("Expense %s of %d cents added by %s", expense.id, expense.amount, participant_id)
    return expense


def remove_expense(*, expense_id: str, store: Optional[DocumentStore] = None) -> None:
    """Remove an expense; unknown ids are ignored."""
    store = store or get_document_store()

    with store.editing() as data:
        data.expenses = [e for e in data.expenses if e.id != expense_id]

    logger.info("Expense %s removed", expense_id)
