"""
Settlement Module
=================

Turns the expense list into a short list of "who pays whom" transfers.

Functions:
    compute_balances: Net balance per participant, in cents.
    compute_settlements: Greedy debtor/creditor matching on those balances.
    get_settlement_summary: Both of the above for the stored document.

Algorithm:
    1. Every participant starts at 0.
    2. For each expense the split group is ``split_between``, or all
       participants when that is empty. Expenses with an empty split group
       are skipped. The payer is credited the full amount and every member
       of the split group (the payer too, if included) is debited
       ``round(amount / len(group))``.
    3. Balances below -1 cent are debtors, above +1 cent creditors; the
       rest count as settled (absorbs rounding drift).
    4. Walk both lists in balance order, transferring
       ``min(debtor owes, creditor is owed)`` each step and moving past a
       party once less than 2 cents remain for them.

Example:
    Three people, one dinner of 30.00 paid by Anna::

        >>> dinner = Expense(participant_id='anna', participant_name='Anna',
        ...                  description='Dinner', amount=3000,
        ...                  split_between=['anna', 'bram', 'cas'])
        >>> compute_settlements([dinner], ['anna', 'bram', 'cas'])
        [Settlement(debtor_id='bram', creditor_id='anna', amount=1000),
         Settlement(debtor_id='cas', creditor_id='anna', amount=1000)]

Note:
    Every step exhausts a debtor or a creditor, so there are at most
    ``len(debtors) + len(creditors) - 1`` transfers. That is usually, but
    not always, the smallest possible number.
    Rounding each share can leave up to one cent per split member
    unaccounted; that cent is not redistributed.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from apps.weekend.models import Expense
from apps.weekend.store import DocumentStore, get_document_store

# Within this many cents of zero a balance counts as settled
SETTLED_TOLERANCE = 1
# A party with less than this left is done
MIN_OUTSTANDING = 2


@dataclass
class Settlement:
    """One transfer: ``debtor_id`` pays ``creditor_id`` ``amount`` cents."""

    debtor_id: str
    creditor_id: str
    amount: int

    def to_dict(self) -> Dict:
        return {'from': self.debtor_id, 'to': self.creditor_id, 'amount': self.amount}


def split_share(amount: int, group_size: int) -> int:
    """Per-person share in whole cents, halves rounded up."""
    share = Decimal(amount) / Decimal(group_size)
    return int(share.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def compute_balances(
    expenses: Iterable[Expense],
    participant_ids: List[str]
) -> Dict[str, int]:
    """
    Net balance per participant in cents (paid minus owed).

    The result is ordered: ``participant_ids`` first in the given order,
    followed by any other ids met in the expenses (e.g. a payer who has
    since left), in the order they were first seen.

    Args:
        expenses: Expenses to settle
        participant_ids: Current participants; also the split group of
            expenses without ``split_between``

    Returns:
        dict mapping participant id to balance; positive means owed money
    """
    balances = {participant_id: 0 for participant_id in participant_ids}

    for expense in expenses:
        group = expense.split_between or participant_ids
        if not group:
            continue

        share = split_share(expense.amount, len(group))
        balances[expense.participant_id] = balances.get(expense.participant_id, 0) + expense.amount
        for member_id in group:
            balances[member_id] = balances.get(member_id, 0) - share

    return balances


def compute_settlements(
    expenses: Iterable[Expense],
    participant_ids: List[str]
) -> List[Settlement]:
    """
    Transfers that bring every balance back to (nearly) zero.

    Debtors and creditors are matched in the order of
    ``compute_balances``, so the result is deterministic for a given
    participant order. Never raises; degenerate input gives ``[]``.

    Args:
        expenses: Expenses to settle
        participant_ids: Current participants, in display order

    Returns:
        list[Settlement], every amount > 0
    """
    balances = compute_balances(expenses, participant_ids)

    debtors = [[pid, -balance] for pid, balance in balances.items() if balance < -SETTLED_TOLERANCE]
    creditors = [[pid, balance] for pid, balance in balances.items() if balance > SETTLED_TOLERANCE]

    settlements = []
    di = ci = 0
    while di < len(debtors) and ci < len(creditors):
        debtor, creditor = debtors[di], creditors[ci]
        transfer = min(debtor[1], creditor[1])

        if transfer > 0:
            settlements.append(Settlement(debtor_id=debtor[0], creditor_id=creditor[0], amount=transfer))

        debtor[1] -= transfer
        creditor[1] -= transfer

        if debtor[1] < MIN_OUTSTANDING:
            di += 1
        if creditor[1] < MIN_OUTSTANDING:
            ci += 1

    return settlements


def get_settlement_summary(*, store: Optional[DocumentStore] = None) -> Dict:
    """
    Balances and settlements for the stored weekend.

    Returns:
        dict with:
            - balances (list[dict]): ``{'participantId', 'balance'}`` in
              participant order
            - settlements (list[Settlement])
            - total_spent (int): sum of all expense amounts in cents
    """
    store = store or get_document_store()
    data = store.load()
    participant_ids = data.participant_ids()

    balances = compute_balances(data.expenses, participant_ids)
    return {
        'balances': [
            {'participantId': pid, 'balance': balance}
            for pid, balance in balances.items()
        ],
        'settlements': compute_settlements(data.expenses, participant_ids),
        'total_spent': sum(e.amount for e in data.expenses),
    }
