"""
Weekend app services layer.

Services contain business logic and operate on the shared weekend
document through ``apps.weekend.store``. Every mutation is one
read-modify-write of the whole document.
"""

from .exceptions import (
    WeekendServiceError,
    ActivityNotFoundError,
    PackItemNotFoundError,
)

from .document import (
    get_weekend_data,
)

from .participant_management import (
    add_participant,
    remove_participant,
)

from .wish_management import (
    add_wish,
    remove_wish,
)

from .activity_management import (
    add_activity,
    toggle_vote,
    remove_activity,
)

from .packlist_management import (
    add_pack_item,
    update_pack_item,
    remove_pack_item,
)

from .expense_management import (
    add_expense,
    remove_expense,
)

from .schedule_management import (
    add_schedule_item,
    remove_schedule_item,
)

from .settlement import (
    Settlement,
    compute_balances,
    compute_settlements,
    get_settlement_summary,
)


__all__ = [
    # Exceptions
    'WeekendServiceError',
    'ActivityNotFoundError',
    'PackItemNotFoundError',

    # Document
    'get_weekend_data',

    # Participants
    'add_participant',
    'remove_participant',

    # Wishes
    'add_wish',
    'remove_wish',

    # Activities
    'add_activity',
    'toggle_vote',
    'remove_activity',

    # Pack list
    'add_pack_item',
    'update_pack_item',
    'remove_pack_item',

    # Expenses
    'add_expense',
    'remove_expense',

    # Schedule
    'add_schedule_item',
    'remove_schedule_item',

    # Settlement
    'Settlement',
    'compute_balances',
    'compute_settlements',
    'get_settlement_summary',
]
