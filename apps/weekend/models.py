# ==========================================
# apps/weekend/models.py
# ==========================================

"""
Entities of the shared weekend document.

Nothing here is an ORM table: the whole event lives in one JSON document
(see ``apps.weekend.store``). Each dataclass converts to and from the
camelCase dict shape that is persisted and sent over the wire.
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List

from django.db import models


class WishCategory(models.TextChoices):
    FOOD = 'eten', 'Eten'
    DRINKS = 'drinken', 'Drinken'
    OTHER = 'overig', 'Overig'


class WeekendDay(models.TextChoices):
    FRIDAY = 'Vrijdag', 'Vrijdag'
    SATURDAY = 'Zaterdag', 'Zaterdag'
    SUNDAY = 'Zondag', 'Zondag'


def new_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Participant:
    """Someone who joined the weekend."""

    name: str
    emoji: str
    id: str = field(default_factory=new_id)
    joined_at: int = field(default_factory=now_ms)
    email: str = ''

    def to_dict(self) -> Dict:
        data = {
            'id': self.id,
            'name': self.name,
            'emoji': self.emoji,
            'joinedAt': self.joined_at,
        }
        if self.email:
            data['email'] = self.email
        return data

    @staticmethod
    def from_dict(d: Dict) -> 'Participant':
        return Participant(
            id=d['id'],
            name=d.get('name', ''),
            emoji=d.get('emoji', ''),
            joined_at=d.get('joinedAt', 0),
            email=d.get('email', '') or '',
        )


@dataclass
class Wish:
    """Food, drink or other wish. ``participant_name`` is a snapshot."""

    participant_id: str
    participant_name: str
    category: str
    text: str
    id: str = field(default_factory=new_id)
    created_at: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'participantId': self.participant_id,
            'participantName': self.participant_name,
            'category': self.category,
            'text': self.text,
            'createdAt': self.created_at,
        }

    @staticmethod
    def from_dict(d: Dict) -> 'Wish':
        return Wish(
            id=d['id'],
            participant_id=d.get('participantId', ''),
            participant_name=d.get('participantName', ''),
            category=d.get('category', WishCategory.OTHER.value),
            text=d.get('text', ''),
            created_at=d.get('createdAt', 0),
        )


@dataclass
class Activity:
    """
    Proposed activity.

    ``votes`` holds participant ids in the order the votes were cast;
    each id appears at most once.
    """

    participant_id: str
    participant_name: str
    title: str
    description: str = ''
    votes: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    created_at: int = field(default_factory=now_ms)

    def has_vote_from(self, participant_id: str) -> bool:
        return participant_id in self.votes

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'participantId': self.participant_id,
            'participantName': self.participant_name,
            'title': self.title,
            'description': self.description,
            'votes': list(self.votes),
            'createdAt': self.created_at,
        }

    @staticmethod
    def from_dict(d: Dict) -> 'Activity':
        return Activity(
            id=d['id'],
            participant_id=d.get('participantId', ''),
            participant_name=d.get('participantName', ''),
            title=d.get('title', ''),
            description=d.get('description', '') or '',
            votes=list(d.get('votes', []) or []),
            created_at=d.get('createdAt', 0),
        )


@dataclass
class PackItem:
    """Packing list entry. ``assigned_to`` is a display name, may be empty."""

    item: str
    added_by: str
    assigned_to: str = ''
    assigned_to_id: str = ''
    checked: bool = False
    id: str = field(default_factory=new_id)

    def unassign(self):
        self.assigned_to = ''
        self.assigned_to_id = ''

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'item': self.item,
            'assignedTo': self.assigned_to,
            'assignedToId': self.assigned_to_id,
            'checked': self.checked,
            'addedBy': self.added_by,
        }

    @staticmethod
    def from_dict(d: Dict) -> 'PackItem':
        return PackItem(
            id=d['id'],
            item=d.get('item', ''),
            added_by=d.get('addedBy', ''),
            assigned_to=d.get('assignedTo', '') or '',
            assigned_to_id=d.get('assignedToId', '') or '',
            checked=bool(d.get('checked', False)),
        )


@dataclass
class Expense:
    """
    Shared expense paid by one participant.

    Fields:
      - amount: integer cents, never a float
      - split_between: participant ids sharing the cost; empty means
        everyone who is a participant at settlement time
    """

    participant_id: str
    participant_name: str
    description: str
    amount: int
    split_between: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    created_at: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'participantId': self.participant_id,
            'participantName': self.participant_name,
            'description': self.description,
            'amount': self.amount,
            'splitBetween': list(self.split_between),
            'createdAt': self.created_at,
        }

    @staticmethod
    def from_dict(d: Dict) -> 'Expense':
        return Expense(
            id=d['id'],
            participant_id=d.get('participantId', ''),
            participant_name=d.get('participantName', ''),
            description=d.get('description', ''),
            amount=int(d.get('amount', 0)),
            split_between=list(d.get('splitBetween', []) or []),
            created_at=d.get('createdAt', 0),
        )


@dataclass
class ScheduleItem:
    """Programme entry; ``time`` is ``HH:MM`` in 24-hour notation."""

    day: str
    time: str
    activity: str
    added_by: str
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'day': self.day,
            'time': self.time,
            'activity': self.activity,
            'addedBy': self.added_by,
        }

    @staticmethod
    def from_dict(d: Dict) -> 'ScheduleItem':
        return ScheduleItem(
            id=d['id'],
            day=d.get('day', ''),
            time=d.get('time', ''),
            activity=d.get('activity', ''),
            added_by=d.get('addedBy', ''),
        )


@dataclass
class WeekendData:
    """The single document holding every collection of the event."""

    participants: List[Participant] = field(default_factory=list)
    wishes: List[Wish] = field(default_factory=list)
    activities: List[Activity] = field(default_factory=list)
    pack_list: List[PackItem] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    schedule: List[ScheduleItem] = field(default_factory=list)

    @staticmethod
    def empty() -> 'WeekendData':
        return WeekendData()

    def participant_ids(self) -> List[str]:
        return [p.id for p in self.participants]

    def find_activity(self, activity_id: str):
        return next((a for a in self.activities if a.id == activity_id), None)

    def find_pack_item(self, item_id: str):
        return next((p for p in self.pack_list if p.id == item_id), None)

    def find_participant_by_email(self, email: str):
        email = email.lower()
        return next(
            (p for p in self.participants if p.email and p.email.lower() == email),
            None
        )

    def to_dict(self) -> Dict:
        return {
            'participants': [p.to_dict() for p in self.participants],
            'wishes': [w.to_dict() for w in self.wishes],
            'activities': [a.to_dict() for a in self.activities],
            'packList': [p.to_dict() for p in self.pack_list],
            'expenses': [e.to_dict() for e in self.expenses],
            'schedule': [s.to_dict() for s in self.schedule],
        }

    @staticmethod
    def from_dict(d: Dict) -> 'WeekendData':
        """Build from the persisted shape; missing collections count as empty."""
        return WeekendData(
            participants=[Participant.from_dict(x) for x in d.get('participants') or []],
            wishes=[Wish.from_dict(x) for x in d.get('wishes') or []],
            activities=[Activity.from_dict(x) for x in d.get('activities') or []],
            pack_list=[PackItem.from_dict(x) for x in d.get('packList') or []],
            expenses=[Expense.from_dict(x) for x in d.get('expenses') or []],
            schedule=[ScheduleItem.from_dict(x) for x in d.get('schedule') or []],
        )
