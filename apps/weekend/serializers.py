from rest_framework import serializers

from .models import WishCategory


# =============================================================================
# Input Serializers
# =============================================================================
#
# Field names follow the JSON bodies the planner UI sends (camelCase).
# CharFields trim whitespace and reject blanks, so "required" also means
# "non-empty".


class CentsField(serializers.IntegerField):
    """
    Whole cents sent as a JSON number.

    Unlike a plain IntegerField, numeric strings and booleans are refused
    and so is any fraction of a cent; ``12.0`` is read as 12.
    """

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail('invalid')
        if isinstance(data, float) and not data.is_integer():
            self.fail('invalid')
        return super().to_internal_value(data)


class IdInputSerializer(serializers.Serializer):
    """Body of every DELETE: ``{"id": ...}``."""

    id = serializers.CharField(max_length=64)


class ParticipantCreateSerializer(serializers.Serializer):
    """
    Validate input for joining the weekend.

    Fields:
        name (str): Display name
        emoji (str): Avatar emoji
        email (str): Optional; doubles as login key
    """

    name = serializers.CharField(max_length=100)
    emoji = serializers.CharField(max_length=16)
    email = serializers.EmailField(required=False, allow_blank=True)


class WishCreateSerializer(serializers.Serializer):
    participantId = serializers.CharField(max_length=64)
    participantName = serializers.CharField(max_length=100)
    category = serializers.ChoiceField(choices=WishCategory.choices)
    text = serializers.CharField(max_length=500)


class ActivityCreateSerializer(serializers.Serializer):
    participantId = serializers.CharField(max_length=64)
    participantName = serializers.CharField(max_length=100)
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(
        max_length=2000, required=False, allow_blank=True, default=''
    )


class VoteToggleSerializer(serializers.Serializer):
    """Validate input for toggling a vote on an activity."""

    activityId = serializers.CharField(max_length=64)
    participantId = serializers.CharField(max_length=64)


class PackItemCreateSerializer(serializers.Serializer):
    item = serializers.CharField(max_length=200)
    addedBy = serializers.CharField(max_length=100)


class PackItemUpdateSerializer(serializers.Serializer):
    """
    Validate a pack item patch.

    Only ``id`` is required. Fields left out of the body are left out of
    ``validated_data`` too, so the item keeps its current values for them.
    """

    id = serializers.CharField(max_length=64)
    assignedTo = serializers.CharField(max_length=100, required=False, allow_blank=True)
    assignedToId = serializers.CharField(max_length=64, required=False, allow_blank=True)
    checked = serializers.BooleanField(required=False)


class ExpenseCreateSerializer(serializers.Serializer):
    """
    Validate input for logging an expense.

    Fields:
        participantId (str): Payer id
        participantName (str): Payer name snapshot
        description (str): What was paid for
        amount (int): Cents, non-negative
        splitBetween (list[str]): Non-empty list of participant ids
    """

    participantId = serializers.CharField(max_length=64)
    participantName = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=200)
    amount = CentsField(min_value=0)
    splitBetween = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
    )


class ScheduleItemCreateSerializer(serializers.Serializer):
    day = serializers.CharField(max_length=32)
    time = serializers.RegexField(
        r'^([01]\d|2[0-3]):[0-5]\d$',
        error_messages={'invalid': 'Enter a time as HH:MM (24-hour).'},
    )
    activity = serializers.CharField(max_length=200)
    addedBy = serializers.CharField(max_length=100)


# =============================================================================
# Output Serializers
# =============================================================================


class ParticipantSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    emoji = serializers.CharField(read_only=True)
    joinedAt = serializers.IntegerField(source='joined_at', read_only=True)
    email = serializers.CharField(read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not data.get('email'):
            data.pop('email', None)
        return data


class WishSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    participantId = serializers.CharField(source='participant_id', read_only=True)
    participantName = serializers.CharField(source='participant_name', read_only=True)
    category = serializers.CharField(read_only=True)
    text = serializers.CharField(read_only=True)
    createdAt = serializers.IntegerField(source='created_at', read_only=True)


class ActivitySerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    participantId = serializers.CharField(source='participant_id', read_only=True)
    participantName = serializers.CharField(source='participant_name', read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    votes = serializers.ListField(child=serializers.CharField(), read_only=True)
    createdAt = serializers.IntegerField(source='created_at', read_only=True)


class PackItemSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    item = serializers.CharField(read_only=True)
    assignedTo = serializers.CharField(source='assigned_to', read_only=True)
    assignedToId = serializers.CharField(source='assigned_to_id', read_only=True)
    checked = serializers.BooleanField(read_only=True)
    addedBy = serializers.CharField(source='added_by', read_only=True)


class ExpenseSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    participantId = serializers.CharField(source='participant_id', read_only=True)
    participantName = serializers.CharField(source='participant_name', read_only=True)
    description = serializers.CharField(read_only=True)
    amount = serializers.IntegerField(read_only=True)
    splitBetween = serializers.ListField(
        source='split_between', child=serializers.CharField(), read_only=True
    )
    createdAt = serializers.IntegerField(source='created_at', read_only=True)


class ScheduleItemSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    day = serializers.CharField(read_only=True)
    time = serializers.CharField(read_only=True)
    activity = serializers.CharField(read_only=True)
    addedBy = serializers.CharField(source='added_by', read_only=True)


class WeekendDataSerializer(serializers.Serializer):
    """The whole document, as polled by the UI."""

    participants = ParticipantSerializer(many=True, read_only=True)
    wishes = WishSerializer(many=True, read_only=True)
    activities = ActivitySerializer(many=True, read_only=True)
    packList = PackItemSerializer(source='pack_list', many=True, read_only=True)
    expenses = ExpenseSerializer(many=True, read_only=True)
    schedule = ScheduleItemSerializer(many=True, read_only=True)


class SuccessSerializer(serializers.Serializer):
    success = serializers.BooleanField(read_only=True)


class BalanceSerializer(serializers.Serializer):
    participantId = serializers.CharField(read_only=True)
    balance = serializers.IntegerField(read_only=True)


class SettlementSerializer(serializers.Serializer):
    """One transfer; ``from``/``to`` are participant ids."""

    def get_fields(self):
        # 'from' is a keyword, so the fields are named here
        return {
            'from': serializers.CharField(source='debtor_id', read_only=True),
            'to': serializers.CharField(source='creditor_id', read_only=True),
            'amount': serializers.IntegerField(read_only=True),
        }


class SettlementSummarySerializer(serializers.Serializer):
    balances = BalanceSerializer(many=True, read_only=True)
    settlements = SettlementSerializer(many=True, read_only=True)
    totalSpent = serializers.IntegerField(source='total_spent', read_only=True)
