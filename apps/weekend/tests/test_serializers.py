import pytest

from apps.weekend.models import Activity, Participant
from apps.weekend.services.settlement import Settlement
from apps.weekend.serializers import (
    IdInputSerializer,
    ParticipantCreateSerializer,
    WishCreateSerializer,
    ActivityCreateSerializer,
    PackItemUpdateSerializer,
    ExpenseCreateSerializer,
    ScheduleItemCreateSerializer,
    ParticipantSerializer,
    ActivitySerializer,
    SettlementSerializer,
)


# =============================================================================
# Input Serializer Tests
# =============================================================================

class TestParticipantCreateSerializer:

    def test_email_is_optional(self):
        serializer = ParticipantCreateSerializer(data={'name': 'Anna', 'emoji': '🦊'})

        assert serializer.is_valid()
        assert 'email' not in serializer.validated_data

    def test_blank_name_is_rejected(self):
        serializer = ParticipantCreateSerializer(data={'name': '   ', 'emoji': '🦊'})

        assert not serializer.is_valid()
        assert 'name' in serializer.errors

    def test_invalid_email(self):
        serializer = ParticipantCreateSerializer(data={'name': 'Anna', 'emoji': '🦊', 'email': 'nope'})

        assert not serializer.is_valid()
        assert 'email' in serializer.errors


class TestWishCreateSerializer:

    @pytest.mark.parametrize('category', ['eten', 'drinken', 'overig'])
    def test_valid_categories(self, category):
        serializer = WishCreateSerializer(data={
            'participantId': 'p1',
            'participantName': 'Anna',
            'category': category,
            'text': 'Iets lekkers',
        })

        assert serializer.is_valid()

    def test_unknown_category(self):
        serializer = WishCreateSerializer(data={
            'participantId': 'p1',
            'participantName': 'Anna',
            'category': 'snoep',
            'text': 'Drop',
        })

        assert not serializer.is_valid()
        assert list(serializer.errors) == ['category']

    def test_missing_fields_are_all_named(self):
        serializer = WishCreateSerializer(data={})

        assert not serializer.is_valid()
        assert set(serializer.errors) == {'participantId', 'participantName', 'category', 'text'}


class TestActivityCreateSerializer:

    def test_description_defaults_to_empty(self):
        serializer = ActivityCreateSerializer(data={
            'participantId': 'p1',
            'participantName': 'Anna',
            'title': 'Kanoën',
        })

        assert serializer.is_valid()
        assert serializer.validated_data['description'] == ''

    def test_title_required(self):
        serializer = ActivityCreateSerializer(data={'participantId': 'p1', 'participantName': 'Anna'})

        assert not serializer.is_valid()
        assert 'title' in serializer.errors


class TestPackItemUpdateSerializer:

    def test_only_id_required(self):
        serializer = PackItemUpdateSerializer(data={'id': 'x'})

        assert serializer.is_valid()
        assert dict(serializer.validated_data) == {'id': 'x'}

    def test_blank_assignment_allowed(self):
        serializer = PackItemUpdateSerializer(data={'id': 'x', 'assignedTo': '', 'assignedToId': ''})

        assert serializer.is_valid()
        assert serializer.validated_data['assignedTo'] == ''

    def test_checked_must_be_boolean(self):
        serializer = PackItemUpdateSerializer(data={'id': 'x', 'checked': 'maybe'})

        assert not serializer.is_valid()
        assert 'checked' in serializer.errors

    def test_missing_id(self):
        serializer = PackItemUpdateSerializer(data={'checked': True})

        assert not serializer.is_valid()
        assert 'id' in serializer.errors


class TestExpenseCreateSerializer:

    def _data(self, **overrides):
        data = {
            'participantId': 'p1',
            'participantName': 'Anna',
            'description': 'Boodschappen',
            'amount': 2500,
            'splitBetween': ['p1', 'p2'],
        }
        data.update(overrides)
        return data

    def test_valid_expense(self):
        serializer = ExpenseCreateSerializer(data=self._data())

        assert serializer.is_valid()
        assert serializer.validated_data['amount'] == 2500

    def test_zero_amount_allowed(self):
        assert ExpenseCreateSerializer(data=self._data(amount=0)).is_valid()

    def test_negative_amount(self):
        serializer = ExpenseCreateSerializer(data=self._data(amount=-5))

        assert not serializer.is_valid()
        assert 'amount' in serializer.errors

    def test_fractional_amount(self):
        serializer = ExpenseCreateSerializer(data=self._data(amount=12.5))

        assert not serializer.is_valid()
        assert 'amount' in serializer.errors

    @pytest.mark.parametrize('amount', ['3000', '12.5', True, None, [3000]])
    def test_amount_must_be_a_number(self, amount):
        serializer = ExpenseCreateSerializer(data=self._data(amount=amount))

        assert not serializer.is_valid()
        assert 'amount' in serializer.errors

    def test_whole_float_amount_is_read_as_cents(self):
        serializer = ExpenseCreateSerializer(data=self._data(amount=12.0))

        assert serializer.is_valid()
        assert serializer.validated_data['amount'] == 12
        assert isinstance(serializer.validated_data['amount'], int)

    def test_empty_split(self):
        serializer = ExpenseCreateSerializer(data=self._data(splitBetween=[]))

        assert not serializer.is_valid()
        assert 'splitBetween' in serializer.errors

    def test_split_must_be_list(self):
        serializer = ExpenseCreateSerializer(data=self._data(splitBetween='p1'))

        assert not serializer.is_valid()
        assert 'splitBetween' in serializer.errors


class TestScheduleItemCreateSerializer:

    def _data(self, time):
        return {'day': 'Zaterdag', 'time': time, 'activity': 'Ontbijt', 'addedBy': 'Anna'}

    @pytest.mark.parametrize('time', ['00:00', '09:30', '23:59'])
    def test_valid_times(self, time):
        assert ScheduleItemCreateSerializer(data=self._data(time)).is_valid()

    @pytest.mark.parametrize('time', ['24:00', '9:30', '09:60', 'ochtend'])
    def test_invalid_times(self, time):
        serializer = ScheduleItemCreateSerializer(data=self._data(time))

        assert not serializer.is_valid()
        assert 'time' in serializer.errors

    def test_free_text_day(self):
        data = self._data('10:00')
        data['day'] = 'Maandag'

        assert ScheduleItemCreateSerializer(data=data).is_valid()


class TestIdInputSerializer:

    def test_missing_id(self):
        serializer = IdInputSerializer(data={})

        assert not serializer.is_valid()
        assert 'id' in serializer.errors


# =============================================================================
# Output Serializer Tests
# =============================================================================

class TestOutputSerializers:

    def test_participant_without_email_omits_it(self):
        participant = Participant(name='Anna', emoji='🦊', id='p1', joined_at=5)

        assert ParticipantSerializer(participant).data == {
            'id': 'p1',
            'name': 'Anna',
            'emoji': '🦊',
            'joinedAt': 5,
        }

    def test_activity_matches_stored_shape(self):
        activity = Activity(
            participant_id='p1',
            participant_name='Anna',
            title='Kanoën',
            votes=['p2'],
            id='a1',
            created_at=7,
        )

        assert ActivitySerializer(activity).data == activity.to_dict()

    def test_settlement_fields_are_declared(self):
        assert list(SettlementSerializer().fields) == ['from', 'to', 'amount']

    def test_settlement_uses_from_and_to(self):
        settlement = Settlement(debtor_id='p2', creditor_id='p1', amount=1000)

        assert SettlementSerializer(settlement).data == {'from': 'p2', 'to': 'p1', 'amount': 1000}
