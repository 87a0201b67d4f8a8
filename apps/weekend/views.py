import functools
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .exceptions import DocumentStoreError
from .serializers import (
    IdInputSerializer,
    ParticipantCreateSerializer,
    WishCreateSerializer,
    ActivityCreateSerializer,
    VoteToggleSerializer,
    PackItemCreateSerializer,
    PackItemUpdateSerializer,
    ExpenseCreateSerializer,
    ScheduleItemCreateSerializer,
    ParticipantSerializer,
    WishSerializer,
    ActivitySerializer,
    PackItemSerializer,
    ExpenseSerializer,
    ScheduleItemSerializer,
    WeekendDataSerializer,
    SuccessSerializer,
    SettlementSummarySerializer,
)
from .services import (
    get_weekend_data,
    add_participant,
    remove_participant,
    add_wish,
    remove_wish,
    add_activity,
    toggle_vote,
    remove_activity,
    add_pack_item,
    update_pack_item,
    remove_pack_item,
    add_expense,
    remove_expense,
    add_schedule_item,
    remove_schedule_item,
    get_settlement_summary,
    # Exceptions
    ActivityNotFoundError,
    PackItemNotFoundError,
)

logger = logging.getLogger(__name__)


def store_failure(message):
    """
    Turn a DocumentStoreError raised by the handler into a logged 500.

    The client only sees ``message``; the log gets the method, path and
    traceback.
    """
    def decorator(handler):
        @functools.wraps(handler)
        def wrapper(view, request, *args, **kwargs):
            try:
                return handler(view, request, *args, **kwargs)
            except DocumentStoreError:
                logger.exception("%s %s failed", request.method, request.path)
                return Response(
                    {'error': message},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR
                )
        return wrapper
    return decorator


def _delete_by_id(request, remove, id_kwarg):
    serializer = IdInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    remove(**{id_kwarg: serializer.validated_data['id']})
    return Response({'success': True})


class WeekendDataView(APIView):
    """Whole weekend document, polled by the UI."""

    @extend_schema(responses={200: WeekendDataSerializer}, tags=['weekend'])
    @store_failure('Failed to load data')
    def get(self, request):
        data = get_weekend_data()
        return Response(WeekendDataSerializer(data).data)


class ParticipantView(APIView):
    """
    Join and leave.

    post: Join (201), or log back in by email (200 with the existing participant)
    delete: Leave; wishes, activities and expenses go too
    """

    @extend_schema(request=ParticipantCreateSerializer, responses={201: ParticipantSerializer, 200: ParticipantSerializer}, tags=['participants'])
    @store_failure('Failed to add participant')
    def post(self, request):
        serializer = ParticipantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        participant, created = add_participant(
            name=serializer.validated_data['name'],
            emoji=serializer.validated_data['emoji'],
            email=serializer.validated_data.get('email', ''),
        )

        return Response(
            ParticipantSerializer(participant).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    @extend_schema(request=IdInputSerializer, responses={200: SuccessSerializer}, tags=['participants'])
    @store_failure('Failed to remove participant')
    def delete(self, request):
        return _delete_by_id(request, remove_participant, 'participant_id')


class WishView(APIView):
    """Add and remove wishes."""

    @extend_schema(request=WishCreateSerializer, responses={201: WishSerializer}, tags=['wishes'])
    @store_failure('Failed to add wish')
    def post(self, request):
        serializer = WishCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        wish = add_wish(
            participant_id=serializer.validated_data['participantId'],
            participant_name=serializer.validated_data['participantName'],
            category=serializer.validated_data['category'],
            text=serializer.validated_data['text'],
        )

        return Response(WishSerializer(wish).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=IdInputSerializer, responses={200: SuccessSerializer}, tags=['wishes'])
    @store_failure('Failed to remove wish')
    def delete(self, request):
        return _delete_by_id(request, remove_wish, 'wish_id')


class ActivityView(APIView):
    """
    Activities and votes.

    post: Propose an activity
    put: Toggle a participant's vote
    delete: Remove an activity
    """

    @extend_schema(request=ActivityCreateSerializer, responses={201: ActivitySerializer}, tags=['activities'])
    @store_failure('Failed to add activity')
    def post(self, request):
        serializer = ActivityCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        activity = add_activity(
            participant_id=serializer.validated_data['participantId'],
            participant_name=serializer.validated_data['participantName'],
            title=serializer.validated_data['title'],
            description=serializer.validated_data.get('description', ''),
        )

        return Response(ActivitySerializer(activity).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=VoteToggleSerializer, responses={200: ActivitySerializer}, tags=['activities'])
    @store_failure('Failed to toggle vote')
    def put(self, request):
        serializer = VoteToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            activity = toggle_vote(
                activity_id=serializer.validated_data['activityId'],
                participant_id=serializer.validated_data['participantId'],
            )
        except ActivityNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ActivitySerializer(activity).data)

    @extend_schema(request=IdInputSerializer, responses={200: SuccessSerializer}, tags=['activities'])
    @store_failure('Failed to remove activity')
    def delete(self, request):
        return _delete_by_id(request, remove_activity, 'activity_id')


class PackListView(APIView):
    """
    Pack list.

    post: Add an item
    put: Assign, unassign or (un)check an item
    delete: Remove an item
    """

    @extend_schema(request=PackItemCreateSerializer, responses={201: PackItemSerializer}, tags=['packlist'])
    @store_failure('Failed to add pack item')
    def post(self, request):
        serializer = PackItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        pack_item = add_pack_item(
            item=serializer.validated_data['item'],
            added_by=serializer.validated_data['addedBy'],
        )

        return Response(PackItemSerializer(pack_item).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PackItemUpdateSerializer, responses={200: PackItemSerializer}, tags=['packlist'])
    @store_failure('Failed to update pack item')
    def put(self, request):
        serializer = PackItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        changes = {}
        if 'assignedTo' in params:
            changes['assigned_to'] = params['assignedTo']
        if 'assignedToId' in params:
            changes['assigned_to_id'] = params['assignedToId']
        if 'checked' in params:
            changes['checked'] = params['checked']

        try:
            pack_item = update_pack_item(item_id=params['id'], **changes)
        except PackItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(PackItemSerializer(pack_item).data)

    @extend_schema(request=IdInputSerializer, responses={200: SuccessSerializer}, tags=['packlist'])
    @store_failure('Failed to remove pack item')
    def delete(self, request):
        return _delete_by_id(request, remove_pack_item, 'item_id')


class ExpenseView(APIView):
    """Add and remove expenses."""

    @extend_schema(request=ExpenseCreateSerializer, responses={201: ExpenseSerializer}, tags=['expenses'])
    @store_failure('Failed to add expense')
    def post(self, request):
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        expense = add_expense(
            participant_id=serializer.validated_data['participantId'],
            participant_name=serializer.validated_data['participantName'],
            description=serializer.validated_data['description'],
            amount=serializer.validated_data['amount'],
            split_between=serializer.validated_data['splitBetween'],
        )

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=IdInputSerializer, responses={200: SuccessSerializer}, tags=['expenses'])
    @store_failure('Failed to remove expense')
    def delete(self, request):
        return _delete_by_id(request, remove_expense, 'expense_id')


class ScheduleView(APIView):
    """Add and remove programme entries."""

    @extend_schema(request=ScheduleItemCreateSerializer, responses={201: ScheduleItemSerializer}, tags=['schedule'])
    @store_failure('Failed to add schedule item')
    def post(self, request):
        serializer = ScheduleItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = add_schedule_item(
            day=serializer.validated_data['day'],
            time=serializer.validated_data['time'],
            activity=serializer.validated_data['activity'],
            added_by=serializer.validated_data['addedBy'],
        )

        return Response(ScheduleItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=IdInputSerializer, responses={200: SuccessSerializer}, tags=['schedule'])
    @store_failure('Failed to remove schedule item')
    def delete(self, request):
        return _delete_by_id(request, remove_schedule_item, 'item_id')


class SettlementView(APIView):
    """Who pays whom to even out the expenses."""

    @extend_schema(responses={200: SettlementSummarySerializer}, tags=['expenses'])
    @store_failure('Failed to calculate settlements')
    def get(self, request):
        summary = get_settlement_summary()
        return Response(SettlementSummarySerializer(summary).data)
