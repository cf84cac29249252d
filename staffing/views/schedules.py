"""
Shift roster endpoints.

Reads are open to staff; assigning, editing and removing shifts is for
administrators and department heads.  Double booking surfaces as a 422
from :mod:`staffing.services.roster`.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes

from ..models import ScheduleEntry
from ..permissions import IsManagerRole, IsStaffMember, ReadOnly
from ..responses import created, ok
from ..serializers.common import RangeQuerySerializer
from ..serializers.roster import ScheduleEntrySerializer, ScheduleQuerySerializer
from ..services import roster


@api_view(['GET', 'POST'])
@permission_classes([IsStaffMember, IsManagerRole | ReadOnly])
def schedules(request):
    if request.method == 'GET':
        q = ScheduleQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        filters = dict(q.validated_data)
        filters['staff_id'] = filters.pop('user_id', None)
        return ok([roster.format_entry(e) for e in roster.list_entries(**filters)])

    s = ScheduleEntrySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    entry = roster.create_entry(**s.validated_data)
    return created(roster.format_entry(entry), 'Schedule entry created successfully')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaffMember, IsManagerRole | ReadOnly])
def schedule_detail(request, pk: int):
    entry = get_object_or_404(ScheduleEntry.objects.select_related('staff__role', 'department', 'shift'), pk=pk)
    if request.method == 'GET':
        return ok(roster.format_entry(entry))

    if request.method == 'PUT':
        s = ScheduleEntrySerializer(entry, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        entry = roster.update_entry(entry, **s.validated_data)
        return ok(roster.format_entry(entry), 'Schedule entry updated successfully')

    roster.delete_entry(entry)
    return ok(message='Schedule entry deleted successfully')


@api_view(['GET'])
@permission_classes([IsStaffMember])
def schedule_stats(request):
    q = RangeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(roster.roster_stats(q.validated_data.get('start_date'), q.validated_data.get('end_date')))
