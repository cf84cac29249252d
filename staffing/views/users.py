"""
Staff directory endpoints (``/users``).

Listing and reading are open to any staff identity; creating, editing
and removing staff is reserved to administrators.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes

from ..models import StaffMember
from ..permissions import IsAdminRole, IsStaffMember, ReadOnly
from ..responses import created, ok
from ..serializers.staff import StaffQuerySerializer, StaffSerializer
from ..services import staff as staff_service


@api_view(['GET', 'POST'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def users(request):
    if request.method == 'GET':
        q = StaffQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = staff_service.list_staff(**q.validated_data)
        return ok([staff_service.format_staff(s) for s in qs])

    s = StaffSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    staff = staff_service.create_staff(**s.validated_data)
    return created(staff_service.format_staff(staff), 'User created successfully')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def user_detail(request, pk: int):
    staff = get_object_or_404(StaffMember.objects.select_related('role', 'specialty', 'department'), pk=pk)
    if request.method == 'GET':
        return ok(staff_service.format_staff(staff))

    if request.method == 'PUT':
        s = StaffSerializer(staff, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        changes = dict(s.validated_data)
        if changes.get('join_date', staff.join_date) is None:
            changes.pop('join_date')
        staff = staff_service.update_staff(staff, **changes)
        return ok(staff_service.format_staff(staff), 'User updated successfully')

    staff_service.delete_staff(staff)
    return ok(message='User deleted successfully')
