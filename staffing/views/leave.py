"""
Leave ledger endpoints.

Staff submit leave for themselves; administrators and department heads
may file on behalf of others and are the only ones who can approve or
reject.  The approver recorded on a decision is always the caller.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import exceptions
from rest_framework.decorators import api_view, permission_classes

from ..models import LeaveRequest
from ..permissions import MANAGER_ROLES, IsManagerRole, IsStaffMember
from ..responses import created, ok
from ..serializers.leave import LeaveQuerySerializer, LeaveRequestSerializer, LeaveUpdateSerializer, RejectSerializer
from ..services import leave as leave_service


def _is_manager(request) -> bool:
    return request.user.role_name in MANAGER_ROLES


def _ensure_may_edit(request, leave: LeaveRequest) -> None:
    if leave.staff_id != request.user.id and not _is_manager(request):
        raise exceptions.PermissionDenied('You can only manage your own leave requests.')


@api_view(['GET', 'POST'])
@permission_classes([IsStaffMember])
def leave_requests(request):
    if request.method == 'GET':
        q = LeaveQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        filters = dict(q.validated_data)
        filters['staff_id'] = filters.pop('user_id', None)
        return ok([leave_service.format_leave(r) for r in leave_service.list_requests(**filters)])

    s = LeaveRequestSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    staff = data.pop('staff', None) or request.user.staff
    if staff.pk != request.user.id and not _is_manager(request):
        raise exceptions.PermissionDenied('You can only request leave for yourself.')
    leave = leave_service.submit_request(staff=staff, **data)
    return created(leave_service.format_leave(leave), 'Leave request submitted successfully')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaffMember])
def leave_request_detail(request, pk: int):
    leave = get_object_or_404(LeaveRequest.objects.select_related('staff__role', 'approved_by'), pk=pk)
    if request.method == 'GET':
        return ok(leave_service.format_leave(leave))

    _ensure_may_edit(request, leave)
    if request.method == 'PUT':
        s = LeaveUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        leave = leave_service.update_request(leave, **s.validated_data)
        return ok(leave_service.format_leave(leave), 'Leave request updated successfully')

    leave_service.delete_request(leave)
    return ok(message='Leave request deleted successfully')


@api_view(['POST'])
@permission_classes([IsManagerRole])
def approve_leave_request(request, pk: int):
    leave = get_object_or_404(LeaveRequest.objects.select_related('staff__role'), pk=pk)
    leave = leave_service.approve(leave, request.user.staff)
    return ok(leave_service.format_leave(leave), 'Leave request approved successfully')


@api_view(['POST'])
@permission_classes([IsManagerRole])
def reject_leave_request(request, pk: int):
    leave = get_object_or_404(LeaveRequest.objects.select_related('staff__role'), pk=pk)
    s = RejectSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    leave = leave_service.reject(leave, s.validated_data['rejection_reason'], request.user.staff)
    return ok(leave_service.format_leave(leave), 'Leave request rejected')


@api_view(['GET'])
@permission_classes([IsStaffMember])
def leave_request_stats(request):
    return ok(leave_service.leave_stats())
