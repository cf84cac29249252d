"""
Notification endpoints.

Administrators see every notification and may scope bulk actions with
``user_id``; other staff only ever see and touch their own.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes

from ..models import Notification
from ..permissions import ADMIN_ROLES, IsManagerRole, IsStaffMember, ReadOnly
from ..responses import created, ok
from ..serializers.notifications import (
    NotificationQuerySerializer,
    NotificationScopeSerializer,
    NotificationSerializer,
    NotificationUpdateSerializer,
)
from ..services import notifications as notification_service


def _scope(request, requested_user_id=None):
    """The staff id a request is limited to, or ``None`` for everyone."""
    if request.user.role_name in ADMIN_ROLES:
        return requested_user_id
    return request.user.id


def _get_visible(request, pk: int) -> Notification:
    qs = Notification.objects.all()
    staff_id = _scope(request)
    if staff_id is not None:
        qs = qs.filter(staff_id=staff_id)
    return get_object_or_404(qs, pk=pk)


@api_view(['GET', 'POST'])
@permission_classes([IsStaffMember, IsManagerRole | ReadOnly])
def notifications(request):
    if request.method == 'GET':
        q = NotificationQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        vd = q.validated_data
        qs = notification_service.list_notifications(
            staff_id=_scope(request, vd.get('user_id')),
            is_read=vd.get('is_read'),
            type=vd.get('type'),
        )
        return ok([notification_service.format_notification(n) for n in qs])

    s = NotificationSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    notification = Notification.objects.create(
        staff=vd['staff'],
        title=vd['title'],
        message=vd['message'],
        type=vd.get('type') or 'general',
        related_id=vd.get('related_id'),
    )
    return created(notification_service.format_notification(notification), 'Notification created successfully')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaffMember])
def notification_detail(request, pk: int):
    notification = _get_visible(request, pk)
    if request.method == 'GET':
        return ok(notification_service.format_notification(notification))

    if request.method == 'PUT':
        s = NotificationUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        notification.is_read = s.validated_data['is_read']
        notification.save(update_fields=['is_read', 'updated_at'])
        return ok(notification_service.format_notification(notification), 'Notification updated successfully')

    notification.delete()
    return ok(message='Notification deleted successfully')


@api_view(['POST'])
@permission_classes([IsStaffMember])
def mark_notification_read(request, pk: int):
    notification_service.mark_read(_get_visible(request, pk))
    return ok(message='Notification marked as read')


@api_view(['POST'])
@permission_classes([IsStaffMember])
def mark_all_notifications_read(request):
    s = NotificationScopeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    count = notification_service.mark_all_read(staff_id=_scope(request, s.validated_data.get('user_id')))
    return ok({'count': count}, f'Marked {count} notifications as read')


@api_view(['POST'])
@permission_classes([IsStaffMember])
def clear_read_notifications(request):
    s = NotificationScopeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    count = notification_service.clear_read(staff_id=_scope(request, s.validated_data.get('user_id')))
    return ok({'count': count}, f'Deleted {count} read notifications')


@api_view(['GET'])
@permission_classes([IsStaffMember])
def notification_stats(request):
    q = NotificationScopeSerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return ok(notification_service.notification_stats(staff_id=_scope(request, q.validated_data.get('user_id'))))
