"""
Notification fan-out.

Notifications are a side channel: a failed insert is logged and
swallowed so the mutation that triggered it still succeeds.  Each write
runs in its own savepoint, which keeps a failed insert from poisoning
an enclosing transaction.  Callers invoke these helpers after their
own atomic block has finished.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.db import DatabaseError, transaction
from django.db.models import Count

from staffing.models import Notification, StaffMember

logger = logging.getLogger(__name__)


def notify(staff_id: int, title: str, message: str, type: str = 'general',
           related_id: Optional[int] = None) -> Optional[Notification]:
    try:
        with transaction.atomic():
            return Notification.objects.create(
                staff_id=staff_id, title=title, message=message, type=type, related_id=related_id,
            )
    except DatabaseError:
        logger.exception('Could not store notification %r for staff %s', title, staff_id)
        return None


def notify_many(staff_ids: Iterable[int], title: str, message: str, type: str = 'general',
                related_id: Optional[int] = None) -> int:
    sent = 0
    for staff_id in staff_ids:
        if notify(staff_id, title, message, type, related_id) is not None:
            sent += 1
    return sent


def notify_admins(title: str, message: str, type: str = 'general', *, exclude_id: Optional[int] = None) -> int:
    ids = StaffMember.objects.admins().values_list('id', flat=True)
    if exclude_id is not None:
        ids = ids.exclude(pk=exclude_id)
    return notify_many(list(ids), title, message, type)


def list_notifications(*, staff_id=None, is_read=None, type=None):
    qs = Notification.objects.select_related('staff')
    if staff_id is not None:
        qs = qs.filter(staff_id=staff_id)
    if is_read is not None:
        qs = qs.filter(is_read=is_read)
    if type:
        qs = qs.filter(type=type)
    return qs.order_by('-created_at', '-id')


def mark_read(notification: Notification) -> Notification:
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read', 'updated_at'])
    return notification


def mark_all_read(*, staff_id=None) -> int:
    qs = Notification.objects.filter(is_read=False)
    if staff_id is not None:
        qs = qs.filter(staff_id=staff_id)
    return qs.update(is_read=True)


def clear_read(*, staff_id=None) -> int:
    qs = Notification.objects.filter(is_read=True)
    if staff_id is not None:
        qs = qs.filter(staff_id=staff_id)
    deleted, _ = qs.delete()
    return deleted


def notification_stats(*, staff_id=None) -> dict:
    qs = Notification.objects.all()
    if staff_id is not None:
        qs = qs.filter(staff_id=staff_id)
    total = qs.count()
    unread = qs.filter(is_read=False).count()
    by_type = {row['type']: row['n'] for row in qs.order_by().values('type').annotate(n=Count('id'))}
    return {
        'total': total,
        'unread': unread,
        'read': total - unread,
        'byType': by_type,
    }


def format_notification(n: Notification) -> dict:
    return {
        'id': n.id,
        'userId': n.staff_id,
        'title': n.title,
        'message': n.message,
        'type': n.type,
        'isRead': n.is_read,
        'relatedId': n.related_id,
        'createdAt': n.created_at.isoformat() if n.created_at else None,
        'updatedAt': n.updated_at.isoformat() if n.updated_at else None,
    }
