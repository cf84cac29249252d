"""
Leave ledger.

Two leave requests of the same staff member that are not rejected never
share a day.  Overlap is plain interval intersection with inclusive
ends, which covers partial overlap and containment in either
direction.  Like the roster, the check runs under a lock on the staff
member's row.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from staffing.exceptions import ConflictError
from staffing.models import LeaveRequest, StaffMember

from .notifications import notify

logger = logging.getLogger(__name__)


def find_overlap(staff_id: int, start: date, end: date, *, exclude_id: Optional[int] = None) -> Optional[LeaveRequest]:
    qs = LeaveRequest.objects.filter(
        Q(start_date__lte=end) & Q(end_date__gte=start),
        staff_id=staff_id,
    ).exclude(status=LeaveRequest.STATUS_REJECTED)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return qs.order_by('start_date').first()


def ensure_no_overlap(staff_id: int, start: date, end: date, *, exclude_id: Optional[int] = None) -> None:
    clash = find_overlap(staff_id, start, end, exclude_id=exclude_id)
    if clash is not None:
        logger.info('Leave overlap for staff %s: %s..%s clashes with request %s', staff_id, start, end, clash.pk)
        raise ConflictError(
            'This user already has a leave request for overlapping dates '
            f'({clash.start_date.isoformat()} to {clash.end_date.isoformat()}).'
        )


def list_requests(*, status=None, staff_id=None, start_date=None, end_date=None):
    qs = LeaveRequest.objects.select_related('staff__role', 'approved_by')
    if status:
        qs = qs.filter(status=status)
    if staff_id:
        qs = qs.filter(staff_id=staff_id)
    if start_date:
        qs = qs.filter(start_date__gte=start_date)
    if end_date:
        qs = qs.filter(end_date__lte=end_date)
    return qs.order_by('-created_at', '-id')


def submit_request(*, staff: StaffMember, start_date: date, end_date: date, reason: str) -> LeaveRequest:
    if start_date < timezone.localdate():
        raise ValidationError({'start_date': ['Start date must be today or later.']})
    if end_date < start_date:
        raise ValidationError({'end_date': ['End date must be on or after start date.']})

    with transaction.atomic():
        StaffMember.objects.select_for_update().get(pk=staff.pk)
        ensure_no_overlap(staff.pk, start_date, end_date)
        leave = LeaveRequest.objects.create(
            staff=staff, start_date=start_date, end_date=end_date, reason=reason,
            status=LeaveRequest.STATUS_PENDING,
        )

    notify(
        leave.staff_id,
        'Leave Request Submitted',
        f"Your leave request from {leave.start_date.isoformat()} to {leave.end_date.isoformat()} "
        'has been submitted and is pending approval.',
        'leave',
        leave.id,
    )
    return leave


def update_request(leave: LeaveRequest, *, start_date: Optional[date] = None, end_date: Optional[date] = None,
                   reason: Optional[str] = None) -> LeaveRequest:
    """Edit dates or reason; moving an approved request sends it back for approval."""
    new_start = start_date or leave.start_date
    new_end = end_date or leave.end_date
    if new_start != leave.start_date and new_start < timezone.localdate():
        raise ValidationError({'start_date': ['Start date must be today or later.']})
    if new_end < new_start:
        raise ValidationError({'end_date': ['End date must be on or after start date.']})
    moved = (new_start, new_end) != (leave.start_date, leave.end_date)

    with transaction.atomic():
        if leave.status != LeaveRequest.STATUS_REJECTED:
            StaffMember.objects.select_for_update().get(pk=leave.staff_id)
            ensure_no_overlap(leave.staff_id, new_start, new_end, exclude_id=leave.pk)
        leave.start_date = new_start
        leave.end_date = new_end
        if reason is not None:
            leave.reason = reason
        if moved and leave.status == LeaveRequest.STATUS_APPROVED:
            leave.status = LeaveRequest.STATUS_PENDING
            leave.approved_by = None
            leave.approved_at = None
        leave.save()
    return leave


def approve(leave: LeaveRequest, approver: StaffMember) -> LeaveRequest:
    """Approving twice re-applies the same fields.

    A rejected request rejoins the set that must not overlap, so it is
    checked again first.
    """
    with transaction.atomic():
        if leave.status == LeaveRequest.STATUS_REJECTED:
            StaffMember.objects.select_for_update().get(pk=leave.staff_id)
            ensure_no_overlap(leave.staff_id, leave.start_date, leave.end_date, exclude_id=leave.pk)
        leave.status = LeaveRequest.STATUS_APPROVED
        leave.approved_by = approver
        leave.approved_at = timezone.now()
        leave.rejection_reason = None
        leave.save(update_fields=['status', 'approved_by', 'approved_at', 'rejection_reason', 'updated_at'])
    notify(
        leave.staff_id,
        'Leave Request Approved',
        f"Your leave request from {leave.start_date.isoformat()} to {leave.end_date.isoformat()} has been approved.",
        'leave',
        leave.id,
    )
    return leave


def reject(leave: LeaveRequest, reason: str, approver: StaffMember) -> LeaveRequest:
    reason = (reason or '').strip()
    if not reason:
        raise ValidationError({'rejection_reason': ['A rejection reason is required.']})
    leave.status = LeaveRequest.STATUS_REJECTED
    leave.approved_by = approver
    leave.approved_at = timezone.now()
    leave.rejection_reason = reason
    leave.save(update_fields=['status', 'approved_by', 'approved_at', 'rejection_reason', 'updated_at'])
    notify(
        leave.staff_id,
        'Leave Request Rejected',
        f"Your leave request from {leave.start_date.isoformat()} to {leave.end_date.isoformat()} "
        f"has been rejected. Reason: {reason}",
        'leave',
        leave.id,
    )
    return leave


def delete_request(leave: LeaveRequest) -> None:
    leave.delete()


def leave_stats() -> dict:
    counts = {
        row['status']: row['n']
        for row in LeaveRequest.objects.order_by().values('status').annotate(n=Count('id'))
    }
    pending = counts.get(LeaveRequest.STATUS_PENDING, 0)
    approved = counts.get(LeaveRequest.STATUS_APPROVED, 0)
    rejected = counts.get(LeaveRequest.STATUS_REJECTED, 0)
    return {
        'pending': pending,
        'approved': approved,
        'rejected': rejected,
        'total': pending + approved + rejected,
    }


def format_leave(r: LeaveRequest) -> dict:
    return {
        'id': r.id,
        'userId': r.staff_id,
        'userName': r.staff.name if r.staff_id else None,
        'userRole': r.staff.role.name if r.staff_id and r.staff.role_id else None,
        'startDate': r.start_date.isoformat(),
        'endDate': r.end_date.isoformat(),
        'days': r.days,
        'reason': r.reason,
        'status': r.status,
        'approvedBy': r.approved_by_id,
        'approvedByName': r.approved_by.name if r.approved_by_id else None,
        'approvedAt': r.approved_at.isoformat() if r.approved_at else None,
        'rejectionReason': r.rejection_reason,
        'createdAt': r.created_at.isoformat() if r.created_at else None,
        'updatedAt': r.updated_at.isoformat() if r.updated_at else None,
    }
