"""
Shift roster.

A staff member holds at most one non-cancelled schedule entry per
date, whatever the shift type.  The check and the write run in one
transaction with the staff member's row locked, so two requests
booking the same person cannot both pass the check; the partial unique
constraint on ``ScheduleEntry`` backs this up and a violation of it is
reported as the same conflict.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from django.db import IntegrityError, transaction

from staffing.exceptions import ConflictError
from staffing.models import Department, ScheduleEntry, ShiftTemplate, StaffMember

from .notifications import notify
from .periods import current_week

logger = logging.getLogger(__name__)

SHIFT_CONFLICT_MESSAGE = 'This user already has a shift scheduled for this date.'


def _lock_staff(staff_id: int) -> StaffMember:
    return StaffMember.objects.select_for_update().get(pk=staff_id)


def ensure_available(staff_id: int, day: date, *, exclude_id: Optional[int] = None) -> None:
    qs = ScheduleEntry.objects.filter(staff_id=staff_id, date=day).exclude(
        status=ScheduleEntry.STATUS_CANCELLED
    )
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        logger.info('Shift conflict for staff %s on %s', staff_id, day)
        raise ConflictError(SHIFT_CONFLICT_MESSAGE)


def list_entries(*, start_date=None, end_date=None, department_id=None, staff_id=None, status=None):
    qs = ScheduleEntry.objects.select_related('staff__role', 'department', 'shift')
    if start_date:
        qs = qs.filter(date__gte=start_date)
    if end_date:
        qs = qs.filter(date__lte=end_date)
    if department_id:
        qs = qs.filter(department_id=department_id)
    if staff_id:
        qs = qs.filter(staff_id=staff_id)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by('date', 'shift_type', 'id')


def create_entry(*, staff: StaffMember, date: date, department: Department, shift_type: str,
                 status: str = ScheduleEntry.STATUS_SCHEDULED, is_on_call: bool = False,
                 notes: str = '', shift: Optional[ShiftTemplate] = None) -> ScheduleEntry:
    try:
        with transaction.atomic():
            _lock_staff(staff.pk)
            if status != ScheduleEntry.STATUS_CANCELLED:
                ensure_available(staff.pk, date)
            entry = ScheduleEntry.objects.create(
                staff=staff,
                date=date,
                department=department,
                shift_type=shift_type,
                status=status,
                is_on_call=is_on_call,
                notes=notes or '',
                shift=shift,
            )
    except IntegrityError:
        logger.warning('Roster constraint rejected staff %s on %s', staff.pk, date)
        raise ConflictError(SHIFT_CONFLICT_MESSAGE)

    notify(
        entry.staff_id,
        'New Shift Assigned',
        f"You have been assigned a {entry.shift_type} shift on {entry.date.isoformat()} in {department.name}.",
        'shift',
        entry.id,
    )
    return entry


def update_entry(entry: ScheduleEntry, **changes) -> ScheduleEntry:
    """Apply ``changes``; re-check availability when the booking moves or is revived."""
    before = (entry.staff_id, entry.date, entry.status)
    try:
        with transaction.atomic():
            for field, value in changes.items():
                setattr(entry, field, value)
            moved = (entry.staff_id, entry.date, entry.status) != before
            if moved and entry.status != ScheduleEntry.STATUS_CANCELLED:
                _lock_staff(entry.staff_id)
                ensure_available(entry.staff_id, entry.date, exclude_id=entry.pk)
            entry.save()
    except IntegrityError:
        logger.warning('Roster constraint rejected update of entry %s', entry.pk)
        raise ConflictError(SHIFT_CONFLICT_MESSAGE)

    notify(
        entry.staff_id,
        'Shift Updated',
        f"Your {entry.shift_type} shift on {entry.date.isoformat()} has been updated.",
        'shift',
        entry.id,
    )
    return entry


def delete_entry(entry: ScheduleEntry) -> None:
    staff_id, shift_type, day = entry.staff_id, entry.shift_type, entry.date
    entry.delete()
    notify(staff_id, 'Shift Cancelled', f"Your {shift_type} shift on {day.isoformat()} has been cancelled.", 'shift')


def roster_stats(start_date: Optional[date] = None, end_date: Optional[date] = None) -> dict:
    if start_date is None or end_date is None:
        week_start, week_end = current_week(start_date or end_date)
        start_date = start_date or week_start
        end_date = end_date or week_end
    qs = ScheduleEntry.objects.filter(date__range=(start_date, end_date))
    total = qs.count()
    confirmed = qs.filter(status=ScheduleEntry.STATUS_CONFIRMED).count()
    return {
        'totalShifts': total,
        'confirmedShifts': confirmed,
        'onCallShifts': qs.filter(is_on_call=True).count(),
        'pendingShifts': total - confirmed,
    }


def format_entry(e: ScheduleEntry) -> dict:
    staff = e.staff
    department = e.department
    return {
        'id': e.id,
        'userId': e.staff_id,
        'userName': staff.name if staff else None,
        'userRole': staff.role.name if staff and staff.role_id else None,
        'shiftId': e.shift_id,
        'date': e.date.isoformat(),
        'departmentId': e.department_id,
        'departmentName': department.name if department else None,
        'departmentColor': department.color if department else None,
        'shiftType': e.shift_type,
        'status': e.status,
        'isOnCall': e.is_on_call,
        'notes': e.notes,
        'createdAt': e.created_at.isoformat() if e.created_at else None,
        'updatedAt': e.updated_at.isoformat() if e.updated_at else None,
    }
