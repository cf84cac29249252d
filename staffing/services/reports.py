"""
Read-only reporting over the roster, the leave ledger and the staff
directory.

Every shift counts as ``settings.HOURS_PER_SHIFT`` hours.  Ranges
default to the current Monday..Sunday week for duty figures and to the
current calendar month for attendance and leave summaries.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from django.conf import settings
from django.db.models import Count, Q

from staffing.models import Department, LeaveRequest, ScheduleEntry, StaffMember

from .periods import current_month, current_week, overlap_days

CLINICAL_ROLE_NAMES = ('doctor', 'nurse', 'staff', 'department_head')

WORKED_STATUSES = (
    ScheduleEntry.STATUS_SCHEDULED,
    ScheduleEntry.STATUS_CONFIRMED,
    ScheduleEntry.STATUS_SWAPPED,
)

REPORT_TYPES = ('department_duty_hours', 'staff_attendance', 'leave_summary')


def _range(start: Optional[date], end: Optional[date], default) -> tuple[date, date]:
    """Fill a missing bound from the period containing the given one, or today."""
    default_start, default_end = default(start or end)
    return start or default_start, end or default_end


def _percent(part: float, whole: float) -> float:
    return round(part / whole * 100, 1) if whole else 0


def overview(start: Optional[date] = None, end: Optional[date] = None) -> dict:
    start, end = _range(start, end, current_week)
    entries = ScheduleEntry.objects.filter(date__range=(start, end))
    worked = entries.exclude(status=ScheduleEntry.STATUS_CANCELLED).count()
    shifts = entries.count()
    on_leave = (
        LeaveRequest.objects.filter(status=LeaveRequest.STATUS_APPROVED, start_date__lte=end, end_date__gte=start)
        .values('staff_id').distinct().count()
    )
    expected = StaffMember.objects.doctors().count() * settings.EXPECTED_WEEKLY_SHIFTS_PER_DOCTOR
    return {
        'totalDutyHours': worked * settings.HOURS_PER_SHIFT,
        'shiftsThisWeek': shifts,
        'staffOnLeave': on_leave,
        'coverageRate': _percent(shifts, expected),
    }


def department_duty_hours(start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
    start, end = _range(start, end, current_week)
    active_shift = Q(schedule_entries__date__range=(start, end)) & Q(schedule_entries__status__in=WORKED_STATUSES)
    shifts_by_department = dict(
        Department.objects.annotate(n=Count('schedule_entries', filter=active_shift)).values_list('id', 'n')
    )
    doctors_by_department = dict(
        StaffMember.objects.doctors().filter(department__isnull=False)
        .order_by().values('department_id').annotate(n=Count('id')).values_list('department_id', 'n')
    )

    report = []
    for department in Department.objects.order_by('name'):
        doctors = doctors_by_department.get(department.id, 0)
        max_hours = department.max_hours_per_doctor * doctors
        used_hours = shifts_by_department.get(department.id, 0) * settings.HOURS_PER_SHIFT
        report.append({
            'departmentId': department.id,
            'departmentName': department.name,
            'departmentColor': department.color,
            'doctors': doctors,
            'maxHours': max_hours,
            'usedHours': used_hours,
            'coverage': _percent(used_hours, max_hours),
        })
    return report


def staff_attendance(start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
    start, end = _range(start, end, current_month)
    in_range = Q(schedule_entries__date__range=(start, end))
    staff = (
        StaffMember.objects.filter(role__name__in=CLINICAL_ROLE_NAMES)
        .select_related('role', 'department')
        .annotate(
            scheduled=Count('schedule_entries', filter=in_range),
            completed=Count('schedule_entries', filter=in_range & Q(schedule_entries__status=ScheduleEntry.STATUS_CONFIRMED)),
            cancelled=Count('schedule_entries', filter=in_range & Q(schedule_entries__status=ScheduleEntry.STATUS_CANCELLED)),
        )
        .order_by('name')
    )

    leave_days: dict[int, int] = {}
    approved = LeaveRequest.objects.filter(
        status=LeaveRequest.STATUS_APPROVED, start_date__lte=end, end_date__gte=start,
    ).values_list('staff_id', 'start_date', 'end_date')
    for staff_id, leave_start, leave_end in approved:
        leave_days[staff_id] = leave_days.get(staff_id, 0) + overlap_days(leave_start, leave_end, start, end)

    return [{
        'userId': s.id,
        'userName': s.name,
        'userRole': s.role.display_name if s.role_id else 'Unknown',
        'departmentName': s.department.name if s.department_id else 'N/A',
        'scheduledShifts': s.scheduled,
        'completedShifts': s.completed,
        'cancelledShifts': s.cancelled,
        'leaveDays': leave_days.get(s.id, 0),
        'attendanceRate': _percent(s.completed, s.scheduled),
    } for s in staff]


def leave_summary(start: Optional[date] = None, end: Optional[date] = None) -> dict:
    start, end = _range(start, end, current_month)
    leaves = LeaveRequest.objects.filter(start_date__range=(start, end))
    by_status = {row['status']: row['n'] for row in leaves.order_by().values('status').annotate(n=Count('id'))}
    summary = {
        'total': sum(by_status.values()),
        'pending': by_status.get(LeaveRequest.STATUS_PENDING, 0),
        'approved': by_status.get(LeaveRequest.STATUS_APPROVED, 0),
        'rejected': by_status.get(LeaveRequest.STATUS_REJECTED, 0),
    }

    in_range = Q(staff__leave_requests__start_date__range=(start, end))
    departments = Department.objects.annotate(
        total=Count('staff__leave_requests', filter=in_range),
        approved=Count(
            'staff__leave_requests',
            filter=in_range & Q(staff__leave_requests__status=LeaveRequest.STATUS_APPROVED),
        ),
    ).order_by('name')
    by_department = [{
        'departmentId': d.id,
        'departmentName': d.name,
        'totalLeaves': d.total,
        'approvedLeaves': d.approved,
    } for d in departments]
    return {'summary': summary, 'byDepartment': by_department}


def export_rows(report_type: str, start: Optional[date] = None, end: Optional[date] = None) -> tuple[list, list]:
    """Header and rows for the CSV export of ``report_type``."""
    if report_type == 'department_duty_hours':
        header = ['Department', 'Doctors', 'Max Hours', 'Used Hours', 'Coverage %']
        rows = [
            [r['departmentName'], r['doctors'], f"{r['maxHours']}h", f"{r['usedHours']}h", f"{r['coverage']}%"]
            for r in department_duty_hours(start, end)
        ]
    elif report_type == 'staff_attendance':
        header = ['Name', 'Role', 'Department', 'Scheduled', 'Completed', 'Cancelled', 'Leave Days', 'Attendance %']
        rows = [
            [r['userName'], r['userRole'], r['departmentName'], r['scheduledShifts'], r['completedShifts'],
             r['cancelledShifts'], r['leaveDays'], f"{r['attendanceRate']}%"]
            for r in staff_attendance(start, end)
        ]
    elif report_type == 'leave_summary':
        header = ['Department', 'Total Leaves', 'Approved Leaves']
        rows = [
            [r['departmentName'], r['totalLeaves'], r['approvedLeaves']]
            for r in leave_summary(start, end)['byDepartment']
        ]
    else:
        raise ValueError(f'Unknown report type: {report_type}')
    return header, rows
