from datetime import date

import pytest

from staffing.models import Department, LeaveRequest, ScheduleEntry
from staffing.services import reports

pytestmark = pytest.mark.django_db

WEEK = {'start_date': '2026-03-02', 'end_date': '2026-03-08'}
MONTH = {'start_date': '2026-03-01', 'end_date': '2026-03-31'}


@pytest.fixture
def ward(admin, make_staff, cardiology):
    first = make_staff('Dr First', department=cardiology)
    second = make_staff('Dr Second', department=cardiology)
    ScheduleEntry.objects.create(
        staff=first, department=cardiology, date=date(2026, 3, 2), shift_type='morning', status='confirmed',
    )
    ScheduleEntry.objects.create(staff=second, department=cardiology, date=date(2026, 3, 3), shift_type='night')
    ScheduleEntry.objects.create(
        staff=first, department=cardiology, date=date(2026, 3, 4), shift_type='evening', status='cancelled',
    )
    LeaveRequest.objects.create(
        staff=second, start_date=date(2026, 3, 7), end_date=date(2026, 3, 12), reason='Conference',
        status='approved', approved_by=admin,
    )
    LeaveRequest.objects.create(
        staff=first, start_date=date(2026, 3, 20), end_date=date(2026, 3, 21), reason='Errands',
    )
    return first, second


def test_overview(ward, admin_client):
    r = admin_client.get('/api/reports/overview', WEEK)
    assert r.status_code == 200
    assert r.data['data'] == {
        'totalDutyHours': 16,
        'shiftsThisWeek': 3,
        'staffOnLeave': 1,
        'coverageRate': 30.0,
    }


def test_department_duty_hours(ward, admin_client):
    Department.objects.create(name='Annex')
    r = admin_client.get('/api/reports/department-duty-hours', WEEK)
    assert r.status_code == 200
    annex, cardio = r.data['data']
    assert annex['departmentName'] == 'Annex'
    assert annex['coverage'] == 0
    assert cardio['doctors'] == 2
    assert cardio['maxHours'] == 80
    assert cardio['usedHours'] == 16
    assert cardio['coverage'] == 20.0


def test_staff_attendance(ward, admin_client):
    first, second = ward
    r = admin_client.get('/api/reports/staff-attendance', MONTH)
    assert r.status_code == 200
    rows = {row['userId']: row for row in r.data['data']}
    assert set(rows) == {first.id, second.id}
    assert rows[first.id]['scheduledShifts'] == 2
    assert rows[first.id]['completedShifts'] == 1
    assert rows[first.id]['cancelledShifts'] == 1
    assert rows[first.id]['attendanceRate'] == 50.0
    assert rows[first.id]['leaveDays'] == 0
    assert rows[second.id]['leaveDays'] == 6
    assert rows[second.id]['departmentName'] == 'Cardiology'


def test_leave_days_are_clipped_to_the_range(ward):
    first, second = ward
    rows = reports.staff_attendance(date(2026, 3, 10), date(2026, 3, 31))
    assert {r['userId']: r['leaveDays'] for r in rows}[second.id] == 3


def test_leave_summary(ward, admin_client):
    r = admin_client.get('/api/reports/leave-summary', MONTH)
    assert r.status_code == 200
    assert r.data['data']['summary'] == {'total': 2, 'pending': 1, 'approved': 1, 'rejected': 0}
    assert r.data['data']['byDepartment'] == [{
        'departmentId': ward[0].department_id,
        'departmentName': 'Cardiology',
        'totalLeaves': 2,
        'approvedLeaves': 1,
    }]


def test_inverted_range_is_rejected(admin_client):
    r = admin_client.get('/api/reports/overview', {'start_date': '2026-03-08', 'end_date': '2026-03-01'})
    assert r.status_code == 422
    assert 'end_date' in r.data['errors']


def test_csv_export(ward, admin_client):
    r = admin_client.get('/api/reports/export', {'report_type': 'staff_attendance', **MONTH})
    assert r.status_code == 200
    assert r['Content-Type'].startswith('text/csv')
    assert r['Content-Disposition'].startswith('attachment; filename="staff_attendance_')
    lines = r.content.decode().splitlines()
    assert lines[0] == 'Name,Role,Department,Scheduled,Completed,Cancelled,Leave Days,Attendance %'
    assert lines[1] == 'Dr First,Doctor,Cardiology,2,1,1,0,50.0%'


def test_csv_export_defaults_to_duty_hours(ward, admin_client):
    r = admin_client.get('/api/reports/export', WEEK)
    assert r.status_code == 200
    assert r.content.decode().splitlines()[:2] == [
        'Department,Doctors,Max Hours,Used Hours,Coverage %',
        'Cardiology,2,80h,16h,20.0%',
    ]


def test_unknown_export_type_is_rejected(admin_client):
    r = admin_client.get('/api/reports/export', {'report_type': 'payroll'})
    assert r.status_code == 422
    assert 'report_type' in r.data['errors']


def test_reports_need_staff_identity(client):
    assert client.get('/api/reports/overview').status_code == 401


def test_open_ended_range_uses_the_period_of_the_given_date(ward, admin_client):
    r = admin_client.get('/api/reports/overview', {'start_date': '2026-03-02'})
    assert r.status_code == 200
    assert r.data['data']['shiftsThisWeek'] == 3
    assert r.data['data']['totalDutyHours'] == 16

    first, second = ward
    rows = reports.staff_attendance(date(2026, 3, 10), None)
    assert {row['userId']: row['leaveDays'] for row in rows}[second.id] == 3


def test_roster_stats_with_only_start_date(ward, admin_client):
    r = admin_client.get('/api/schedules-stats', {'start_date': '2026-03-02'})
    assert r.status_code == 200
    assert r.data['data']['totalShifts'] == 3
