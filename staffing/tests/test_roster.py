from datetime import date

import pytest
from django.db import DatabaseError, IntegrityError, transaction

from staffing.exceptions import ConflictError
from staffing.models import Notification, ScheduleEntry
from staffing.services import roster

pytestmark = pytest.mark.django_db

DAY = date(2026, 3, 1)


def _payload(staff, department, **overrides):
    body = {
        'user_id': staff.id,
        'date': DAY.isoformat(),
        'department_id': department.id,
        'shift_type': 'morning',
    }
    body.update(overrides)
    return body


def test_second_shift_same_day_is_rejected_even_for_another_shift_type(admin_client, make_staff, cardiology):
    doctor = make_staff('Dr A', department=cardiology)

    r = admin_client.post('/api/schedules', _payload(doctor, cardiology), format='json')
    assert r.status_code == 201
    assert r.data['success'] is True
    assert r.data['data']['shiftType'] == 'morning'
    assert r.data['data']['departmentName'] == 'Cardiology'

    r = admin_client.post('/api/schedules', _payload(doctor, cardiology, shift_type='evening'), format='json')
    assert r.status_code == 422
    assert r.data['success'] is False
    assert r.data['message'] == 'This user already has a shift scheduled for this date.'
    assert ScheduleEntry.objects.filter(staff=doctor, date=DAY).count() == 1


def test_cancelled_entry_does_not_block_the_day(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=DAY, shift_type='night', status='cancelled')

    r = admin_client.post('/api/schedules', _payload(doctor, cardiology), format='json')
    assert r.status_code == 201


def test_create_assigns_notification(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    r = admin_client.post('/api/schedules', _payload(doctor, cardiology, is_on_call=True), format='json')
    assert r.status_code == 201
    assert r.data['data']['isOnCall'] is True

    note = Notification.objects.get(staff=doctor, title='New Shift Assigned')
    assert note.type == 'shift'
    assert note.related_id == r.data['data']['id']
    assert '2026-03-01' in note.message and 'Cardiology' in note.message


def test_unknown_user_is_a_validation_error(admin_client, cardiology):
    r = admin_client.post(
        '/api/schedules',
        {'user_id': 9999, 'date': DAY.isoformat(), 'department_id': cardiology.id, 'shift_type': 'morning'},
        format='json',
    )
    assert r.status_code == 422
    assert r.data['message'] == 'Validation failed'
    assert 'user_id' in r.data['errors']


def test_invalid_shift_type_is_rejected(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    r = admin_client.post('/api/schedules', _payload(doctor, cardiology, shift_type='afternoon'), format='json')
    assert r.status_code == 422
    assert 'shift_type' in r.data['errors']


def test_moving_entry_onto_booked_day_conflicts(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=DAY, shift_type='morning')
    other = ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=date(2026, 3, 2), shift_type='night')

    r = admin_client.put(f'/api/schedules/{other.id}', {'date': DAY.isoformat()}, format='json')
    assert r.status_code == 422

    other.refresh_from_db()
    assert other.date == date(2026, 3, 2)


def test_editing_an_entry_in_place_does_not_conflict_with_itself(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    entry = ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=DAY, shift_type='morning')

    r = admin_client.put(
        f'/api/schedules/{entry.id}',
        {'date': DAY.isoformat(), 'shift_type': 'evening', 'status': 'confirmed', 'notes': 'swap cover'},
        format='json',
    )
    assert r.status_code == 200
    assert r.data['data']['shiftType'] == 'evening'
    assert r.data['data']['status'] == 'confirmed'
    assert Notification.objects.filter(staff=doctor, title='Shift Updated').exists()


def test_reviving_cancelled_entry_rechecks_the_day(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=DAY, shift_type='morning')
    cancelled = ScheduleEntry.objects.create(
        staff=doctor, department=cardiology, date=DAY, shift_type='night', status='cancelled',
    )

    r = admin_client.put(f'/api/schedules/{cancelled.id}', {'status': 'scheduled'}, format='json')
    assert r.status_code == 422


def test_delete_notifies_with_previous_values(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    entry = ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=DAY, shift_type='night')

    r = admin_client.delete(f'/api/schedules/{entry.id}')
    assert r.status_code == 200
    assert not ScheduleEntry.objects.filter(pk=entry.pk).exists()

    note = Notification.objects.get(staff=doctor, title='Shift Cancelled')
    assert note.message == 'Your night shift on 2026-03-01 has been cancelled.'


def test_missing_entry_is_404(admin_client):
    r = admin_client.get('/api/schedules/424242')
    assert r.status_code == 404
    assert r.data['success'] is False


def test_list_filters_and_orders(admin_client, make_staff, cardiology):
    a = make_staff(department=cardiology)
    b = make_staff(department=cardiology)
    ScheduleEntry.objects.create(staff=a, department=cardiology, date=date(2026, 3, 3), shift_type='morning')
    ScheduleEntry.objects.create(staff=b, department=cardiology, date=DAY, shift_type='night')
    ScheduleEntry.objects.create(staff=a, department=cardiology, date=DAY, shift_type='evening')

    r = admin_client.get('/api/schedules', {'start_date': '2026-03-01', 'end_date': '2026-03-31'})
    assert r.status_code == 200
    assert [(e['date'], e['shiftType']) for e in r.data['data']] == [
        ('2026-03-01', 'evening'),
        ('2026-03-01', 'night'),
        ('2026-03-03', 'morning'),
    ]

    r = admin_client.get('/api/schedules', {'user_id': b.id})
    assert [e['userId'] for e in r.data['data']] == [b.id]


def test_stats_counts_pending_as_not_confirmed(admin_client, make_staff, cardiology):
    a = make_staff(department=cardiology)
    b = make_staff(department=cardiology)
    ScheduleEntry.objects.create(staff=a, department=cardiology, date=DAY, shift_type='morning', status='confirmed')
    ScheduleEntry.objects.create(staff=b, department=cardiology, date=DAY, shift_type='night', is_on_call=True)
    ScheduleEntry.objects.create(staff=a, department=cardiology, date=date(2026, 4, 1), shift_type='night')

    r = admin_client.get('/api/schedules-stats', {'start_date': '2026-03-01', 'end_date': '2026-03-07'})
    assert r.status_code == 200
    assert r.data['data'] == {'totalShifts': 2, 'confirmedShifts': 1, 'onCallShifts': 1, 'pendingShifts': 1}


def test_nurse_cannot_assign_shifts_but_can_read(make_staff, client_for, cardiology):
    nurse = make_staff(role='nurse', department=cardiology)
    client = client_for(nurse)

    r = client.post('/api/schedules', _payload(nurse, cardiology), format='json')
    assert r.status_code == 403
    assert client.get('/api/schedules').status_code == 200


def test_failed_notification_does_not_undo_the_shift(admin_client, make_staff, cardiology, monkeypatch):
    doctor = make_staff(department=cardiology)

    def boom(*args, **kwargs):
        raise DatabaseError('notifications table is unavailable')

    monkeypatch.setattr(Notification.objects, 'create', boom)
    r = admin_client.post('/api/schedules', _payload(doctor, cardiology), format='json')

    assert r.status_code == 201
    assert ScheduleEntry.objects.filter(staff=doctor, date=DAY).exists()


def test_storage_constraint_backs_the_rule(make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=DAY, shift_type='morning')
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=DAY, shift_type='night')


def test_constraint_violation_surfaces_as_conflict(make_staff, cardiology, monkeypatch):
    # Simulates a concurrent writer slipping past the availability check.
    doctor = make_staff(department=cardiology)
    roster.create_entry(staff=doctor, date=DAY, department=cardiology, shift_type='morning')
    monkeypatch.setattr(roster, 'ensure_available', lambda *args, **kwargs: None)

    with pytest.raises(ConflictError):
        roster.create_entry(staff=doctor, date=DAY, department=cardiology, shift_type='night')
    assert ScheduleEntry.objects.filter(staff=doctor, date=DAY).count() == 1


def test_at_most_one_active_entry_per_day_after_mixed_operations(make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    days = [date(2026, 3, d) for d in (1, 2, 3)]

    entries = []
    for day in days:
        entries.append(roster.create_entry(staff=doctor, date=day, department=cardiology, shift_type='morning'))
    for day in days:
        with pytest.raises(ConflictError):
            roster.create_entry(staff=doctor, date=day, department=cardiology, shift_type='night')

    roster.update_entry(entries[0], status='cancelled')
    roster.create_entry(staff=doctor, date=days[0], department=cardiology, shift_type='night')
    with pytest.raises(ConflictError):
        roster.update_entry(entries[1], date=days[2])
    roster.delete_entry(entries[2])
    roster.update_entry(entries[1], date=days[2])

    for day in days:
        active = ScheduleEntry.objects.filter(staff=doctor, date=day).exclude(status='cancelled').count()
        assert active <= 1
