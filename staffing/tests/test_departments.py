from datetime import date
from io import StringIO

import pytest
from django.core.management import call_command

from staffing.models import Department, Notification, ScheduleEntry, ShiftTemplate, StaffMember

pytestmark = pytest.mark.django_db


def _count(department):
    department.refresh_from_db()
    return department.doctor_count


def test_doctor_count_follows_staff_changes(admin_client, roles, cardiology):
    r = admin_client.post('/api/users', {
        'name': 'Dr Who',
        'email': 'who@example.org',
        'password': 'tardis1',
        'role_id': roles['doctor'].id,
        'department_id': cardiology.id,
    }, format='json')
    assert r.status_code == 201
    doctor_id = r.data['data']['id']
    assert _count(cardiology) == 1

    r = admin_client.put(f'/api/users/{doctor_id}', {'status': 'inactive'}, format='json')
    assert r.status_code == 200
    assert _count(cardiology) == 0

    r = admin_client.put(f'/api/users/{doctor_id}', {'status': 'active'}, format='json')
    assert _count(cardiology) == 1

    r = admin_client.get(f'/api/departments/{cardiology.id}')
    assert r.data['data']['doctorCount'] == r.data['data']['actualDoctorCount'] == 1


def test_nurses_do_not_count(make_staff, cardiology):
    make_staff(role='nurse', department=cardiology)
    make_staff(role='department_head', department=cardiology)
    assert _count(cardiology) == 1


def test_moving_between_departments_recounts_both(make_staff, cardiology):
    neurology = Department.objects.create(name='Neurology')
    doctor = make_staff(department=cardiology)
    assert _count(cardiology) == 1

    doctor.department = neurology
    doctor.save()
    assert _count(cardiology) == 0
    assert _count(neurology) == 1


def test_role_change_and_delete_recount(make_staff, roles, cardiology):
    doctor = make_staff(department=cardiology)
    doctor.role = roles['nurse']
    doctor.save()
    assert _count(cardiology) == 0

    doctor.role = roles['doctor']
    doctor.save()
    assert _count(cardiology) == 1

    doctor.delete()
    assert _count(cardiology) == 0


def test_list_hides_inactive_departments(admin_client, cardiology):
    Department.objects.create(name='Closed Wing', is_active=False)
    r = admin_client.get('/api/departments')
    assert [d['name'] for d in r.data['data']] == ['Cardiology']


def test_create_validates_color_and_unique_name(admin_client, cardiology):
    r = admin_client.post('/api/departments', {'name': 'Oncology', 'color': 'purple'}, format='json')
    assert r.status_code == 422
    assert 'color' in r.data['errors']

    r = admin_client.post('/api/departments', {'name': 'Cardiology'}, format='json')
    assert r.status_code == 422
    assert 'name' in r.data['errors']

    r = admin_client.post('/api/departments', {'name': 'Oncology'}, format='json')
    assert r.status_code == 201
    assert r.data['data']['color'] == '#3b82f6'
    assert r.data['data']['maxHoursPerDoctor'] == 40
    assert r.data['data']['doctorCount'] == 0


def test_non_admin_cannot_create(make_staff, client_for):
    client = client_for(make_staff(role='department_head'))
    r = client.post('/api/departments', {'name': 'Oncology'}, format='json')
    assert r.status_code == 403


def test_delete_is_hard_and_cascades_roster(admin, admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    cardiology.head = doctor
    cardiology.save()
    ScheduleEntry.objects.create(staff=doctor, department=cardiology, date=date(2026, 3, 1), shift_type='morning')
    ShiftTemplate.objects.create(department=cardiology, type='morning', start_time='07:00', end_time='15:00')

    r = admin_client.delete(f'/api/departments/{cardiology.id}')
    assert r.status_code == 200
    assert not Department.objects.filter(pk=cardiology.pk).exists()
    assert not ScheduleEntry.objects.exists()
    assert not ShiftTemplate.objects.exists()

    doctor.refresh_from_db()
    assert doctor.department_id is None
    assert Notification.objects.filter(staff=doctor, title='Department Removed').exists()
    assert Notification.objects.filter(staff=admin, title='Department Deleted').exists()


def test_update_notifies_members(admin_client, make_staff, cardiology):
    doctor = make_staff(department=cardiology)
    r = admin_client.put(f'/api/departments/{cardiology.id}', {'max_hours_per_doctor': 36}, format='json')
    assert r.status_code == 200
    assert r.data['data']['maxHoursPerDoctor'] == 36
    assert Notification.objects.filter(staff=doctor, title='Department Updated').exists()


def test_update_counts_command_assigns_heads(make_staff, cardiology):
    neurology = Department.objects.create(name='Neurology')
    surgery = Department.objects.create(name='Surgery')
    empty = Department.objects.create(name='Empty')

    make_staff('Dr Senior', department=cardiology, join_date=date(2010, 1, 1))
    chief = make_staff('Chief', role='department_head', department=cardiology, join_date=date(2020, 1, 1))

    make_staff('Dr Junior', department=neurology, join_date=date(2022, 5, 1))
    senior = make_staff('Dr Veteran', department=neurology, join_date=date(2005, 5, 1))
    make_staff('Dr Retired', department=neurology, status='inactive', join_date=date(1999, 1, 1))

    existing = make_staff('Dr Existing', department=surgery)
    make_staff('Surgery Chief', role='department_head', department=surgery)
    surgery.head = existing
    surgery.save()

    Department.objects.filter(pk=cardiology.pk).update(doctor_count=99)

    out = StringIO()
    call_command('update_department_counts', stdout=out)

    cardiology.refresh_from_db()
    neurology.refresh_from_db()
    surgery.refresh_from_db()
    empty.refresh_from_db()
    assert cardiology.head == chief
    assert cardiology.doctor_count == 2
    assert neurology.head == senior
    assert surgery.head == existing
    assert empty.head is None
    assert 'Assigned 2 department heads' in out.getvalue()


def test_update_counts_command_can_skip_heads(make_staff, cardiology):
    make_staff(department=cardiology)
    call_command('update_department_counts', '--skip-heads', stdout=StringIO())
    cardiology.refresh_from_db()
    assert cardiology.head is None
    assert StaffMember.objects.doctors().filter(department=cardiology).count() == cardiology.doctor_count
