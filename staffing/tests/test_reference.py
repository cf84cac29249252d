from io import StringIO

import pytest
from django.core.management import call_command

from staffing.models import Department, HospitalSetting, Role, ShiftTemplate, Specialty

pytestmark = pytest.mark.django_db


def test_role_name_is_derived_from_display_name(admin_client):
    r = admin_client.post('/api/roles', {'display_name': 'Charge Nurse'}, format='json')
    assert r.status_code == 201
    assert r.data['data']['name'] == 'charge_nurse'
    assert r.data['data']['usersCount'] == 0

    r = admin_client.post('/api/roles', {'display_name': 'Department Head'}, format='json')
    assert r.status_code == 422
    assert 'display_name' in r.data['errors']


def test_role_in_use_cannot_be_deleted(admin_client, make_staff, roles):
    make_staff(role='nurse')
    r = admin_client.delete(f'/api/roles/{roles["nurse"].id}')
    assert r.status_code == 422
    assert r.data['message'] == 'Cannot delete role that is assigned to users'

    r = admin_client.delete(f'/api/roles/{roles["staff"].id}')
    assert r.status_code == 200
    assert not Role.objects.filter(name='staff').exists()


def test_renaming_doctor_role_recounts_departments(admin_client, make_staff, roles, cardiology):
    make_staff(role='doctor', department=cardiology)
    cardiology.refresh_from_db()
    assert cardiology.doctor_count == 1

    r = admin_client.put(f'/api/roles/{roles["doctor"].id}', {'display_name': 'Physician'}, format='json')
    assert r.status_code == 200
    cardiology.refresh_from_db()
    assert cardiology.doctor_count == 0


def test_specialty_in_use_cannot_be_deleted(admin_client, make_staff):
    cardio = Specialty.objects.create(name='Cardiology')
    make_staff(specialty=cardio)

    r = admin_client.delete(f'/api/specialties/{cardio.id}')
    assert r.status_code == 422
    assert Specialty.objects.filter(pk=cardio.pk).exists()

    r = admin_client.get('/api/specialties')
    assert r.data['data'][0]['doctorsCount'] == 1


def test_reference_writes_need_admin(make_staff, client_for):
    client = client_for(make_staff(role='department_head'))
    assert client.get('/api/roles').status_code == 200
    assert client.post('/api/specialties', {'name': 'Oncology'}, format='json').status_code == 403


def test_hospital_settings_defaults_and_update(admin_client):
    r = admin_client.get('/api/hospital-settings')
    assert r.status_code == 200
    assert r.data['data']['hospital_name'] == 'MedScheduler'
    assert r.data['data']['max_weekly_hours'] == 48
    assert HospitalSetting.objects.count() == 1

    r = admin_client.put('/api/hospital-settings', {'hospital_name': '', 'max_weekly_hours': 500}, format='json')
    assert r.status_code == 422
    assert {'hospital_name', 'max_weekly_hours'} <= set(r.data['errors'])

    r = admin_client.put(
        '/api/hospital-settings',
        {'hospital_name': 'St. Elsewhere', 'max_weekly_hours': 40, 'sms_notifications': True},
        format='json',
    )
    assert r.status_code == 200
    row = HospitalSetting.objects.get()
    assert (row.hospital_name, row.max_weekly_hours, row.sms_notifications) == ('St. Elsewhere', 40, True)


def test_hospital_settings_are_read_only_for_staff(make_staff, client_for):
    client = client_for(make_staff())
    assert client.get('/api/hospital-settings').status_code == 200
    assert client.put('/api/hospital-settings', {'hospital_name': 'X'}, format='json').status_code == 403


def test_seed_reference_data_is_idempotent():
    Department.objects.create(name='Emergency')

    call_command('seed_reference_data', stdout=StringIO())
    counts = (Role.objects.count(), Specialty.objects.count(), ShiftTemplate.objects.count())
    assert counts == (5, 8, 3)

    out = StringIO()
    call_command('seed_reference_data', stdout=out)
    assert (Role.objects.count(), Specialty.objects.count(), ShiftTemplate.objects.count()) == counts
    assert '(0 rows created)' in out.getvalue()
    assert HospitalSetting.objects.count() == 1
