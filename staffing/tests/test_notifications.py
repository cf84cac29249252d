import pytest

from staffing.models import Notification

pytestmark = pytest.mark.django_db


@pytest.fixture
def inbox(admin, make_staff):
    doctor = make_staff('Dr Inbox')
    nurse = make_staff('Nurse Inbox', role='nurse')
    Notification.objects.create(staff=doctor, title='A', message='first', type='shift')
    Notification.objects.create(staff=doctor, title='B', message='second', type='leave', is_read=True)
    Notification.objects.create(staff=doctor, title='C', message='third', type='shift')
    Notification.objects.create(staff=nurse, title='D', message='fourth', type='general')
    return doctor, nurse


def test_staff_only_see_their_own(inbox, client_for):
    doctor, nurse = inbox
    client = client_for(doctor)

    r = client.get('/api/notifications', {'user_id': nurse.id})
    assert r.status_code == 200
    assert [n['title'] for n in r.data['data']] == ['C', 'B', 'A']
    assert {n['userId'] for n in r.data['data']} == {doctor.id}


def test_admin_sees_everyone_and_can_filter(inbox, admin_client):
    doctor, nurse = inbox
    assert len(admin_client.get('/api/notifications').data['data']) == 4

    r = admin_client.get('/api/notifications', {'user_id': doctor.id, 'is_read': 'false'})
    assert [n['title'] for n in r.data['data']] == ['C', 'A']

    r = admin_client.get('/api/notifications', {'type': 'general'})
    assert [n['userId'] for n in r.data['data']] == [nurse.id]


def test_mark_read_and_foreign_notifications_are_hidden(inbox, client_for):
    doctor, nurse = inbox
    mine = Notification.objects.get(title='A')
    theirs = Notification.objects.get(title='D')
    client = client_for(doctor)

    r = client.post(f'/api/notifications/{mine.id}/read')
    assert r.status_code == 200
    mine.refresh_from_db()
    assert mine.is_read

    assert client.post(f'/api/notifications/{theirs.id}/read').status_code == 404
    assert client.delete(f'/api/notifications/{theirs.id}').status_code == 404
    theirs.refresh_from_db()
    assert not theirs.is_read


def test_read_all_and_clear_read_are_scoped(inbox, client_for):
    doctor, nurse = inbox
    client = client_for(doctor)

    r = client.post('/api/notifications/read-all', {'user_id': nurse.id}, format='json')
    assert r.status_code == 200
    assert r.data['data'] == {'count': 2}
    assert Notification.objects.get(title='D').is_read is False

    r = client.post('/api/notifications/clear-read', format='json')
    assert r.data['data'] == {'count': 3}
    assert list(Notification.objects.values_list('title', flat=True)) == ['D']


def test_stats(inbox, client_for, admin_client):
    doctor, nurse = inbox
    r = client_for(doctor).get('/api/notifications-stats')
    assert r.status_code == 200
    assert r.data['data'] == {'total': 3, 'unread': 2, 'read': 1, 'byType': {'shift': 2, 'leave': 1}}

    r = admin_client.get('/api/notifications-stats')
    assert r.data['data']['total'] == 4


def test_update_and_create(inbox, client_for, admin_client):
    doctor, nurse = inbox
    read = Notification.objects.get(title='B')
    r = client_for(doctor).put(f'/api/notifications/{read.id}', {'is_read': False}, format='json')
    assert r.status_code == 200
    assert r.data['data']['isRead'] is False

    r = client_for(nurse).post(
        '/api/notifications', {'user_id': doctor.id, 'title': 'Hi', 'message': 'hello'}, format='json',
    )
    assert r.status_code == 403

    r = admin_client.post(
        '/api/notifications', {'user_id': doctor.id, 'title': 'Drill', 'message': 'Fire drill at noon'},
        format='json',
    )
    assert r.status_code == 201
    assert r.data['data']['type'] == 'general'
    assert r.data['data']['isRead'] is False
