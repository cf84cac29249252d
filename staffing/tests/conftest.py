import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from staffing.identity import StaffIdentity
from staffing.models import Department, Role, StaffMember
from staffing.services.auth import issue_token

ROLE_NAMES = {
    'admin': 'Administrator',
    'doctor': 'Doctor',
    'nurse': 'Nurse',
    'department_head': 'Department Head',
    'staff': 'Staff',
}

PASSWORD = 'Secret#123'


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # DRF throttling keeps its history in the default cache.
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def roles(db):
    return {name: Role.objects.create(name=name, display_name=display) for name, display in ROLE_NAMES.items()}


@pytest.fixture
def cardiology(db):
    return Department.objects.create(name='Cardiology', color='#ef4444')


@pytest.fixture
def make_staff(roles):
    counter = {'n': 0}

    def _make(name=None, role='doctor', department=None, status='active', **extra):
        counter['n'] += 1
        name = name or f'Staff {counter["n"]}'
        email = extra.pop('email', f'staff{counter["n"]}@example.org')
        return StaffMember.objects.create_user(
            email=email, password=PASSWORD, name=name, role=roles[role],
            department=department, status=status, **extra,
        )

    return _make


@pytest.fixture
def admin(make_staff):
    return make_staff('Alice Admin', role='admin', email='admin@example.org')


@pytest.fixture
def client_for():
    def _client(staff):
        client = APIClient()
        token = issue_token(StaffIdentity(staff))
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {token.key}')
        return client

    return _client


@pytest.fixture
def admin_client(admin, client_for):
    return client_for(admin)
