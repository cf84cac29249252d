"""
Login, registration and identity payloads.

Login looks the e-mail up among public accounts first and then among
staff members, mirroring how the dashboard signs both kinds of user in
through the same form.  Whichever table matches decides the identity
kind carried by the issued token.
"""
from __future__ import annotations

from typing import Optional

from django.db import transaction
from rest_framework import exceptions

from staffing.identity import AccountIdentity, Identity, StaffIdentity
from staffing.models import AccessToken, Account, StaffMember

INACTIVE_MESSAGE = 'Your account is not active. Please contact administration.'


def issue_token(identity: Identity, name: str = 'auth_token') -> AccessToken:
    if identity.kind == 'staff':
        return AccessToken.objects.create(staff=identity.staff, name=name)
    return AccessToken.objects.create(account=identity.account, name=name)


def authenticate_credentials(email: str, password: str) -> Identity:
    """Return the identity for ``email``/``password`` or raise 401/403."""
    account = Account.objects.filter(email__iexact=email).first()
    if account is not None and account.check_password(password):
        if not account.is_active:
            raise exceptions.PermissionDenied(INACTIVE_MESSAGE)
        return AccountIdentity(account)

    staff = StaffMember.objects.select_related('role', 'specialty', 'department').filter(email__iexact=email).first()
    if staff is not None and staff.check_password(password):
        if not staff.is_active:
            raise exceptions.PermissionDenied(INACTIVE_MESSAGE)
        return StaffIdentity(staff)

    raise exceptions.AuthenticationFailed('Invalid credentials')


def login(email: str, password: str) -> tuple[Identity, AccessToken]:
    identity = authenticate_credentials(email, password)
    return identity, issue_token(identity)


def register_account(*, name: str, email: str, password: str, phone: Optional[str] = '') -> tuple[Account, AccessToken]:
    with transaction.atomic():
        account = Account(name=name, email=email, phone=phone or '', account_type='patient', status='active')
        account.set_password(password)
        account.save()
        token = AccessToken.objects.create(account=account)
    return account, token


def logout(token: Optional[AccessToken]) -> None:
    if token is not None:
        AccessToken.objects.filter(pk=token.pk).delete()


def format_account(a: Account) -> dict:
    return {
        'id': a.id,
        'name': a.name,
        'email': a.email,
        'phone': a.phone,
        'account_type': a.account_type,
        'status': a.status,
        'avatar': a.avatar,
    }


def identity_payload(identity: Identity) -> dict:
    """User-shaped payload tagged with ``user_type``."""
    if identity.kind == 'account':
        return {**format_account(identity.account), 'user_type': 'account'}
    s = identity.staff
    return {
        'id': s.id,
        'name': s.name,
        'email': s.email,
        'phone': s.phone,
        'role': s.role.name if s.role_id else None,
        'roleId': s.role_id,
        'roleDisplay': s.role.display_name if s.role_id else None,
        'specialty': s.specialty.name if s.specialty_id else None,
        'specialtyId': s.specialty_id,
        'departmentId': s.department_id,
        'status': s.status,
        'avatar': s.avatar,
        'user_type': 'staff',
    }
