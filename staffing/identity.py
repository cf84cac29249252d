"""
Authenticated identities.

A bearer token belongs either to a staff member or to a public
account.  :func:`resolve_identity` turns a token into one of two small
wrapper types which views branch on through ``kind`` instead of
inspecting model classes.  Both wrappers expose the handful of
attributes DRF expects from ``request.user``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .models import AccessToken, Account, StaffMember


@dataclass(frozen=True)
class StaffIdentity:
    staff: StaffMember

    kind = 'staff'
    is_authenticated = True
    is_anonymous = False

    @property
    def id(self) -> int:
        return self.staff.pk

    @property
    def pk(self) -> str:
        # Throttle cache keys need to be distinct across both identity tables.
        return f'{self.kind}:{self.id}'

    @property
    def is_active(self) -> bool:
        return self.staff.is_active

    @property
    def role_name(self) -> str | None:
        return self.staff.role_name


@dataclass(frozen=True)
class AccountIdentity:
    account: Account

    kind = 'account'
    is_authenticated = True
    is_anonymous = False

    @property
    def id(self) -> int:
        return self.account.pk

    @property
    def pk(self) -> str:
        return f'{self.kind}:{self.id}'

    @property
    def is_active(self) -> bool:
        return self.account.is_active

    @property
    def role_name(self) -> str | None:
        return None


Identity = Union[StaffIdentity, AccountIdentity]


def resolve_identity(token: AccessToken) -> Identity:
    if token.staff_id is not None:
        return StaffIdentity(token.staff)
    return AccountIdentity(token.account)
