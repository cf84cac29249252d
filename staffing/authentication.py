"""
Bearer token authentication.

Builds on DRF's ``TokenAuthentication`` for header parsing and only
swaps the token model and the credential lookup: a key may belong to a
staff member or to a public account, and the resolved identity (see
:mod:`staffing.identity`) becomes ``request.user``.  Keeping this out
of the view modules avoids circular imports when DRF loads its
authentication classes.
"""
from __future__ import annotations

from django.utils import timezone
from rest_framework import authentication, exceptions

from .identity import resolve_identity
from .models import AccessToken


class BearerTokenAuthentication(authentication.TokenAuthentication):
    """``Authorization: Bearer <key>``.

    An unknown key is a 401; a key whose owner has been deactivated is
    a 403 so the dashboard can tell the two apart.
    """

    keyword = 'Bearer'
    model = AccessToken

    def authenticate_credentials(self, key):
        try:
            token = AccessToken.objects.select_related('staff__role', 'account').get(key=key)
        except AccessToken.DoesNotExist:
            raise exceptions.AuthenticationFailed('Invalid token.')

        identity = resolve_identity(token)
        if not identity.is_active:
            raise exceptions.PermissionDenied('Your account is not active. Please contact administration.')

        AccessToken.objects.filter(pk=token.pk).update(last_used_at=timezone.now())
        return identity, token
