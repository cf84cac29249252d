"""Self-service profile for public account holders."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from ..permissions import IsAccountHolder
from ..responses import ok
from ..serializers.auth import AccountProfileSerializer
from ..services.auth import format_account


@api_view(['GET', 'PUT'])
@permission_classes([IsAccountHolder])
def account_profile(request):
    account = request.user.account
    if request.method == 'GET':
        return ok(format_account(account))

    s = AccountProfileSerializer(account, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    password = data.pop('password', None)
    for field, value in data.items():
        setattr(account, field, value if value is not None else '')
    if password:
        account.set_password(password)
    account.save()
    return ok(format_account(account), 'Profile updated successfully')
