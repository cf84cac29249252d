"""
Authentication endpoints: registration of public accounts, login for
both accounts and staff, logout and identity introspection.
"""
from __future__ import annotations

import logging

from rest_framework import exceptions
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated

from ..responses import created, ok
from ..serializers.auth import LoginSerializer, RegisterSerializer
from ..services import auth as auth_service
from ..throttling import LoginRateThrottle

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def register(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    account, token = auth_service.register_account(**s.validated_data)
    logger.info('Registered account %s', account.pk)
    return created(
        {
            'user': {**auth_service.format_account(account), 'user_type': 'account'},
            'token': token.key,
        },
        'Registration successful',
    )


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        identity, token = auth_service.login(s.validated_data['email'], s.validated_data['password'])
    except (exceptions.AuthenticationFailed, exceptions.PermissionDenied):
        logger.info('Failed login for %s from %s', s.validated_data['email'], request.META.get('REMOTE_ADDR'))
        raise
    return ok(
        {'user': auth_service.identity_payload(identity), 'token': token.key},
        'Login successful',
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    auth_service.logout(request.auth)
    return ok(message='Logged out successfully')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return ok(auth_service.identity_payload(request.user))
