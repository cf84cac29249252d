from rest_framework.throttling import AnonRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    """Per client IP limit for ``/login`` and ``/register``."""
    scope = 'login'
