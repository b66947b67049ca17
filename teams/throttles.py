# teams/throttles.py

from rest_framework.throttling import BaseThrottle

from .constants import ENDPOINT_REGISTER
from .rate_limit import check_rate_limit, get_client_ip, seconds_until_reset


class RegistrationRateThrottle(BaseThrottle):
    """
    Throttle registration submissions per client IP per endpoint.

    Counter key: (ip, view.rate_limit_endpoint or /api/register)
    Only POST is counted; lookups and receipt downloads pass through.
    """
    methods = ("POST",)

    def __init__(self):
        self._ip = None
        self._endpoint = None

    def allow_request(self, request, view):
        if request.method not in self.methods:
            return True

        self._ip = get_client_ip(request)
        self._endpoint = getattr(view, "rate_limit_endpoint", ENDPOINT_REGISTER)
        return check_rate_limit(self._ip, self._endpoint)

    def wait(self):
        if self._ip is None:
            return None
        return seconds_until_reset(self._ip, self._endpoint)
