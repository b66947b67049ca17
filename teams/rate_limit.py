# teams/rate_limit.py
"""
Per-IP, per-endpoint fixed-window admission control.

Counters live in RateLimitRecord (one row per ip+endpoint). The
in-window increment is a single conditional UPDATE, so concurrent
requests cannot both read a stale count and both pass. Only the window
reset is read-then-write; racing resets may over-admit by a request.

This is abuse mitigation, not a security boundary: any storage error
fails OPEN and the request is allowed.
"""
import logging
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.db import DatabaseError
from django.db.models import F
from django.utils import timezone

from .models import RateLimitRecord

logger = logging.getLogger("registrations.ratelimit")


def _window() -> timedelta:
    return timedelta(seconds=getattr(settings, "RATE_LIMIT_WINDOW_SECONDS", 60))


def _max_requests() -> int:
    return getattr(settings, "RATE_LIMIT_MAX_REQUESTS", 5)


def get_client_ip(request) -> str:
    """
    First X-Forwarded-For hop, then X-Real-IP, then REMOTE_ADDR.
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first[:64]
    real_ip = request.META.get("HTTP_X_REAL_IP", "").strip()
    if real_ip:
        return real_ip[:64]
    return (request.META.get("REMOTE_ADDR") or "unknown")[:64]


def prune_expired(now=None) -> int:
    """Delete counters whose window has already closed."""
    now = now or timezone.now()
    deleted, _ = RateLimitRecord.objects.filter(window_start__lte=now - _window()).delete()
    return deleted


def check_rate_limit(ip: str, endpoint: str, now=None) -> bool:
    """
    Return True if this request is admitted.

    - no record            -> create (count=1), allow
    - in window, count < N -> increment, allow
    - in window, count >= N -> deny
    - window expired       -> reset (count=1, window_start=now), allow
    """
    now = now or timezone.now()
    window_floor = now - _window()
    limit = _max_requests()

    try:
        prune_expired(now)

        incremented = (
            RateLimitRecord.objects
            .filter(ip=ip, endpoint=endpoint, window_start__gt=window_floor, count__lt=limit)
            .update(count=F("count") + 1)
        )
        if incremented:
            return True

        record = RateLimitRecord.objects.filter(ip=ip, endpoint=endpoint).first()
        if record is not None and record.window_start > window_floor:
            logger.warning(f"Rate limit exceeded: ip={ip}, endpoint={endpoint}, count={record.count}")
            return False

        RateLimitRecord.objects.update_or_create(
            ip=ip,
            endpoint=endpoint,
            defaults={"count": 1, "window_start": now},
        )
        return True
    except DatabaseError as e:
        logger.error(f"Rate limit check failed, allowing request: ip={ip}, endpoint={endpoint}: {e}")
        return True


def seconds_until_reset(ip: str, endpoint: str, now=None) -> Optional[int]:
    now = now or timezone.now()
    try:
        record = RateLimitRecord.objects.filter(ip=ip, endpoint=endpoint).first()
    except DatabaseError:
        return None
    if record is None:
        return None
    remaining = (record.window_start + _window() - now).total_seconds()
    return max(0, int(remaining) + 1)
