from datetime import timedelta
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, RequestFactory, override_settings
from django.utils import timezone

from teams.models import RateLimitRecord
from teams.rate_limit import check_rate_limit, get_client_ip, prune_expired, seconds_until_reset

ENDPOINT = "/api/register"


@override_settings(RATE_LIMIT_WINDOW_SECONDS=60, RATE_LIMIT_MAX_REQUESTS=5)
class CheckRateLimitTestCase(TestCase):
    def setUp(self):
        self.now = timezone.now()

    def test_first_five_allowed_sixth_denied(self):
        results = [check_rate_limit("1.2.3.4", ENDPOINT, now=self.now) for _ in range(6)]

        self.assertEqual(results, [True] * 5 + [False])
        self.assertEqual(RateLimitRecord.objects.get(ip="1.2.3.4").count, 5)

    def test_denied_requests_do_not_grow_the_counter(self):
        for _ in range(8):
            check_rate_limit("1.2.3.4", ENDPOINT, now=self.now)
        self.assertEqual(RateLimitRecord.objects.get(ip="1.2.3.4").count, 5)

    def test_window_expiry_resets_the_counter(self):
        for _ in range(5):
            check_rate_limit("1.2.3.4", ENDPOINT, now=self.now)
        self.assertFalse(check_rate_limit("1.2.3.4", ENDPOINT, now=self.now + timedelta(seconds=59)))

        later = self.now + timedelta(seconds=61)
        self.assertTrue(check_rate_limit("1.2.3.4", ENDPOINT, now=later))

        record = RateLimitRecord.objects.get(ip="1.2.3.4")
        self.assertEqual(record.count, 1)
        self.assertEqual(record.window_start, later)

    def test_counters_are_per_ip_and_endpoint(self):
        for _ in range(5):
            check_rate_limit("1.2.3.4", ENDPOINT, now=self.now)

        self.assertTrue(check_rate_limit("5.6.7.8", ENDPOINT, now=self.now))
        self.assertTrue(check_rate_limit("1.2.3.4", "/api/other", now=self.now))
        self.assertFalse(check_rate_limit("1.2.3.4", ENDPOINT, now=self.now))

    @override_settings(RATE_LIMIT_MAX_REQUESTS=2)
    def test_limit_comes_from_settings(self):
        results = [check_rate_limit("9.9.9.9", ENDPOINT, now=self.now) for _ in range(3)]
        self.assertEqual(results, [True, True, False])

    def test_storage_error_fails_open(self):
        with mock.patch.object(
            RateLimitRecord.objects, "filter", side_effect=DatabaseError("database is locked"),
        ):
            self.assertTrue(check_rate_limit("1.2.3.4", ENDPOINT, now=self.now))

    def test_prune_removes_only_expired_rows(self):
        RateLimitRecord.objects.create(ip="old", endpoint=ENDPOINT, count=3,
                                       window_start=self.now - timedelta(minutes=5))
        RateLimitRecord.objects.create(ip="new", endpoint=ENDPOINT, count=3, window_start=self.now)

        self.assertEqual(prune_expired(self.now), 1)
        self.assertEqual(list(RateLimitRecord.objects.values_list("ip", flat=True)), ["new"])

    def test_seconds_until_reset(self):
        check_rate_limit("1.2.3.4", ENDPOINT, now=self.now)

        remaining = seconds_until_reset("1.2.3.4", ENDPOINT, now=self.now + timedelta(seconds=20))
        self.assertIn(remaining, (40, 41))
        self.assertIsNone(seconds_until_reset("unknown-ip", ENDPOINT, now=self.now))


class ClientIPTestCase(TestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_first_forwarded_hop_wins(self):
        request = self.factory.post("/", HTTP_X_FORWARDED_FOR="203.0.113.1, 10.0.0.1", REMOTE_ADDR="127.0.0.1")
        self.assertEqual(get_client_ip(request), "203.0.113.1")

    def test_real_ip_header_is_second_choice(self):
        request = self.factory.post("/", HTTP_X_REAL_IP="198.51.100.2", REMOTE_ADDR="127.0.0.1")
        self.assertEqual(get_client_ip(request), "198.51.100.2")

    def test_falls_back_to_remote_addr(self):
        request = self.factory.post("/", REMOTE_ADDR="192.0.2.5")
        self.assertEqual(get_client_ip(request), "192.0.2.5")

    def test_unknown_when_nothing_is_available(self):
        request = self.factory.post("/")
        request.META.pop("REMOTE_ADDR", None)
        self.assertEqual(get_client_ip(request), "unknown")
