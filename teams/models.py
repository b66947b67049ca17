# teams/models.py
from django.db import models

from .constants import DEPARTMENT_CHOICES, YEAR_CHOICES


class Team(models.Model):
    """
    A registered team: 3-5 members plus team-level metadata.

    Created atomically with its members; only `status` changes afterwards,
    and only through the admin workflow (teams/state_machine.py).
    """
    STATUS_PENDING = "PENDING"
    STATUS_APPROVED = "APPROVED"
    STATUS_REJECTED = "REJECTED"
    STATUS_WAITLIST = "WAITLIST"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_WAITLIST, "Waitlist"),
    ]

    registration_id = models.CharField(max_length=40, unique=True)
    # Unique index backs the duplicate-name check (409 path on IntegrityError)
    team_name = models.CharField(max_length=50, unique=True)
    department = models.CharField(max_length=32, choices=DEPARTMENT_CHOICES)
    leader_email = models.EmailField()
    leader_phone = models.CharField(max_length=10)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    agreed_to_rules = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="team_status_idx"),
            models.Index(fields=["department"], name="team_department_idx"),
            models.Index(fields=["created_at"], name="team_created_idx"),
        ]

    def __str__(self):
        return f"{self.team_name} ({self.registration_id})"

    @property
    def leader(self):
        # Prefetched members are already leader-first
        members = list(self.members.all())
        for member in members:
            if member.is_leader:
                return member
        return members[0] if members else None


class Member(models.Model):
    """
    Team member. `email` is unique across ALL teams, not just within one.
    """
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="members")
    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=10)
    roll_no = models.CharField(max_length=20)
    year = models.CharField(max_length=16, choices=YEAR_CHOICES)
    is_leader = models.BooleanField(default=False)
    # Submission order (0 = leader)
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["-is_leader", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["team"],
                condition=models.Q(is_leader=True),
                name="member_one_leader_per_team",
            ),
            models.UniqueConstraint(
                fields=["team", "position"],
                name="member_team_position_uniq",
            ),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}> in {self.team.team_name}"


class RateLimitRecord(models.Model):
    """
    Fixed-window request counter per (ip, endpoint).

    Ephemeral: expired rows are reset on the next hit and pruned
    opportunistically by teams/rate_limit.py.
    """
    ip = models.CharField(max_length=64)
    endpoint = models.CharField(max_length=128)
    count = models.PositiveIntegerField(default=1)
    window_start = models.DateTimeField()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["ip", "endpoint"], name="ratelimit_ip_endpoint_uniq"),
        ]
        indexes = [
            models.Index(fields=["window_start"], name="ratelimit_window_idx"),
        ]

    def __str__(self):
        return f"{self.ip} {self.endpoint}: {self.count}"
