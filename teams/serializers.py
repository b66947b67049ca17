# teams/serializers.py
from collections.abc import Mapping

from django.conf import settings
from rest_framework import serializers

from .constants import (
    DEPARTMENTS,
    YEARS,
    MIN_TEAM_SIZE,
    MAX_TEAM_SIZE,
    TEAM_NAME_PATTERN,
    PHONE_PATTERN,
    FILTER_ALL,
)
from .models import Team, Member
from .sanitizers import sanitize_name, sanitize_text, normalize_email
from .types import MemberInput, RegistrationInput, TeamQuery

PHONE_ERROR = "Invalid phone number (must be 10 digits starting with 6-9)"
STATUS_VALUES = [value for value, _ in Team.STATUS_CHOICES]


def _normalized(data, normalizers):
    """Apply per-field normalisers to string values before field validation."""
    if not isinstance(data, Mapping):
        return data
    data = dict(data)
    for field_name, normalize in normalizers.items():
        if isinstance(data.get(field_name), str):
            data[field_name] = normalize(data[field_name])
    return data


# -----------------------------------------
# REGISTRATION INPUT (public POST /register)
# -----------------------------------------
class MemberInputSerializer(serializers.Serializer):
    name = serializers.CharField(
        min_length=2,
        max_length=100,
        error_messages={
            "min_length": "Name must be at least 2 characters",
            "max_length": "Name must be less than 100 characters",
        },
    )
    email = serializers.EmailField(error_messages={"invalid": "Invalid email address"})
    phone = serializers.RegexField(PHONE_PATTERN, error_messages={"invalid": PHONE_ERROR})
    rollNo = serializers.CharField(
        max_length=20,
        error_messages={
            "blank": "Roll number is required",
            "max_length": "Roll number must be less than 20 characters",
        },
    )
    year = serializers.ChoiceField(choices=YEARS, error_messages={"invalid_choice": "Year is required"})
    # Accepted for compatibility with the form; leadership is positional
    isLeader = serializers.BooleanField(required=False, default=False)

    def to_internal_value(self, data):
        data = _normalized(data, {
            "name": sanitize_name,
            "email": normalize_email,
            "phone": sanitize_text,
            "rollNo": sanitize_text,
        })
        return super().to_internal_value(data)


class RegistrationSerializer(serializers.Serializer):
    """
    Validates a team registration payload.

    All-or-nothing: any field error rejects the whole payload.
    Use `to_registration()` after `is_valid()` for the typed value.
    """
    teamName = serializers.RegexField(
        TEAM_NAME_PATTERN,
        min_length=3,
        max_length=50,
        error_messages={
            "invalid": "Team name can only contain letters, numbers, spaces, hyphens, and underscores",
            "min_length": "Team name must be at least 3 characters",
            "max_length": "Team name must be less than 50 characters",
        },
    )
    department = serializers.ChoiceField(
        choices=DEPARTMENTS,
        error_messages={"invalid_choice": "Please select a department"},
    )
    leaderEmail = serializers.EmailField(error_messages={"invalid": "Invalid email address"})
    leaderPhone = serializers.RegexField(PHONE_PATTERN, error_messages={"invalid": PHONE_ERROR})
    members = serializers.ListField(
        child=MemberInputSerializer(),
        min_length=MIN_TEAM_SIZE,
        max_length=MAX_TEAM_SIZE,
        error_messages={
            "min_length": f"Team must have at least {MIN_TEAM_SIZE} members",
            "max_length": f"Team can have at most {MAX_TEAM_SIZE} members",
        },
    )
    agreedToRules = serializers.BooleanField()

    def to_internal_value(self, data):
        data = _normalized(data, {
            "teamName": sanitize_text,
            "leaderEmail": normalize_email,
            "leaderPhone": sanitize_text,
        })
        return super().to_internal_value(data)

    def validate_agreedToRules(self, value):
        # Literal JSON true only; "true"/1 are coerced by BooleanField
        raw = self.initial_data.get("agreedToRules") if isinstance(self.initial_data, Mapping) else None
        if value is not True or raw is not True:
            raise serializers.ValidationError("You must agree to the rules and code of conduct")
        return value

    def validate_members(self, members):
        seen = set()
        for member in members:
            if member["email"] in seen:
                raise serializers.ValidationError("Each member must have a unique email address")
            seen.add(member["email"])
        return members

    def to_registration(self) -> RegistrationInput:
        data = self.validated_data
        return RegistrationInput(
            team_name=data["teamName"],
            department=data["department"],
            leader_email=data["leaderEmail"],
            leader_phone=data["leaderPhone"],
            members=[
                MemberInput(
                    name=m["name"],
                    email=m["email"],
                    phone=m["phone"],
                    roll_no=m["rollNo"],
                    year=m["year"],
                )
                for m in data["members"]
            ],
            agreed_to_rules=data["agreedToRules"],
        )


# -----------------------------------------
# ADMIN INPUT
# -----------------------------------------
class TeamQuerySerializer(serializers.Serializer):
    """Query-string filters for the admin list and CSV export."""
    department = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(
        required=False, min_value=1, default=getattr(settings, "ADMIN_PAGE_SIZE_DEFAULT", 20),
    )

    def validate_department(self, value):
        if value and value != FILTER_ALL and value not in DEPARTMENTS:
            raise serializers.ValidationError("Unknown department")
        return value

    def validate_status(self, value):
        if value and value != FILTER_ALL and value not in STATUS_VALUES:
            raise serializers.ValidationError("Unknown status")
        return value

    def validate_limit(self, value):
        return min(value, getattr(settings, "ADMIN_PAGE_SIZE_MAX", 100))

    def to_query(self) -> TeamQuery:
        data = self.validated_data

        def _filter(name):
            value = data.get(name) or None
            return None if value == FILTER_ALL else value

        return TeamQuery(
            department=_filter("department"),
            status=_filter("status"),
            search=(data.get("search") or "").strip() or None,
            page=data["page"],
            limit=data["limit"],
        )


class StatusUpdateSerializer(serializers.Serializer):
    teamId = serializers.IntegerField(error_messages={"required": "Team ID is required"})
    status = serializers.ChoiceField(choices=STATUS_VALUES)


class TeamIdSerializer(serializers.Serializer):
    teamId = serializers.IntegerField(error_messages={"required": "Team ID is required"})


# -----------------------------------------
# OUTPUT
# -----------------------------------------
class PublicMemberSerializer(serializers.ModelSerializer):
    rollNo = serializers.CharField(source="roll_no", read_only=True)
    isLeader = serializers.BooleanField(source="is_leader", read_only=True)

    class Meta:
        model = Member
        fields = ["name", "email", "rollNo", "year", "isLeader"]
        read_only_fields = fields


class MemberSerializer(PublicMemberSerializer):
    class Meta:
        model = Member
        fields = ["id", "name", "email", "phone", "rollNo", "year", "isLeader"]
        read_only_fields = fields


class PublicTeamSerializer(serializers.ModelSerializer):
    """Team summary for the registrant (GET /register?id=)."""
    registrationId = serializers.CharField(source="registration_id", read_only=True)
    teamName = serializers.CharField(source="team_name", read_only=True)
    leaderEmail = serializers.EmailField(source="leader_email", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    members = PublicMemberSerializer(many=True, read_only=True)

    class Meta:
        model = Team
        fields = [
            "registrationId", "teamName", "department", "leaderEmail",
            "status", "createdAt", "members",
        ]
        read_only_fields = fields


class TeamSerializer(serializers.ModelSerializer):
    """Full team record for the admin API."""
    registrationId = serializers.CharField(source="registration_id", read_only=True)
    teamName = serializers.CharField(source="team_name", read_only=True)
    leaderEmail = serializers.EmailField(source="leader_email", read_only=True)
    leaderPhone = serializers.CharField(source="leader_phone", read_only=True)
    agreedToRules = serializers.BooleanField(source="agreed_to_rules", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    members = MemberSerializer(many=True, read_only=True)

    class Meta:
        model = Team
        fields = [
            "id", "registrationId", "teamName", "department", "leaderEmail",
            "leaderPhone", "status", "agreedToRules", "createdAt", "updatedAt",
            "members",
        ]
        read_only_fields = fields
