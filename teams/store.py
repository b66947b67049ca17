# teams/store.py
"""
Registration store: the single source of truth for teams and their
status lifecycle.
"""
import logging

from django.db import transaction, IntegrityError
from django.db.models import Count, Q
from django.utils import timezone
from rest_framework.exceptions import NotFound

from .models import Team, Member
from .types import RegistrationInput, TeamQuery, TeamPage
from .uniqueness import find_conflicts, raise_for_conflicts

logger = logging.getLogger("registrations.teams")


def _teams():
    return Team.objects.prefetch_related("members")


def create_team(registration: RegistrationInput, registration_id: str) -> Team:
    """
    Create the team and its members in one transaction.

    The first submitted member is the leader. A unique-index violation
    (name or email registered concurrently) becomes a ConflictError.
    """
    try:
        with transaction.atomic():
            team = Team.objects.create(
                registration_id=registration_id,
                team_name=registration.team_name,
                department=registration.department,
                leader_email=registration.leader_email,
                leader_phone=registration.leader_phone,
                agreed_to_rules=registration.agreed_to_rules,
            )
            Member.objects.bulk_create([
                Member(
                    team=team,
                    name=member.name,
                    email=member.email,
                    phone=member.phone,
                    roll_no=member.roll_no,
                    year=member.year,
                    is_leader=(index == 0),
                    position=index,
                )
                for index, member in enumerate(registration.members)
            ])
    except IntegrityError:
        conflicts = find_conflicts(registration.team_name, registration.member_emails)
        if not conflicts:
            raise
        logger.warning(
            f"Unique constraint hit for team '{registration.team_name}' "
            f"(concurrent registration); duplicates={conflicts.duplicate_emails}"
        )
        raise_for_conflicts(conflicts)

    logger.info(
        f"Team created: id={team.id}, registration_id={team.registration_id}, "
        f"members={len(registration.members)}"
    )
    return _teams().get(pk=team.pk)


def get_team_by_registration_id(registration_id: str) -> Team:
    try:
        return _teams().get(registration_id=registration_id)
    except Team.DoesNotExist:
        raise NotFound("Team not found")


def get_team(team_id) -> Team:
    try:
        return _teams().get(pk=team_id)
    except Team.DoesNotExist:
        raise NotFound("Team not found")


def filter_teams(department=None, status=None, search=None):
    qs = _teams()
    if department:
        qs = qs.filter(department=department)
    if status:
        qs = qs.filter(status=status)
    if search:
        qs = qs.filter(
            Q(team_name__icontains=search)
            | Q(registration_id__icontains=search)
            | Q(leader_email__icontains=search)
        )
    return qs.order_by("-created_at", "-id")


def list_teams(query: TeamQuery) -> TeamPage:
    qs = filter_teams(query.department, query.status, query.search)
    total = qs.count()
    teams = list(qs[query.offset:query.offset + query.limit])
    return TeamPage(teams=teams, page=query.page, limit=query.limit, total=total)


def iter_export_teams(department=None, status=None):
    """All matching teams, newest first, members prefetched."""
    return filter_teams(department=department, status=status)


def update_status(team: Team, status: str) -> Team:
    """Overwrite status only; every other field is left untouched."""
    team.status = status
    team.updated_at = timezone.now()
    team.save(update_fields=["status", "updated_at"])
    return team


def get_team_stats() -> dict:
    by_status = {value: 0 for value, _ in Team.STATUS_CHOICES}
    by_status.update(
        (row["status"], row["count"])
        for row in Team.objects.order_by().values("status").annotate(count=Count("id"))
    )
    by_department = {
        row["department"]: row["count"]
        for row in Team.objects.order_by().values("department").annotate(count=Count("id"))
    }
    return {
        "byStatus": by_status,
        "byDepartment": by_department,
        "total": sum(by_status.values()),
    }
