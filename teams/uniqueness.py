# teams/uniqueness.py
"""
Team-name and member-email uniqueness.

The pre-check gives the caller a precise 409 (which emails clash). It is
not the guarantee: Team.team_name and Member.email carry unique indexes,
and store.create_team re-runs find_conflicts when the write trips one.
"""
import logging
from typing import Iterable

from core.exceptions import ConflictError

from .models import Team, Member
from .types import Conflicts

logger = logging.getLogger("registrations.teams")

TEAM_NAME_TAKEN = "Team name already exists. Please choose a different name."
EMAILS_TAKEN = "One or more team members are already registered with another team."


def find_conflicts(team_name: str, emails: Iterable[str]) -> Conflicts:
    emails = list(emails)

    # Exact, case-sensitive match on the stored name
    name_taken = any(
        name == team_name
        for name in Team.objects.filter(team_name=team_name).values_list("team_name", flat=True)
    )

    duplicate_emails = []
    if emails:
        taken = set(Member.objects.filter(email__in=emails).values_list("email", flat=True))
        # Keep submission order in the report
        duplicate_emails = [email for email in emails if email in taken]

    return Conflicts(team_name_taken=name_taken, duplicate_emails=duplicate_emails)


def raise_for_conflicts(conflicts: Conflicts) -> None:
    if conflicts.team_name_taken:
        raise ConflictError(TEAM_NAME_TAKEN)
    if conflicts.duplicate_emails:
        raise ConflictError(EMAILS_TAKEN, duplicates=conflicts.duplicate_emails)


def ensure_unique(team_name: str, emails: Iterable[str]) -> None:
    """Raise ConflictError (409) if the name or any email is already registered."""
    conflicts = find_conflicts(team_name, emails)
    if conflicts:
        logger.info(
            f"Registration conflict: team_name_taken={conflicts.team_name_taken}, "
            f"duplicates={conflicts.duplicate_emails}"
        )
    raise_for_conflicts(conflicts)
