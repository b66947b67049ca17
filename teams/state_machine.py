# teams/state_machine.py
"""
Team review lifecycle.

PENDING / APPROVED / REJECTED / WAITLIST, initial PENDING, no terminal
state. Every transition (self-loops included) is currently legal; the
table exists so a stricter lifecycle is a data change, e.g. dropping
APPROVED from the REJECTED row.
"""
from typing import Tuple
import logging

from .models import Team
from . import store

logger = logging.getLogger('registrations.teams')

ALL_STATUSES = [value for value, _ in Team.STATUS_CHOICES]

# Valid state transitions: from_status -> list of allowed to_statuses
VALID_TRANSITIONS = {status: list(ALL_STATUSES) for status in ALL_STATUSES}


def can_transition(team: Team, new_status: str) -> Tuple[bool, str]:
    """
    Check if a team can transition to a new status.

    Returns (can_transition: bool, reason: str)
    """
    if new_status not in ALL_STATUSES:
        return False, f"Invalid status: {new_status}"

    if new_status == team.status:
        return True, "Same status"

    allowed = VALID_TRANSITIONS.get(team.status, [])
    if new_status not in allowed:
        return False, f"Cannot transition from '{team.status}' to '{new_status}'"

    return True, ""


def transition(team: Team, new_status: str, actor=None) -> Tuple[bool, str]:
    """
    Attempt to move a team to a new status; persists on success.

    Returns (success: bool, message: str)
    """
    can, reason = can_transition(team, new_status)

    if not can:
        logger.warning(
            f"Invalid state transition attempted: team={team.id}, "
            f"from={team.status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}. "
            f"Reason: {reason}"
        )
        return False, reason

    old_status = team.status
    store.update_status(team, new_status)

    logger.info(
        f"Team state transition: team={team.id} ({team.registration_id}), "
        f"from={old_status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}"
    )

    return True, f"Transitioned from '{old_status}' to '{new_status}'"


def get_allowed_transitions(team: Team) -> list:
    return VALID_TRANSITIONS.get(team.status, [])


def is_terminal_status(status: str) -> bool:
    """
    Check if a status is a terminal state (no further transitions).
    Currently none are.
    """
    return status not in VALID_TRANSITIONS or len(VALID_TRANSITIONS[status]) == 0
