# teams/services.py
import logging

from . import store
from .identifiers import generate_registration_id
from .notifications import dispatch_registration_confirmation
from .types import RegistrationInput
from .uniqueness import ensure_unique

logger = logging.getLogger("registrations.teams")


def register_team(registration: RegistrationInput):
    """
    Admission pipeline for an already-validated registration:
    uniqueness -> registration id -> atomic write -> async confirmation.

    Raises ConflictError (409) on a duplicate name/email. Success means
    the team is persisted; the receipt/email run after commit and their
    failures never reach the caller.
    """
    ensure_unique(registration.team_name, registration.member_emails)

    registration_id = generate_registration_id()
    team = store.create_team(registration, registration_id)

    dispatch_registration_confirmation(team)
    return team
