# teams/tasks.py
"""
Best-effort side effects of registration and review.

Nothing here may fail the registration that already committed: every
error is logged and swallowed so the worker keeps running.
"""
import logging

from celery import shared_task

from .emails import send_confirmation_email, send_status_update_email
from .models import Team
from .receipt_generator import generate_receipt_pdf

logger = logging.getLogger("registrations.tasks")


def _load_team(team_id):
    try:
        return Team.objects.prefetch_related("members").get(pk=team_id)
    except Team.DoesNotExist:
        logger.warning(f"Team {team_id} not found, skipping notification")
        return None


@shared_task
def send_registration_confirmation_task(team_id: int):
    """
    Render the PDF receipt, then email it to the leader.
    A failed render still sends the email, without the attachment.
    """
    team = _load_team(team_id)
    if team is None:
        return "team_not_found"

    pdf_bytes = None
    try:
        pdf_bytes = generate_receipt_pdf(team)
    except Exception:
        logger.exception(f"Receipt generation failed for {team.registration_id}")

    try:
        send_confirmation_email(team, pdf_bytes=pdf_bytes)
    except Exception:
        logger.exception(f"Confirmation email failed for {team.registration_id} ({team.leader_email})")
        return "email_failed"

    return "sent"


@shared_task
def send_status_update_task(team_id: int, status: str):
    team = _load_team(team_id)
    if team is None:
        return "team_not_found"

    try:
        sent = send_status_update_email(team, status=status)
    except Exception:
        logger.exception(f"Status email failed for {team.registration_id} (status={status})")
        return "email_failed"

    return "sent" if sent else "skipped"
