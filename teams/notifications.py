# teams/notifications.py
"""
Hand-off from the request to the Celery tasks.

Tasks are enqueued on commit so the worker never sees an uncommitted
team. A broker outage at enqueue time is logged; the request that
triggered it has already succeeded.
"""
import logging

from django.db import transaction

from .models import Team
from .tasks import send_registration_confirmation_task, send_status_update_task

logger = logging.getLogger("registrations.notifications")


def _enqueue(task, *args):
    try:
        task.delay(*args)
    except Exception:
        logger.exception(f"Could not enqueue {task.name} with args={args}")


def dispatch_registration_confirmation(team):
    transaction.on_commit(lambda: _enqueue(send_registration_confirmation_task, team.id))


def dispatch_status_update(team, status=None):
    """Leader is notified for every status except PENDING."""
    status = status or team.status
    if status == Team.STATUS_PENDING:
        return False
    transaction.on_commit(lambda: _enqueue(send_status_update_task, team.id, status))
    return True
