# teams/emails.py
import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import escape

from .models import Team
from .receipt_generator import receipt_filename

logger = logging.getLogger("registrations.emails")

STATUS_MESSAGES = {
    Team.STATUS_APPROVED: (
        "Team Approved!",
        "Congratulations! Your team has been approved for {event}!",
    ),
    Team.STATUS_REJECTED: (
        "Registration Not Approved",
        "We regret to inform you that your team registration could not be approved at this time.",
    ),
    Team.STATUS_WAITLIST: (
        "Added to Waitlist",
        "Your team has been added to the waitlist. We will notify you if a spot becomes available.",
    ),
}


def _reply_to():
    reply_to = getattr(settings, "EVENT_REPLY_TO_EMAIL", "")
    return [reply_to] if reply_to else None


def _send(subject, text_body, html_body, to, attachments=()):
    message = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        to=to,
        reply_to=_reply_to(),
    )
    message.attach_alternative(html_body, "text/html")
    for filename, content, mimetype in attachments:
        message.attach(filename, content, mimetype)
    # Errors propagate; the calling task logs them
    message.send(fail_silently=False)


def send_confirmation_email(team, pdf_bytes=None):
    """
    Registration confirmation to the team leader, with the PDF receipt
    attached when one was rendered.
    """
    event = settings.EVENT_NAME
    leader = team.leader
    leader_name = leader.name if leader else team.team_name
    members = list(team.members.all())

    members_text = "\n".join(
        f"  {i}. {m.name} ({m.roll_no}){' - Leader' if m.is_leader else ''}"
        for i, m in enumerate(members, start=1)
    )
    subject = f"Registration Confirmed - {team.team_name} | {event}"

    text_body = (
        f"Dear {leader_name},\n\n"
        f"Your team has been successfully registered for {event}.\n\n"
        f"  Registration ID: {team.registration_id}\n"
        f"  Team Name: {team.team_name}\n"
        f"  Department: {team.department}\n"
        f"  Team Size: {len(members)} Members\n\n"
        f"Team Members:\n{members_text}\n\n"
        f"Save your Registration ID - you'll need it on event day.\n"
        f"All team members must carry valid college ID cards.\n"
        + ("Your PDF receipt is attached to this email.\n" if pdf_bytes else "")
        + f"\nThank you,\n{settings.EVENT_ORGANIZER}"
    )

    members_html = "".join(
        f"<li><strong>{escape(m.name)}</strong> ({escape(m.roll_no)})"
        f"{' <em>Leader</em>' if m.is_leader else ''}<br><small>{escape(m.email)}</small></li>"
        for m in members
    )
    html_body = (
        f"<h2>{escape(event)}: Registration Confirmed</h2>"
        f"<p>Dear <strong>{escape(leader_name)}</strong>,</p>"
        f"<p>Your team has been successfully registered.</p>"
        f"<p>Registration ID: <code>{escape(team.registration_id)}</code><br>"
        f"Team Name: {escape(team.team_name)}<br>"
        f"Department: {escape(team.department)}</p>"
        f"<ol>{members_html}</ol>"
        f"<p>{escape(settings.EVENT_ORGANIZER)}</p>"
    )

    attachments = []
    if pdf_bytes:
        attachments.append((receipt_filename(team.registration_id), pdf_bytes, "application/pdf"))

    _send(subject, text_body, html_body, [team.leader_email], attachments)
    logger.info(f"Confirmation email sent: team={team.registration_id}, to={team.leader_email}")


def send_status_update_email(team, status=None):
    """
    Status-change notification to the leader. PENDING sends nothing.
    Returns True if an email was sent.
    """
    status = status or team.status
    if status not in STATUS_MESSAGES:
        return False

    event = settings.EVENT_NAME
    title, message = STATUS_MESSAGES[status]
    message = message.format(event=event)

    subject = f"{title} - {team.team_name} | {event}"
    text_body = (
        f"{title}\n\n"
        f"{message}\n\n"
        f"Team: {team.team_name}\n"
        f"Registration ID: {team.registration_id}\n\n"
        f"{settings.EVENT_ORGANIZER}"
    )
    html_body = (
        f"<h2>{escape(title)}</h2>"
        f"<p>{escape(message)}</p>"
        f"<p><strong>Team:</strong> {escape(team.team_name)}<br>"
        f"<strong>Registration ID:</strong> {escape(team.registration_id)}</p>"
    )

    _send(subject, text_body, html_body, [team.leader_email])
    logger.info(f"Status email sent: team={team.registration_id}, status={status}, to={team.leader_email}")
    return True
