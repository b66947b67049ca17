from smtplib import SMTPException
from unittest import mock

from django.core import mail
from django.test import TestCase

from teams.emails import send_status_update_email
from teams.models import Team
from teams.notifications import dispatch_status_update
from teams.qr import badge_payload
from teams.receipt_generator import generate_receipt_pdf, receipt_filename
from teams.tasks import send_registration_confirmation_task, send_status_update_task
from teams.tests.helpers import create_team


class ConfirmationTaskTestCase(TestCase):
    def setUp(self):
        self.team = create_team(team_name="Kappa", prefix="kappa", registration_id="MFA-K-0001")

    def test_email_carries_pdf_receipt(self):
        result = send_registration_confirmation_task(self.team.id)

        self.assertEqual(result, "sent")
        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ["kappa.member1@example.com"])
        self.assertIn("MFA-K-0001", message.body)
        self.assertIn("Kappa", message.subject)

        filename, content, mimetype = message.attachments[0]
        self.assertEqual(filename, "MathFlowAI-Receipt-MFA-K-0001.pdf")
        self.assertEqual(mimetype, "application/pdf")
        self.assertTrue(content.startswith(b"%PDF"))

    def test_receipt_failure_still_sends_email(self):
        with mock.patch("teams.tasks.generate_receipt_pdf", side_effect=RuntimeError("font missing")):
            result = send_registration_confirmation_task(self.team.id)

        self.assertEqual(result, "sent")
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].attachments, [])

    def test_email_failure_is_swallowed(self):
        with mock.patch("teams.tasks.send_confirmation_email", side_effect=SMTPException("relay denied")):
            result = send_registration_confirmation_task(self.team.id)

        self.assertEqual(result, "email_failed")
        # The registration itself is untouched
        self.assertTrue(Team.objects.filter(pk=self.team.pk).exists())

    def test_missing_team(self):
        self.assertEqual(send_registration_confirmation_task(987654), "team_not_found")
        self.assertEqual(len(mail.outbox), 0)


class StatusUpdateTaskTestCase(TestCase):
    def setUp(self):
        self.team = create_team(team_name="Lambda", prefix="lambda", registration_id="MFA-L-0001")

    def test_approved_email(self):
        self.assertEqual(send_status_update_task(self.team.id, Team.STATUS_APPROVED), "sent")

        message = mail.outbox[0]
        self.assertIn("Team Approved!", message.subject)
        self.assertIn("Congratulations", message.body)
        self.assertEqual(message.to, ["lambda.member1@example.com"])

    def test_rejected_and_waitlist_emails(self):
        send_status_update_task(self.team.id, Team.STATUS_REJECTED)
        send_status_update_task(self.team.id, Team.STATUS_WAITLIST)

        subjects = [m.subject for m in mail.outbox]
        self.assertIn("Registration Not Approved", subjects[0])
        self.assertIn("Added to Waitlist", subjects[1])

    def test_pending_sends_nothing(self):
        self.assertEqual(send_status_update_task(self.team.id, Team.STATUS_PENDING), "skipped")
        self.assertFalse(send_status_update_email(self.team, Team.STATUS_PENDING))
        self.assertEqual(len(mail.outbox), 0)

    def test_smtp_failure_is_swallowed(self):
        with mock.patch("teams.emails.EmailMultiAlternatives.send", side_effect=SMTPException("down")):
            self.assertEqual(send_status_update_task(self.team.id, Team.STATUS_APPROVED), "email_failed")

    def test_dispatch_skips_pending(self):
        with mock.patch("teams.notifications.send_status_update_task.delay") as mock_delay:
            with self.captureOnCommitCallbacks(execute=True):
                self.assertFalse(dispatch_status_update(self.team, Team.STATUS_PENDING))
                self.assertTrue(dispatch_status_update(self.team, Team.STATUS_REJECTED))

        mock_delay.assert_called_once_with(self.team.id, Team.STATUS_REJECTED)


class ReceiptTestCase(TestCase):
    def test_receipt_renders_for_a_full_team(self):
        team = create_team(team_name="Mu", prefix="mu", registration_id="MFA-M-0001", member_count=5)

        pdf = generate_receipt_pdf(team)

        self.assertTrue(pdf.startswith(b"%PDF"))
        self.assertGreater(len(pdf), 1000)
        self.assertEqual(receipt_filename(team.registration_id), "MathFlowAI-Receipt-MFA-M-0001.pdf")

    def test_badge_payload(self):
        team = create_team(team_name="Nu", prefix="nu", registration_id="MFA-N-0001", member_count=4)
        self.assertEqual(
            badge_payload(team),
            '{"registrationId": "MFA-N-0001", "teamName": "Nu", "department": "CSPIT - CSE", "memberCount": 4}',
        )
