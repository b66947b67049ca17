from django.test import TestCase

from teams import state_machine
from teams.models import Team
from teams.tests.helpers import create_team


class TeamStateMachineTestCase(TestCase):
    def setUp(self):
        self.team = create_team()

    def test_every_pair_of_statuses_is_allowed(self):
        for current in state_machine.ALL_STATUSES:
            self.team.status = current
            for target in state_machine.ALL_STATUSES:
                ok, reason = state_machine.can_transition(self.team, target)
                self.assertTrue(ok, f"{current} -> {target}: {reason}")

    def test_unknown_status_is_rejected(self):
        ok, reason = state_machine.can_transition(self.team, "ARCHIVED")
        self.assertFalse(ok)
        self.assertIn("Invalid status", reason)

    def test_transition_persists(self):
        ok, _ = state_machine.transition(self.team, Team.STATUS_WAITLIST)

        self.assertTrue(ok)
        self.team.refresh_from_db()
        self.assertEqual(self.team.status, Team.STATUS_WAITLIST)

    def test_failed_transition_does_not_persist(self):
        ok, _ = state_machine.transition(self.team, "ARCHIVED")

        self.assertFalse(ok)
        self.team.refresh_from_db()
        self.assertEqual(self.team.status, Team.STATUS_PENDING)

    def test_restricting_the_table_blocks_a_transition(self):
        original = state_machine.VALID_TRANSITIONS[Team.STATUS_REJECTED]
        state_machine.VALID_TRANSITIONS[Team.STATUS_REJECTED] = [Team.STATUS_REJECTED, Team.STATUS_WAITLIST]
        try:
            self.team.status = Team.STATUS_REJECTED
            ok, reason = state_machine.can_transition(self.team, Team.STATUS_APPROVED)
            self.assertFalse(ok)
            self.assertIn("Cannot transition", reason)
        finally:
            state_machine.VALID_TRANSITIONS[Team.STATUS_REJECTED] = original

    def test_no_status_is_terminal(self):
        for status in state_machine.ALL_STATUSES:
            self.assertFalse(state_machine.is_terminal_status(status))
        self.assertEqual(len(state_machine.get_allowed_transitions(self.team)), 4)
