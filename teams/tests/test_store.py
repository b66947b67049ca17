from django.db import IntegrityError, transaction
from django.test import TestCase

from core.exceptions import ConflictError
from teams import store, uniqueness
from teams.models import Team, Member
from teams.tests.helpers import create_team
from teams.types import MemberInput, RegistrationInput, TeamQuery


def make_registration(team_name="Store Team", prefix="store", count=3):
    return RegistrationInput(
        team_name=team_name,
        department="CSPIT - IT",
        leader_email=f"{prefix}.member0@example.com",
        leader_phone="9876500000",
        members=[
            MemberInput(
                name=f"Member {i}",
                email=f"{prefix}.member{i}@example.com",
                phone=f"98765{i:05d}",
                roll_no=f"22IT{i:03d}",
                year="2nd Year",
            )
            for i in range(count)
        ],
        agreed_to_rules=True,
    )


class CreateTeamTestCase(TestCase):
    def test_creates_team_and_members_atomically(self):
        team = store.create_team(make_registration(count=5), "MFA-STORE-0001")

        self.assertEqual(team.status, Team.STATUS_PENDING)
        members = list(team.members.all())
        self.assertEqual(len(members), 5)
        self.assertEqual([m.position for m in members], [0, 1, 2, 3, 4])
        self.assertTrue(members[0].is_leader)
        self.assertEqual(sum(m.is_leader for m in members), 1)
        self.assertEqual(team.leader.email, "store.member0@example.com")

    def test_name_race_becomes_conflict_and_writes_nothing(self):
        # Pre-check skipped: simulate a concurrent insert winning the race
        create_team(team_name="Store Team", prefix="winner")

        with self.assertRaises(ConflictError) as ctx:
            store.create_team(make_registration(), "MFA-STORE-0002")

        self.assertEqual(str(ctx.exception.detail), uniqueness.TEAM_NAME_TAKEN)
        self.assertEqual(Team.objects.count(), 1)
        self.assertFalse(Member.objects.filter(email__startswith="store.").exists())

    def test_email_race_reports_duplicates(self):
        create_team(team_name="Winner", prefix="store", member_count=3)

        with self.assertRaises(ConflictError) as ctx:
            store.create_team(make_registration(team_name="Loser", count=4), "MFA-STORE-0003")

        self.assertEqual(ctx.exception.status_code, 409)
        # The seeded team used member1..member3; member0 is free
        self.assertEqual(
            ctx.exception.duplicates,
            ["store.member1@example.com", "store.member2@example.com", "store.member3@example.com"],
        )
        self.assertFalse(Team.objects.filter(team_name="Loser").exists())

    def test_unrelated_integrity_error_propagates(self):
        create_team(registration_id="MFA-DUP-0001")

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                store.create_team(make_registration(team_name="Unique Name", prefix="fresh"), "MFA-DUP-0001")

    def test_second_leader_is_rejected_by_the_database(self):
        team = create_team()
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Member.objects.create(
                    team=team, name="Second Leader", email="second@example.com",
                    phone="9876511111", roll_no="X1", year="1st Year",
                    is_leader=True, position=9,
                )


class UniquenessTestCase(TestCase):
    def test_no_conflicts_for_fresh_submission(self):
        conflicts = uniqueness.find_conflicts("Brand New", ["a@example.com"])
        self.assertFalse(conflicts)

    def test_duplicate_emails_keep_submission_order(self):
        create_team(prefix="dup")
        conflicts = uniqueness.find_conflicts(
            "Other", ["dup.member3@example.com", "free@example.com", "dup.member1@example.com"],
        )
        self.assertEqual(conflicts.duplicate_emails, ["dup.member3@example.com", "dup.member1@example.com"])
        self.assertFalse(conflicts.team_name_taken)

    def test_name_conflict_takes_precedence(self):
        create_team(team_name="Taken", prefix="dup")
        with self.assertRaises(ConflictError) as ctx:
            uniqueness.ensure_unique("Taken", ["dup.member1@example.com"])
        self.assertEqual(ctx.exception.duplicates, [])


class QueryTestCase(TestCase):
    def setUp(self):
        for i in range(7):
            create_team(team_name=f"Team {i}", prefix=f"t{i}", registration_id=f"MFA-T{i}-0000")

    def test_pages_cover_every_team_once(self):
        seen = []
        for page in (1, 2, 3):
            result = store.list_teams(TeamQuery(page=page, limit=3))
            self.assertEqual(result.total, 7)
            self.assertEqual(result.total_pages, 3)
            seen.extend(t.registration_id for t in result.teams)

        self.assertEqual(len(seen), 7)
        self.assertEqual(len(set(seen)), 7)

    def test_page_past_the_end_is_empty(self):
        result = store.list_teams(TeamQuery(page=10, limit=3))
        self.assertEqual(result.teams, [])
        self.assertEqual(result.total, 7)

    def test_update_status_leaves_other_fields(self):
        team = Team.objects.get(registration_id="MFA-T0-0000")
        store.update_status(team, Team.STATUS_WAITLIST)

        reloaded = Team.objects.get(pk=team.pk)
        self.assertEqual(reloaded.status, Team.STATUS_WAITLIST)
        self.assertEqual(reloaded.team_name, "Team 0")
        self.assertEqual(reloaded.created_at, team.created_at)

    def test_stats_include_zero_counts(self):
        stats = store.get_team_stats()
        self.assertEqual(stats["total"], 7)
        self.assertEqual(stats["byStatus"], {"PENDING": 7, "APPROVED": 0, "REJECTED": 0, "WAITLIST": 0})
