from teams.models import Team, Member


def member_payload(prefix, index, **overrides):
    data = {
        "name": f"{prefix.title()} Member {index}",
        "email": f"{prefix}.member{index}@example.com",
        "phone": f"98765{index:05d}",
        "rollNo": f"22AIML{index:03d}",
        "year": "1st Year" if index % 2 else "2nd Year",
    }
    data.update(overrides)
    return data


def registration_payload(team_name="Alpha Team", prefix="alpha", member_count=3, **overrides):
    """A valid POST /api/register/ body."""
    data = {
        "teamName": team_name,
        "department": "CSPIT - AIML",
        "leaderEmail": f"{prefix}.member1@example.com",
        "leaderPhone": "9876500001",
        "members": [member_payload(prefix, i) for i in range(1, member_count + 1)],
        "agreedToRules": True,
    }
    data.update(overrides)
    return data


def create_team(team_name="Seed Team", prefix="seed", registration_id=None,
                department="CSPIT - CSE", status=Team.STATUS_PENDING, member_count=3):
    """Persist a team directly, bypassing validation."""
    team = Team.objects.create(
        registration_id=registration_id or f"MFA-{prefix.upper()}-0001",
        team_name=team_name,
        department=department,
        leader_email=f"{prefix}.member1@example.com",
        leader_phone="9876500001",
        status=status,
        agreed_to_rules=True,
    )
    for i in range(member_count):
        Member.objects.create(
            team=team,
            name=f"{prefix.title()} Member {i + 1}",
            email=f"{prefix}.member{i + 1}@example.com",
            phone=f"98765{i + 1:05d}",
            roll_no=f"22CSE{i + 1:03d}",
            year="1st Year",
            is_leader=(i == 0),
            position=i,
        )
    return team
