# teams/exporters.py
import csv

from .constants import MAX_TEAM_SIZE

MEMBER_COLUMNS = ("Name", "Email", "Roll No")

HEADERS = [
    "Registration ID",
    "Team Name",
    "Department",
    "Status",
    "Leader Email",
    "Leader Phone",
    "Member Count",
    *[
        f"Member {i} {column}"
        for i in range(1, MAX_TEAM_SIZE + 1)
        for column in MEMBER_COLUMNS
    ],
    "Registered At",
]


def team_row(team):
    members = list(team.members.all())  # leader first (Member.Meta.ordering)
    member_cells = []
    for i in range(MAX_TEAM_SIZE):
        if i < len(members):
            member = members[i]
            member_cells.extend([member.name, member.email, member.roll_no])
        else:
            member_cells.extend(["", "", ""])

    return [
        team.registration_id,
        team.team_name,
        team.department,
        team.status,
        team.leader_email,
        team.leader_phone,
        str(len(members)),
        *member_cells,
        team.created_at.isoformat() if team.created_at else "",
    ]


def write_teams_csv(stream, teams):
    """
    Write the fixed-column export to a file-like object.

    Fields containing a comma, quote or newline are quoted and inner
    quotes doubled (csv.QUOTE_MINIMAL).
    """
    writer = csv.writer(stream, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(HEADERS)
    count = 0
    for team in teams:
        writer.writerow(team_row(team))
        count += 1
    return count
