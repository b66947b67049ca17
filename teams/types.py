# teams/types.py
"""
Typed values passed between the validation layer, the store and the views.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class MemberInput:
    name: str
    email: str
    phone: str
    roll_no: str
    year: str


@dataclass(frozen=True)
class RegistrationInput:
    team_name: str
    department: str
    leader_email: str
    leader_phone: str
    members: List[MemberInput]
    agreed_to_rules: bool

    @property
    def member_emails(self) -> List[str]:
        return [member.email for member in self.members]


@dataclass(frozen=True)
class TeamQuery:
    """
    Closed set of admin list filters. None means "no filter".
    """
    department: Optional[str] = None
    status: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class TeamPage:
    teams: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)


@dataclass
class Conflicts:
    team_name_taken: bool = False
    duplicate_emails: List[str] = field(default_factory=list)

    def __bool__(self):
        return self.team_name_taken or bool(self.duplicate_emails)
