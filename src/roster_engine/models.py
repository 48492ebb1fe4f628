"""Roster engine data models - inputs, working state and output records."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from src.roster_engine.config import (
    DEFAULT_SCORE,
    DEFAULT_TEAM_NAME_FORMAT,
    MIN_TEAM_COUNT,
    PEER_RATING_WEIGHT,
    SELF_ASSESSMENT_WEIGHT,
    TARGET_SCORE,
)


@dataclass(frozen=True)
class SelfAssessment:
    """A player's own rating of their skills, each on a 0-100 scale."""

    technical: float
    tactical: float
    physical: float
    mental: float

    def values(self) -> Tuple[float, float, float, float]:
        return (self.technical, self.tactical, self.physical, self.mental)


@dataclass(frozen=True)
class PlayerRecord:
    """A registered player as supplied by the calling layer."""

    player_id: str
    name: str
    self_assessment: Optional[SelfAssessment] = None
    peer_ratings: Tuple[float, ...] = ()
    vote_count: int = 0


@dataclass(frozen=True)
class ScoredPlayer:
    """A player paired with the composite score computed for this run."""

    player: PlayerRecord
    score: int

    @property
    def player_id(self) -> str:
        return self.player.player_id


@dataclass
class Team:
    """A team being built during one allocation run."""

    team_id: str
    name: str
    captain: Optional[ScoredPlayer] = None
    members: List[ScoredPlayer] = field(default_factory=list)
    total_score: float = 0.0

    @classmethod
    def seed(cls, team_id: str, name: str, captain: Optional[ScoredPlayer]) -> "Team":
        """Create a team containing only its captain (or nobody)."""
        team = cls(team_id=team_id, name=name, captain=captain)
        if captain is not None:
            team.add_member(captain)
        return team

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def average_score(self) -> float:
        """Always derived from the running total, never stored."""
        if not self.members:
            return 0.0
        return self.total_score / len(self.members)

    def average_with(self, candidate: ScoredPlayer) -> float:
        """Average the team would have if *candidate* joined it."""
        return (self.total_score + candidate.score) / (self.member_count + 1)

    def add_member(self, player: ScoredPlayer):
        self.members.append(player)
        self.total_score += player.score

    def member_ids(self) -> List[str]:
        return [m.player_id for m in self.members]


@dataclass
class AllocationState:
    """Transient working set for a single draft run."""

    pool: List[ScoredPlayer]
    teams: List[Team]
    going_forward: bool = True

    def team_order(self) -> List[Team]:
        """Teams in the visiting order of the current round."""
        if self.going_forward:
            return list(self.teams)
        return list(reversed(self.teams))

    def flip_direction(self):
        self.going_forward = not self.going_forward

    def is_exhausted(self) -> bool:
        return not self.pool


@dataclass(frozen=True)
class TeamAssignment:
    """Finished team, shaped for the persistence layer."""

    team_id: str
    name: str
    captain_id: Optional[str]
    member_ids: Tuple[str, ...]
    average_score: int
    member_count: int
    highest_score: int
    lowest_score: int

    def to_dict(self) -> Dict:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "captain_id": self.captain_id,
            "member_ids": list(self.member_ids),
            "average_score": self.average_score,
            "member_count": self.member_count,
            "highest_score": self.highest_score,
            "lowest_score": self.lowest_score,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "TeamAssignment":
        return cls(
            team_id=data["team_id"],
            name=data["name"],
            captain_id=data.get("captain_id"),
            member_ids=tuple(data.get("member_ids", [])),
            average_score=data.get("average_score", 0),
            member_count=data.get("member_count", len(data.get("member_ids", []))),
            highest_score=data.get("highest_score", 0),
            lowest_score=data.get("lowest_score", 0),
        )


@dataclass
class EngineConfig:
    """Tunable engine settings; defaults match the competition rules."""

    target_score: float = TARGET_SCORE
    default_score: int = DEFAULT_SCORE
    self_weight: float = SELF_ASSESSMENT_WEIGHT
    peer_weight: float = PEER_RATING_WEIGHT
    team_name_format: str = DEFAULT_TEAM_NAME_FORMAT
    min_team_count: int = MIN_TEAM_COUNT

    def team_name(self, index: int) -> str:
        """Display name for the team at zero-based *index*."""
        return self.team_name_format.format(number=index + 1)
