"""Finished team formatting for the persistence layer."""

from typing import List, Sequence

from src.roster_engine.models import Team, TeamAssignment
from src.roster_engine.score_aggregator import round_half_up


class RosterBuilder:
    """Converts drafted teams into TeamAssignment records."""

    def build(self, teams: Sequence[Team]) -> List[TeamAssignment]:
        return [self.build_team(team) for team in teams]

    @staticmethod
    def build_team(team: Team) -> TeamAssignment:
        scores = [m.score for m in team.members]
        return TeamAssignment(
            team_id=team.team_id,
            name=team.name,
            captain_id=team.captain.player_id if team.captain else None,
            member_ids=tuple(team.member_ids()),
            average_score=round_half_up(team.average_score),
            member_count=team.member_count,
            highest_score=max(scores) if scores else 0,
            lowest_score=min(scores) if scores else 0,
        )
