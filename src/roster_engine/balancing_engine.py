"""Roster balancing engine - orchestrates scoring, captaincy and the draft."""

import logging
from typing import Dict, List, Optional, Sequence

from src.roster_engine.allocation_rules import (
    AllocationError,
    AllocationRules,
    DuplicatePlayer,
)
from src.roster_engine.captain_selector import CaptainSelector
from src.roster_engine.config import DEFAULT_TEAM_ID_FORMAT
from src.roster_engine.draft_allocator import DraftAllocator
from src.roster_engine.models import (
    EngineConfig,
    PlayerRecord,
    ScoredPlayer,
    Team,
    TeamAssignment,
)
from src.roster_engine.roster_builder import RosterBuilder
from src.roster_engine.score_aggregator import ScoreAggregator

logger = logging.getLogger(__name__)


class RosterBalancingEngine:
    """Main entry point for splitting a player pool into balanced teams.

    Coordinates AllocationRules (validation), ScoreAggregator (scores),
    CaptainSelector (captaincy), DraftAllocator (pool distribution) and
    RosterBuilder (output shape). Holds no per-run state, so one engine
    can serve any number of competitions.
    """

    def __init__(self, config: Optional[EngineConfig] = None, id_prefix: str = ""):
        self.config = config or EngineConfig()
        self.id_prefix = id_prefix
        self.rules = AllocationRules(self.config.min_team_count)
        self.aggregator = ScoreAggregator(self.config)
        self.selector = CaptainSelector()
        self.allocator = DraftAllocator(self.config)
        self.builder = RosterBuilder()

    def form_teams(
        self, players: Sequence[PlayerRecord], team_count: int
    ) -> List[TeamAssignment]:
        """Form *team_count* balanced teams from scratch.

        Args:
            players: Every eligible player, read as one consistent snapshot.
            team_count: Number of teams to create.

        Returns:
            One TeamAssignment per team, in captain vote-rank order.

        Raises:
            InvalidTeamCount: team_count below the minimum.
            InsufficientPlayers: fewer players than teams.
            DuplicatePlayer: a player id occurs twice.
        """
        try:
            self.rules.validate_request(players, team_count)
        except AllocationError as e:
            logger.warning("Team formation rejected: %s", e)
            raise

        scored = self.aggregator.score_all(players)
        captains, pool = self.selector.select(scored, team_count)

        teams = [
            Team.seed(
                team_id=self._team_id(index),
                name=self.config.team_name(index),
                captain=captain,
            )
            for index, captain in enumerate(captains)
        ]

        logger.info(
            "Forming %d teams from %d players (%d in draft pool)",
            team_count, len(players), len(pool),
        )

        self.allocator.allocate(teams, pool)
        return self.builder.build(teams)

    def rebalance_teams(
        self,
        players: Sequence[PlayerRecord],
        existing_rosters: Sequence[TeamAssignment],
    ) -> List[TeamAssignment]:
        """Redraw existing teams around their current captains.

        Each roster keeps its id, name and captain; every other player goes
        back into the pool and is drafted again with the same scoring and
        selection rules as initial formation. Rosters without a captain
        start empty.

        Raises:
            InvalidTeamCount: no rosters given.
            InsufficientPlayers: fewer players than rosters.
            DuplicatePlayer: a player id occurs twice, or one player
                captains two rosters.
            AllocationError: a roster's captain is not among *players*.
        """
        try:
            self.rules.validate_request(players, len(existing_rosters))
            scored = self.aggregator.score_all(players)
            by_id = {p.player_id: p for p in scored}
            teams = self._seed_from_rosters(existing_rosters, by_id)
        except AllocationError as e:
            logger.warning("Rebalance rejected: %s", e)
            raise

        captain_ids = {t.captain.player_id for t in teams if t.captain}
        pool = [p for p in scored if p.player_id not in captain_ids]

        logger.info(
            "Rebalancing %d teams (%d captains kept, %d players redrafted)",
            len(teams), len(captain_ids), len(pool),
        )

        self.allocator.allocate(teams, pool)
        return self.builder.build(teams)

    @staticmethod
    def summarize(assignments: Sequence[TeamAssignment]) -> Dict:
        """Balance overview for a finished allocation.

        Returns dict with team/player counts, the highest and lowest team
        average, and the spread between them.
        """
        if not assignments:
            return {
                "team_count": 0,
                "player_count": 0,
                "highest_average": 0,
                "lowest_average": 0,
                "spread": 0,
            }

        averages = [a.average_score for a in assignments]
        return {
            "team_count": len(assignments),
            "player_count": sum(a.member_count for a in assignments),
            "highest_average": max(averages),
            "lowest_average": min(averages),
            "spread": max(averages) - min(averages),
        }

    def _team_id(self, index: int) -> str:
        return DEFAULT_TEAM_ID_FORMAT.format(prefix=self.id_prefix, number=index + 1)

    def _seed_from_rosters(
        self,
        rosters: Sequence[TeamAssignment],
        by_id: Dict[str, ScoredPlayer],
    ) -> List[Team]:
        teams = []
        seen_captains = set()
        for roster in rosters:
            captain = None
            if roster.captain_id is not None:
                if roster.captain_id not in by_id:
                    raise AllocationError(
                        f"Captain {roster.captain_id} of {roster.name} "
                        "is not among the supplied players"
                    )
                if roster.captain_id in seen_captains:
                    raise DuplicatePlayer(roster.captain_id)
                seen_captains.add(roster.captain_id)
                captain = by_id[roster.captain_id]

            teams.append(Team.seed(roster.team_id, roster.name, captain))
        return teams
