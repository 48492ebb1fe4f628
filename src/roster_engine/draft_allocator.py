"""Snake draft that pulls every team's average toward the target score."""

import logging
from typing import List, Optional, Sequence

from src.roster_engine.models import AllocationState, EngineConfig, ScoredPlayer, Team

logger = logging.getLogger(__name__)


class DraftAllocator:
    """Distributes the pool across captain-seeded teams.

    Rounds alternate direction (0..N-1, then N-1..0, ...). On each turn the
    team takes the pool player whose addition brings its new average closest
    to the target score; ties go to the earliest player in the pool. This
    is greedy rather than globally optimal, but deterministic and
    O(teams x pool) per round.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def allocate(self, teams: List[Team], pool: Sequence[ScoredPlayer]) -> List[Team]:
        """Assign every pooled player to exactly one of *teams*.

        Args:
            teams: Seeded teams, mutated in place.
            pool: Players still to be drafted, in any order.

        Returns:
            The same team list, now holding every pooled player.

        Raises:
            ValueError: *pool* is not empty but there are no teams.
        """
        if not teams:
            if pool:
                raise ValueError(f"Cannot draft {len(pool)} players onto zero teams")
            return teams

        state = self.build_state(teams, pool)
        pick_number = 0

        while not state.is_exhausted():
            for team in state.team_order():
                if state.is_exhausted():
                    break
                player = self._pick_for_team(team, state.pool)
                pick_number += 1
                logger.debug(
                    "Pick %d: %s takes %s (score %d) -> average %.2f",
                    pick_number,
                    team.name,
                    player.player.name,
                    player.score,
                    team.average_score,
                )
            state.flip_direction()

        logger.info(
            "Drafted %d players onto %d teams (averages: %s)",
            pick_number,
            len(teams),
            ", ".join(f"{t.average_score:.1f}" for t in teams),
        )
        return state.teams

    @staticmethod
    def build_state(teams: List[Team], pool: Sequence[ScoredPlayer]) -> AllocationState:
        """Working state with the pool sorted by score, highest first (stable)."""
        ordered_pool = sorted(pool, key=lambda p: p.score, reverse=True)
        return AllocationState(pool=ordered_pool, teams=teams, going_forward=True)

    def _pick_for_team(self, team: Team, pool: List[ScoredPlayer]) -> ScoredPlayer:
        """Remove the best-fitting player from *pool* and add it to *team*."""
        best_index = 0
        best_distance = abs(team.average_with(pool[0]) - self.config.target_score)

        for index in range(1, len(pool)):
            distance = abs(team.average_with(pool[index]) - self.config.target_score)
            if distance < best_distance:
                best_index = index
                best_distance = distance

        player = pool.pop(best_index)
        team.add_member(player)
        return player
