"""Captain selection by peer vote count."""

import logging
from typing import List, Sequence, Tuple

from src.roster_engine.allocation_rules import InsufficientPlayers, InvalidTeamCount
from src.roster_engine.config import MIN_TEAM_COUNT
from src.roster_engine.models import ScoredPlayer

logger = logging.getLogger(__name__)


class CaptainSelector:
    """Picks the top vote-getters as team captains."""

    def select(
        self, players: Sequence[ScoredPlayer], team_count: int
    ) -> Tuple[List[ScoredPlayer], List[ScoredPlayer]]:
        """
        Split *players* into captains and the remaining draft pool.

        Players are ranked by vote count, highest first. Ties keep input
        order (stable sort, no secondary ranking by score). Captain ``i``
        leads team ``i``.

        Returns:
            (captains, remaining_pool) - pool keeps input order.

        Raises:
            InvalidTeamCount: team_count below one.
            InsufficientPlayers: fewer than team_count players.
        """
        if team_count < MIN_TEAM_COUNT:
            raise InvalidTeamCount(team_count)
        if len(players) < team_count:
            raise InsufficientPlayers(len(players), team_count)

        ranked = sorted(players, key=lambda p: p.player.vote_count, reverse=True)
        captains = ranked[:team_count]

        captain_ids = {c.player_id for c in captains}
        remaining = [p for p in players if p.player_id not in captain_ids]

        for index, captain in enumerate(captains):
            logger.debug(
                "Captain for team %d: %s (%d votes, score %d)",
                index + 1,
                captain.player.name,
                captain.player.vote_count,
                captain.score,
            )

        return captains, remaining
