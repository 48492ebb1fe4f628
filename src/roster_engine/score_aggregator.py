"""Composite skill score calculation.

Combines a player's self-assessment and the ratings their peers gave them
into a single 0-100 score:

* self-assessment -> mean of the four categories, weighted 0.6
* peer ratings    -> mean of all ratings, weighted 0.4

A player with no data at all gets the default score so they can still be
drafted. A player with only one of the two sources gets only that source's
weighted share.
"""

import logging
import math
from statistics import fmean
from typing import List, Optional, Sequence

from src.roster_engine.models import EngineConfig, PlayerRecord, ScoredPlayer

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (3.5 -> 4, 4.5 -> 5)."""
    return int(math.floor(value + 0.5))


class ScoreAggregator:
    """Turns raw assessment inputs into one composite score per player.

    The aggregator is stateless: every call is a pure function of the
    player record and the engine config.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def composite_score(self, player: PlayerRecord) -> int:
        """Return the rounded composite score for *player*."""
        has_self = player.self_assessment is not None
        has_peer = len(player.peer_ratings) > 0

        if not has_self and not has_peer:
            return self.config.default_score

        composite = 0.0
        if has_self:
            self_value = fmean(player.self_assessment.values())
            composite += self_value * self.config.self_weight
        if has_peer:
            peer_value = fmean(player.peer_ratings)
            composite += peer_value * self.config.peer_weight

        return round_half_up(composite)

    def score(self, player: PlayerRecord) -> ScoredPlayer:
        return ScoredPlayer(player=player, score=self.composite_score(player))

    def score_all(self, players: Sequence[PlayerRecord]) -> List[ScoredPlayer]:
        """Score every player, preserving input order."""
        scored = [self.score(p) for p in players]

        unassessed = sum(
            1 for p in players
            if p.self_assessment is None and not p.peer_ratings
        )
        if unassessed:
            logger.info(
                "%d of %d players have no assessment data, using default score %d",
                unassessed, len(players), self.config.default_score,
            )

        return scored
