"""Snapshot building for the roster engine.

Joins the four cleaned DataFrames into one PlayerRecord per registered
player:
- Attaches the player's self assessment, if any
- Collects every peer rating the player received
- Counts the captain votes the player received
"""

import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd

from src.roster_engine.config import SELF_ASSESSMENT_CATEGORIES
from src.roster_engine.models import PlayerRecord, SelfAssessment

logger = logging.getLogger(__name__)

# Keys expected in the cleaned data dict passed to build()
_REQUIRED_KEYS = {"players", "self_scores", "peer_ratings", "captain_votes"}


def _drop_ineligible(
    df: pd.DataFrame, columns: List[str], eligible: set, label: str
) -> pd.DataFrame:
    """Rows whose *columns* all hold eligible player ids."""
    if df.empty:
        return df
    keep = df[columns].isin(eligible).all(axis=1)
    if not keep.all():
        logger.warning(
            "Ignoring %d %s involving unregistered players: %s",
            int((~keep).sum()),
            label,
            sorted(set(df.loc[~keep, columns].stack()) - eligible),
        )
    return df[keep]


class SnapshotBuilder:
    """Assembles engine input from cleaned registration data."""

    def build(self, cleaned: Dict[str, pd.DataFrame]) -> List[PlayerRecord]:
        """Build PlayerRecords in registration order.

        Ratings and votes are counted only when both sides are registered
        players; the rest belong to players who withdrew or were never
        eligible.
        """
        missing = _REQUIRED_KEYS - set(cleaned)
        if missing:
            raise ValueError(f"Cleaned data missing keys: {sorted(missing)}")

        players_df = cleaned["players"]
        registered = set(players_df["player_id"])

        assessments = self.self_assessments_by_player(cleaned["self_scores"])
        ratings = self.peer_ratings_by_player(cleaned["peer_ratings"], registered)
        votes = self.vote_counts(cleaned["captain_votes"], registered)

        records = [
            PlayerRecord(
                player_id=row["player_id"],
                name=row["name"],
                self_assessment=assessments.get(row["player_id"]),
                peer_ratings=ratings.get(row["player_id"], ()),
                vote_count=votes.get(row["player_id"], 0),
            )
            for _, row in players_df.iterrows()
        ]

        logger.info(
            "Built snapshot: %d players, %d self-assessed, %d peer-rated, %d with votes",
            len(records),
            sum(1 for r in records if r.self_assessment is not None),
            sum(1 for r in records if r.peer_ratings),
            sum(1 for r in records if r.vote_count),
        )
        return records

    # ------------------------------------------------------------------
    # Per-source grouping
    # ------------------------------------------------------------------
    @staticmethod
    def self_assessments_by_player(df: pd.DataFrame) -> Dict[str, SelfAssessment]:
        """Map player_id -> SelfAssessment (one row per player after cleaning)."""
        assessments = {}
        for _, row in df.iterrows():
            assessments[row["player_id"]] = SelfAssessment(
                **{cat: float(row[cat]) for cat in SELF_ASSESSMENT_CATEGORIES}
            )
        return assessments

    @staticmethod
    def peer_ratings_by_player(
        df: pd.DataFrame, eligible: Optional[set] = None
    ) -> Dict[str, Tuple[float, ...]]:
        """Map rated player_id -> tuple of received scores, in file order.

        Args:
            df: Cleaned ratings, one row per (rater, rated) pair.
            eligible: If given, ratings whose rater or rated player is not
                in it are dropped.
        """
        if eligible is not None:
            df = _drop_ineligible(df, ["rater_id", "rated_id"], eligible, "peer ratings")
        if df.empty:
            return {}
        grouped = df.groupby("rated_id", sort=False)["score"]
        return {pid: tuple(float(s) for s in scores) for pid, scores in grouped}

    @staticmethod
    def vote_counts(
        df: pd.DataFrame, eligible: Optional[set] = None
    ) -> Dict[str, int]:
        """Map candidate_id -> number of votes received.

        Args:
            df: Cleaned votes, one row per voter.
            eligible: If given, votes cast by or for anyone else are dropped.
        """
        if eligible is not None:
            df = _drop_ineligible(df, ["voter_id", "candidate_id"], eligible, "captain votes")
        if df.empty:
            return {}

        return {pid: int(n) for pid, n in df["candidate_id"].value_counts().items()}
