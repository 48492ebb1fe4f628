"""Data cleaning for competition registration exports.

Handles standardization across the four CSV files:
- Normalize player ids and display names
- Clamp scores to the 0-100 scale
- Keep one self assessment per player, one rating per rater and rated
  player, and one captain vote per voter (the latest submission wins)
"""

import logging
from typing import Dict, Optional

import pandas as pd

from src.roster_engine.config import SCORE_MAX, SCORE_MIN

logger = logging.getLogger(__name__)


class DataCleaner:
    """Cleans and standardizes registration data before snapshot building."""

    # ------------------------------------------------------------------
    # Value helpers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_id(value) -> Optional[str]:
        """Strip an id to a plain string; None for missing / blank values."""
        if pd.isna(value):
            return None
        value = str(value).strip().strip('"')
        return value or None

    @staticmethod
    def normalize_player_name(name: str) -> Optional[str]:
        """Normalize a display name.

        - Strips quotes and extra whitespace
        - Standardizes apostrophes and hyphens
        """
        if pd.isna(name):
            return None

        name = str(name).strip().strip('"')
        if name == "":
            return None

        name = name.replace("\u2019", "'")   # right single curly quote
        name = name.replace("\u2018", "'")   # left single curly quote
        name = name.replace("\u02BC", "'")   # modifier letter apostrophe

        name = name.replace("\u2013", "-")   # en dash
        name = name.replace("\u2014", "-")   # em dash

        return " ".join(name.split())

    def _normalize_ids(self, df: pd.DataFrame, *columns: str) -> pd.DataFrame:
        out = df.copy()
        for col in columns:
            out[col] = out[col].apply(self.normalize_id)
        return out.dropna(subset=list(columns)).reset_index(drop=True)

    @staticmethod
    def _clamp_scores(df: pd.DataFrame, columns, label: str) -> pd.DataFrame:
        out = df.dropna(subset=list(columns)).copy()
        dropped = len(df) - len(out)
        if dropped:
            logger.warning("Dropped %d %s rows with missing scores", dropped, label)

        for col in columns:
            out[col] = out[col].astype(float)
            out_of_range = (out[col] < SCORE_MIN) | (out[col] > SCORE_MAX)
            if out_of_range.any():
                logger.warning(
                    "Clamped %d out-of-range %s values in %s",
                    int(out_of_range.sum()), col, label,
                )
                out[col] = out[col].clip(SCORE_MIN, SCORE_MAX)
        return out.reset_index(drop=True)

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def clean_players(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normalize ids and names; keep the first row per player id.

        Players without a name are shown by their id.
        """
        out = self._normalize_ids(df, "player_id")
        out["name"] = out["name"].apply(self.normalize_player_name)
        out["name"] = out["name"].fillna(out["player_id"])

        duplicated = out["player_id"].duplicated(keep="first")
        if duplicated.any():
            logger.warning(
                "Dropping %d duplicate player registrations: %s",
                int(duplicated.sum()),
                out.loc[duplicated, "player_id"].tolist(),
            )
            out = out[~duplicated].reset_index(drop=True)

        logger.info("Cleaned players: %d rows", len(out))
        return out

    def clean_self_scores(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clamp scores and keep the latest self assessment per player."""
        out = self._normalize_ids(df, "player_id")
        categories = [c for c in out.columns if c != "player_id"]
        out = self._clamp_scores(out, categories, "self score")
        out = out.drop_duplicates(subset="player_id", keep="last").reset_index(drop=True)
        logger.info("Cleaned self scores: %d rows", len(out))
        return out

    def clean_peer_ratings(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clamp rating scores; a re-rating replaces the rater's earlier score."""
        out = self._normalize_ids(df, "rater_id", "rated_id")
        out = self._clamp_scores(out, ["score"], "peer rating")
        before = len(out)
        out = out.drop_duplicates(
            subset=["rater_id", "rated_id"], keep="last"
        ).reset_index(drop=True)
        if len(out) < before:
            logger.info("Replaced %d superseded peer ratings", before - len(out))
        logger.info("Cleaned peer ratings: %d rows", len(out))
        return out

    def clean_captain_votes(self, df: pd.DataFrame) -> pd.DataFrame:
        """One vote per voter; a later vote replaces an earlier one."""
        out = self._normalize_ids(df, "voter_id", "candidate_id")
        before = len(out)
        out = out.drop_duplicates(subset="voter_id", keep="last").reset_index(drop=True)
        if len(out) < before:
            logger.info("Replaced %d superseded captain votes", before - len(out))
        logger.info("Cleaned captain votes: %d rows", len(out))
        return out

    def clean_all(self, data: Dict[str, pd.DataFrame]) -> Dict[str, pd.DataFrame]:
        """Clean all four DataFrames returned by RegistrationIngester.read_all().

        Expects keys: players, self_scores, peer_ratings, captain_votes.
        Returns a dict with the same keys, each cleaned.
        """
        return {
            "players": self.clean_players(data["players"]),
            "self_scores": self.clean_self_scores(data["self_scores"]),
            "peer_ratings": self.clean_peer_ratings(data["peer_ratings"]),
            "captain_votes": self.clean_captain_votes(data["captain_votes"]),
        }
