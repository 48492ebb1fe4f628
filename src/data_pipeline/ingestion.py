"""CSV ingestion for competition registration exports.

Handles the quirks of the exports:
- Optional files (self scores, peer ratings, votes) may be absent
- Ids exported as numbers must stay strings ("007" is not 7)
- Decimal-comma or blank score cells
- Blank rows and surrounding quotes
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.data_pipeline.config import (
    CAPTAIN_VOTE_COLUMNS,
    FILE_PATTERNS,
    PEER_RATING_COLUMNS,
    PLAYER_COLUMNS,
    REQUIRED_FILES,
    SCORE_COLUMNS,
    SELF_SCORE_COLUMNS,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when CSV ingestion fails."""


def _parse_numeric(value):
    """Parse a score cell; a comma is a decimal mark (e.g., '7,5' -> 7.5).

    Blank or unparseable cells (including '1,234.5') become NaN.
    """
    if pd.isna(value):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).strip().strip('"').replace(",", ".")
    if s == "" or s.isspace():
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


class RegistrationIngester:
    """Reads one competition's CSV exports.

    Each read method returns a pandas DataFrame with:
    - Exactly the expected columns, ids as strings
    - Score columns parsed as floats
    - Blank rows removed
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _resolve_path(self, file_key: str) -> Optional[Path]:
        """Full path for *file_key*; None when an optional file is missing."""
        filepath = self.data_dir / FILE_PATTERNS[file_key]
        if filepath.exists():
            return filepath
        if file_key in REQUIRED_FILES:
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        logger.info("Optional file %s not present, treating as empty", filepath.name)
        return None

    def _read(self, file_key: str, columns: List[str]) -> pd.DataFrame:
        filepath = self._resolve_path(file_key)
        if filepath is None:
            return pd.DataFrame(columns=columns)

        logger.info("Reading %s: %s", file_key, filepath.name)
        df = pd.read_csv(filepath, dtype=str, quotechar='"', skip_blank_lines=True)
        df.columns = [str(c).strip().lower() for c in df.columns]

        missing = set(columns) - set(df.columns)
        if missing:
            raise ValueError(f"{filepath.name} is missing columns: {sorted(missing)}")

        df = df[columns].copy()
        for col in df.columns:
            df[col] = df[col].str.strip().str.strip('"')

        # Drop rows where every cell is blank
        df = df.replace("", pd.NA).dropna(how="all").reset_index(drop=True)

        for col in SCORE_COLUMNS.get(file_key, []):
            df[col] = df[col].apply(_parse_numeric)

        logger.info("Loaded %d %s rows", len(df), file_key)
        return df

    def read_players(self) -> pd.DataFrame:
        """Registered players: player_id, name."""
        return self._read("players", PLAYER_COLUMNS)

    def read_self_scores(self) -> pd.DataFrame:
        """Self assessments: player_id, technical, tactical, physical, mental."""
        return self._read("self_scores", SELF_SCORE_COLUMNS)

    def read_peer_ratings(self) -> pd.DataFrame:
        """Peer ratings: rater_id, rated_id, score."""
        return self._read("peer_ratings", PEER_RATING_COLUMNS)

    def read_captain_votes(self) -> pd.DataFrame:
        """Captain votes: voter_id, candidate_id."""
        return self._read("captain_votes", CAPTAIN_VOTE_COLUMNS)

    def read_all(self) -> Dict[str, pd.DataFrame]:
        """Read all four exports as one snapshot.

        Returns:
            dict with keys: 'players', 'self_scores', 'peer_ratings',
            'captain_votes'

        Raises:
            IngestionError: if any file cannot be read.
        """
        try:
            return {
                "players": self.read_players(),
                "self_scores": self.read_self_scores(),
                "peer_ratings": self.read_peer_ratings(),
                "captain_votes": self.read_captain_votes(),
            }
        except Exception as e:
            raise IngestionError(f"Failed to read CSV files: {e}") from e
