"""Tests for CSV ingestion of registration exports."""

import pandas as pd
import pytest

from src.data_pipeline.ingestion import IngestionError, RegistrationIngester


def _write_csv(directory, filename, content):
    (directory / filename).write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def ingester(registration_dir):
    return RegistrationIngester(registration_dir)


@pytest.fixture
def tmp_ingester(tmp_path):
    """Ingester pointing at an empty temporary directory."""
    return RegistrationIngester(tmp_path)


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

class TestReadPlayers:
    def test_loads_all_players(self, ingester):
        df = ingester.read_players()
        assert len(df) == 6
        assert list(df.columns) == ["player_id", "name"]

    def test_ids_stay_strings(self, tmp_ingester, tmp_path):
        _write_csv(tmp_path, "players.csv", "player_id,name\n007,Bond\n10,Ten\n")
        df = tmp_ingester.read_players()
        assert df["player_id"].tolist() == ["007", "10"]

    def test_header_case_and_whitespace(self, tmp_ingester, tmp_path):
        _write_csv(tmp_path, "players.csv", " Player_ID , Name \np1, Alice \n")
        df = tmp_ingester.read_players()
        assert df.loc[0, "player_id"] == "p1"
        assert df.loc[0, "name"] == "Alice"

    def test_blank_rows_removed(self, tmp_ingester, tmp_path):
        _write_csv(tmp_path, "players.csv", "player_id,name\np1,A\n,\np2,B\n")
        assert len(tmp_ingester.read_players()) == 2

    def test_missing_file_raises(self, tmp_ingester):
        with pytest.raises(FileNotFoundError):
            tmp_ingester.read_players()

    def test_missing_column_raises(self, tmp_ingester, tmp_path):
        _write_csv(tmp_path, "players.csv", "id,name\np1,A\n")
        with pytest.raises(ValueError, match="player_id"):
            tmp_ingester.read_players()


# ---------------------------------------------------------------------------
# Scores and votes
# ---------------------------------------------------------------------------

class TestReadScores:
    def test_self_scores_numeric(self, ingester):
        df = ingester.read_self_scores()
        for col in ["technical", "tactical", "physical", "mental"]:
            assert pd.api.types.is_numeric_dtype(df[col]), f"{col} should be numeric"

    def test_peer_rating_scores_numeric(self, ingester):
        df = ingester.read_peer_ratings()
        assert df["score"].tolist() == [60.0, 60.0, 70.0, 30.0]

    def test_unparseable_score_becomes_nan(self, tmp_ingester, tmp_path):
        _write_csv(tmp_path, "peer_ratings.csv", "rater_id,rated_id,score\na,b,great\na,c,55\n")
        df = tmp_ingester.read_peer_ratings()
        assert pd.isna(df.loc[0, "score"])
        assert df.loc[1, "score"] == 55.0

    def test_decimal_comma_score(self, tmp_ingester, tmp_path):
        _write_csv(
            tmp_path, "peer_ratings.csv",
            'rater_id,rated_id,score\na,b,"7,5"\na,c,"1,234.5"\n',
        )
        df = tmp_ingester.read_peer_ratings()
        assert df.loc[0, "score"] == 7.5
        assert pd.isna(df.loc[1, "score"])

    def test_votes(self, ingester):
        df = ingester.read_captain_votes()
        assert df["candidate_id"].tolist() == ["p3", "p3", "p1", "p3", "p1"]


class TestOptionalFiles:
    def test_missing_optional_files_are_empty(self, players_only_dir):
        ingester = RegistrationIngester(players_only_dir)
        assert ingester.read_self_scores().empty
        assert ingester.read_peer_ratings().empty
        assert ingester.read_captain_votes().empty

    def test_empty_frames_keep_columns(self, players_only_dir):
        df = RegistrationIngester(players_only_dir).read_peer_ratings()
        assert list(df.columns) == ["rater_id", "rated_id", "score"]


# ---------------------------------------------------------------------------
# read_all
# ---------------------------------------------------------------------------

class TestReadAll:
    def test_returns_all_keys(self, ingester):
        data = ingester.read_all()
        assert set(data) == {"players", "self_scores", "peer_ratings", "captain_votes"}

    def test_wraps_failures(self, tmp_ingester):
        with pytest.raises(IngestionError):
            tmp_ingester.read_all()
