"""Shared fixtures for the roster balancer test suite."""

import textwrap

import pytest

from src.data_pipeline.cleaning import DataCleaner
from src.data_pipeline.transformation import SnapshotBuilder
from src.roster_engine.balancing_engine import RosterBalancingEngine
from src.roster_engine.score_aggregator import ScoreAggregator


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def aggregator():
    return ScoreAggregator()


@pytest.fixture
def engine():
    return RosterBalancingEngine()


@pytest.fixture(scope="module")
def cleaner():
    return DataCleaner()


@pytest.fixture(scope="module")
def snapshot_builder():
    return SnapshotBuilder()


# ------------------------------------------------------------------
# Registration exports written to a temp directory
# ------------------------------------------------------------------

PLAYERS_CSV = """\
    player_id,name
    p1,Alice Moreau
    p2,Ben Okafor
    p3,Chloe Tan
    p4,Dev Patel
    p5,Elif Kaya
    p6,Farid Haddad
    """

SELF_SCORES_CSV = """\
    player_id,technical,tactical,physical,mental
    p1,80,80,80,80
    p2,40,50,60,50
    p3,90,90,90,90
    p5,20,20,20,20
    """

PEER_RATINGS_CSV = """\
    rater_id,rated_id,score
    p2,p1,60
    p3,p1,60
    p1,p4,70
    p6,p5,30
    """

CAPTAIN_VOTES_CSV = """\
    voter_id,candidate_id
    p1,p3
    p2,p3
    p4,p1
    p5,p3
    p6,p1
    """


def write_csv(directory, filename, content):
    path = directory / filename
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture
def registration_dir(tmp_path):
    """A complete set of exports for a six-player competition."""
    data_dir = tmp_path / "spring-cup"
    data_dir.mkdir()
    write_csv(data_dir, "players.csv", PLAYERS_CSV)
    write_csv(data_dir, "self_scores.csv", SELF_SCORES_CSV)
    write_csv(data_dir, "peer_ratings.csv", PEER_RATINGS_CSV)
    write_csv(data_dir, "captain_votes.csv", CAPTAIN_VOTES_CSV)
    return data_dir


@pytest.fixture
def players_only_dir(tmp_path):
    """Exports with only the mandatory player list."""
    data_dir = tmp_path / "players-only"
    data_dir.mkdir()
    write_csv(data_dir, "players.csv", PLAYERS_CSV)
    return data_dir
