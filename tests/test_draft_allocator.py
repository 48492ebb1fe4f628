"""Tests for the snake draft allocator."""

import pytest

from src.roster_engine.draft_allocator import DraftAllocator
from src.roster_engine.models import EngineConfig, PlayerRecord, ScoredPlayer, Team


# ── Helpers ──────────────────────────────────────────────────────────

def _make_scored(player_id, score):
    record = PlayerRecord(player_id=player_id, name=player_id)
    return ScoredPlayer(player=record, score=score)


def _make_teams(*captain_scores):
    return [
        Team.seed(f"team-{i + 1}", f"Team {i + 1}", _make_scored(f"c{i}", s))
        for i, s in enumerate(captain_scores)
    ]


@pytest.fixture
def allocator():
    return DraftAllocator()


# ── Balance ──────────────────────────────────────────────────────────

class TestSnakeDraftBalance:
    def test_extreme_captains_move_toward_target(self, allocator):
        teams = _make_teams(90, 10)
        pool = [_make_scored(f"p{i}", 50) for i in range(4)]

        allocator.allocate(teams, pool)

        assert [t.member_count for t in teams] == [3, 3]
        assert abs(teams[0].average_score - 50) < abs(90 - 50)
        assert abs(teams[1].average_score - 50) < abs(10 - 50)
        assert teams[0].average_score == pytest.approx(190 / 3)
        assert teams[1].average_score == pytest.approx(110 / 3)

    def test_picks_player_closest_to_target(self, allocator):
        teams = _make_teams(90)
        pool = [_make_scored("low", 10), _make_scored("mid", 50), _make_scored("high", 90)]

        allocator.allocate(teams, pool)

        # 90+10 -> 50, then 100+50 -> 50, then the leftover
        assert teams[0].member_ids() == ["c0", "low", "mid", "high"]

    def test_tie_goes_to_earliest_in_sorted_pool(self, allocator):
        teams = _make_teams(50)
        pool = [_make_scored("forty", 40), _make_scored("sixty", 60)]

        allocator.allocate(teams, pool)

        # Both are 5 away from target; pool is sorted high-to-low first
        assert teams[0].member_ids() == ["c0", "sixty", "forty"]

    def test_equal_scores_keep_input_order(self, allocator):
        teams = _make_teams(50)
        pool = [_make_scored("first", 50), _make_scored("second", 50)]

        allocator.allocate(teams, pool)

        assert teams[0].member_ids() == ["c0", "first", "second"]

    def test_custom_target(self):
        allocator = DraftAllocator(EngineConfig(target_score=80))
        teams = _make_teams(80)
        pool = [_make_scored("low", 20), _make_scored("high", 80)]

        allocator.allocate(teams, pool)

        assert teams[0].member_ids()[1] == "high"


# ── Draft order ──────────────────────────────────────────────────────

class TestDraftOrder:
    def test_second_round_runs_in_reverse(self, allocator):
        teams = _make_teams(50, 50)
        pool = [_make_scored(f"p{i}", 50) for i in range(3)]

        allocator.allocate(teams, pool)

        # Round 1: team 1, team 2. Round 2 (reverse): team 2 picks first.
        assert teams[0].member_ids() == ["c0", "p0"]
        assert teams[1].member_ids() == ["c1", "p1", "p2"]

    def test_three_team_snake(self, allocator):
        teams = _make_teams(50, 50, 50)
        pool = [_make_scored(f"p{i}", 50) for i in range(6)]

        allocator.allocate(teams, pool)

        assert teams[0].member_ids() == ["c0", "p0", "p5"]
        assert teams[1].member_ids() == ["c1", "p1", "p4"]
        assert teams[2].member_ids() == ["c2", "p2", "p3"]

    def test_pool_emptying_mid_round(self, allocator):
        teams = _make_teams(50, 50, 50)
        pool = [_make_scored(f"p{i}", 50) for i in range(4)]

        allocator.allocate(teams, pool)

        assert [t.member_count for t in teams] == [2, 2, 3]


# ── Partition and edge cases ─────────────────────────────────────────

class TestAllocationEdgeCases:
    def test_every_player_assigned_once(self, allocator):
        teams = _make_teams(70, 40, 55, 20)
        pool = [_make_scored(f"p{i}", (i * 37) % 100) for i in range(23)]

        allocator.allocate(teams, pool)

        assigned = [pid for t in teams for pid in t.member_ids()]
        expected = [f"c{i}" for i in range(4)] + [f"p{i}" for i in range(23)]
        assert sorted(assigned) == sorted(expected)
        assert len(assigned) == len(set(assigned))

    def test_empty_pool_leaves_captain_only_teams(self, allocator):
        teams = _make_teams(80, 20)
        allocator.allocate(teams, [])
        assert [t.member_ids() for t in teams] == [["c0"], ["c1"]]

    def test_no_teams_and_empty_pool(self, allocator):
        assert allocator.allocate([], []) == []

    def test_no_teams_with_pool_raises(self, allocator):
        with pytest.raises(ValueError):
            allocator.allocate([], [_make_scored("a", 30), _make_scored("b", 70)])

    def test_does_not_mutate_caller_pool(self, allocator):
        teams = _make_teams(50)
        pool = [_make_scored("a", 30), _make_scored("b", 70)]
        allocator.allocate(teams, pool)
        assert [p.player_id for p in pool] == ["a", "b"]

    def test_team_without_captain_can_be_filled(self, allocator):
        teams = [Team.seed("team-1", "Team 1", None)]
        pool = [_make_scored("a", 20), _make_scored("b", 55)]

        allocator.allocate(teams, pool)

        assert teams[0].member_ids() == ["b", "a"]

    def test_average_matches_total_over_count(self, allocator):
        teams = _make_teams(33, 71)
        pool = [_make_scored(f"p{i}", s) for i, s in enumerate([12, 88, 45, 61, 9])]

        allocator.allocate(teams, pool)

        for team in teams:
            scores = [m.score for m in team.members]
            assert team.total_score == sum(scores)
            assert team.average_score == pytest.approx(sum(scores) / len(scores))


# ── State ────────────────────────────────────────────────────────────

class TestBuildState:
    def test_pool_sorted_high_to_low(self):
        pool = [_make_scored("a", 10), _make_scored("b", 90), _make_scored("c", 50)]
        state = DraftAllocator.build_state([], pool)
        assert [p.player_id for p in state.pool] == ["b", "c", "a"]
        assert state.going_forward is True
