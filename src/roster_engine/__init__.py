from src.roster_engine.allocation_rules import (
    AllocationError,
    AllocationRules,
    DuplicatePlayer,
    InsufficientPlayers,
    InvalidTeamCount,
)
from src.roster_engine.balancing_engine import RosterBalancingEngine
from src.roster_engine.captain_selector import CaptainSelector
from src.roster_engine.draft_allocator import DraftAllocator
from src.roster_engine.models import (
    AllocationState,
    EngineConfig,
    PlayerRecord,
    ScoredPlayer,
    SelfAssessment,
    Team,
    TeamAssignment,
)
from src.roster_engine.roster_builder import RosterBuilder
from src.roster_engine.score_aggregator import ScoreAggregator

__all__ = [
    "AllocationError",
    "AllocationRules",
    "AllocationState",
    "CaptainSelector",
    "DraftAllocator",
    "DuplicatePlayer",
    "EngineConfig",
    "InsufficientPlayers",
    "InvalidTeamCount",
    "PlayerRecord",
    "RosterBalancingEngine",
    "RosterBuilder",
    "ScoreAggregator",
    "ScoredPlayer",
    "SelfAssessment",
    "Team",
    "TeamAssignment",
]
