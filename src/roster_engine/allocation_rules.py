"""Allocation request validation."""

from typing import Iterable, Sequence

from src.roster_engine.config import MIN_TEAM_COUNT
from src.roster_engine.models import PlayerRecord


class AllocationError(Exception):
    """Base class for requests the engine refuses to allocate."""

    pass


class InvalidTeamCount(AllocationError):
    """Raised when fewer than the minimum number of teams is requested."""

    def __init__(self, team_count: int, minimum: int = MIN_TEAM_COUNT):
        self.team_count = team_count
        self.minimum = minimum
        super().__init__(
            f"Team count must be at least {minimum} (got {team_count})"
        )


class InsufficientPlayers(AllocationError):
    """Raised when there are not enough players to give every team a captain."""

    def __init__(self, player_count: int, team_count: int):
        self.player_count = player_count
        self.team_count = team_count
        super().__init__(
            f"Not enough players to form {team_count} teams: "
            f"{player_count} registered, at least {team_count} needed"
        )


class DuplicatePlayer(AllocationError):
    """Raised when the same player id is supplied more than once."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} appears more than once in the input")


class AllocationRules:
    """Checks an allocation request before any team is touched.

    *min_team_count* can only raise the floor; fewer than one team is
    always rejected.
    """

    def __init__(self, min_team_count: int = MIN_TEAM_COUNT):
        self.min_team_count = min_team_count

    def validate_request(self, players: Sequence[PlayerRecord], team_count: int):
        """
        Validate a team formation request.

        Raises:
            InvalidTeamCount: team_count below the minimum.
            InsufficientPlayers: fewer players than teams.
            DuplicatePlayer: a player id occurs twice.
        """
        self.validate_team_count(team_count)

        if len(players) < team_count:
            raise InsufficientPlayers(len(players), team_count)

        self.validate_unique_players(players)

    def validate_team_count(self, team_count: int):
        minimum = max(MIN_TEAM_COUNT, self.min_team_count)
        if team_count < minimum:
            raise InvalidTeamCount(team_count, minimum)

    @staticmethod
    def validate_unique_players(players: Iterable[PlayerRecord]):
        seen = set()
        for player in players:
            if player.player_id in seen:
                raise DuplicatePlayer(player.player_id)
            seen.add(player.player_id)
