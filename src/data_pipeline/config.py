from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
ALLOCATIONS_DIR = DATA_DIR / "allocations"

# Registration export file names, one set per competition directory
FILE_PATTERNS = {
    "players": "players.csv",
    "self_scores": "self_scores.csv",
    "peer_ratings": "peer_ratings.csv",
    "captain_votes": "captain_votes.csv",
}

# Only the player list is mandatory; a competition can be allocated before
# anyone has assessed themselves, rated a peer or voted for a captain.
REQUIRED_FILES = {"players"}

# Expected columns per file
PLAYER_COLUMNS = ["player_id", "name"]
SELF_SCORE_COLUMNS = ["player_id", "technical", "tactical", "physical", "mental"]
PEER_RATING_COLUMNS = ["rater_id", "rated_id", "score"]
CAPTAIN_VOTE_COLUMNS = ["voter_id", "candidate_id"]

# Columns holding 0-100 scores
SCORE_COLUMNS = {
    "self_scores": SELF_SCORE_COLUMNS[1:],
    "peer_ratings": ["score"],
}
