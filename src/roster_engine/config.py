# Composite score scale (self-assessment and peer ratings are 0-100)
SCORE_MIN = 0
SCORE_MAX = 100

# Score given to players with neither a self-assessment nor peer ratings
DEFAULT_SCORE = 50

# Composite weights. A player with only one source gets only that source's
# weighted share; the weights are not renormalized.
SELF_ASSESSMENT_WEIGHT = 0.6
PEER_RATING_WEIGHT = 0.4

SELF_ASSESSMENT_CATEGORIES = ("technical", "tactical", "physical", "mental")

# Every team average is pulled toward the scale midpoint during the draft
TARGET_SCORE = 50

# Team naming and identity
DEFAULT_TEAM_NAME_FORMAT = "Team {number}"
DEFAULT_TEAM_ID_FORMAT = "{prefix}team-{number}"

MIN_TEAM_COUNT = 1
