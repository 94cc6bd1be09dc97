BOARD_SIZE = 9

# Balls placed on a fresh board, and preview balls seeded after every non-scoring move.
INITIAL_BALLS = 3
BALLS_PER_TURN = 3

# Shortest run of equal colours that is cleared from the board.
MIN_LINE_LENGTH = 5

BALL_COLORS = (
    "red",
    "blue",
    "green",
    "yellow",
    "purple",
    "pink",
    "black",
)

# Points per cleared line keyed by line length. Longer lines than the last key
# score the last value.
SCORING_TABLE = {
    5: 5,
    6: 8,
    7: 13,
    8: 21,
    9: 34,
}

# Play timer (seconds). The timer pauses after this much time without a move.
TIMER_INTERVAL = 1.0
INACTIVITY_TIMEOUT = 10.0

# Environment variable prefix for EngineConfig.from_env overrides.
ENV_PREFIX = "COLORLINES_"
