"""Game rule constants shared across UI and core layers."""

COUNTDOWN_STEPS: int = 3
FINAL_SECONDS_WINDOW: int = 5
TICK_INTERVAL_MS: int = 1000

DEFAULT_TIME_PER_QUIZ_SECONDS: int = 60
DEFAULT_PASS_LIMIT: int = 3

MIN_GROUPS: int = 1
MAX_GROUPS: int = 10
MIN_WORDS_PER_GROUP: int = 1
MAX_WORDS_PER_GROUP: int = 40

MEDAL_POSITIONS: int = 3
BONUS_ROUND_PARTICIPANTS: int = 2
