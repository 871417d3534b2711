MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

DEFAULT_EASE_FACTOR = 2.5
DEFAULT_INTERVAL_DAYS = 1
DEFAULT_REPETITIONS = 0
MIN_EASE_FACTOR = 1.3

FIRST_INTERVAL_DAYS = 1    # first passing review
SECOND_INTERVAL_DAYS = 6   # second consecutive passing review

DEFAULT_STATS_WINDOW_DAYS = 30
DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 500
DEFAULT_TRANSLATION = "NIV"
