"""Centralized constants for the woerter scheduler.

All magic numbers and defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Quality scale ----------
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3  # q < 3 is a lapse
WRONG_ANSWER_MAX_QUALITY = 2
SKIP_QUALITY = 1

# ---------- SM-2 ----------
INITIAL_EASINESS = 2.5
MIN_EASINESS = 1.3
FIRST_INTERVAL = 1  # days
SECOND_INTERVAL = 6  # days
LAPSE_INTERVAL = 1  # days

# ---------- Buckets ----------
LEARNING_REPETITIONS = 2  # repetitions below this are "learning"
MATURE_INTERVAL = 21  # days
DUE_THIS_WEEK_DAYS = 7

# ---------- Legacy migration ----------
MIGRATED_REPETITIONS = 1
MIGRATED_INTERVAL = 1  # days

# ---------- Persistence ----------
STATE_FILE_VERSION = 1
