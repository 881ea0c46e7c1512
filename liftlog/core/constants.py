"""Application constants."""

# Session limits (workout builder)
MAX_EXERCISES_PER_SESSION = 20
MAX_SETS_PER_EXERCISE_PER_SESSION = 10

# Rep range defaults for new exercises
DEFAULT_REP_RANGE_MIN = 8
DEFAULT_REP_RANGE_MAX = 12

# Triple progression: rep ceiling stages after the exercise's own rep_range_max
CEILING_STAGE_1 = 15
CEILING_STAGE_2 = 20
CEILING_STAGES = (CEILING_STAGE_1, CEILING_STAGE_2)
TERMINAL_REP_CEILING = CEILING_STAGE_2

# app_settings keys
WEIGHT_JUMP_SETTING_KEY = "weight_jump_lb"
