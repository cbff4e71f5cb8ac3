"""Shared application constants.

Centralizes the rules of the weekly game and the recommendation weights so
we can document and adjust them in one place.
"""

# A weekly selection is two goals in each of the six categories
GOALS_PER_CATEGORY = 2
GOALS_PER_WEEK = 12

# A category counts as completed when this many of its goals are done
CATEGORY_COMPLETION_THRESHOLD = 2

# Tier thresholds on the number of completed categories, highest first
TIER_THRESHOLDS = [
    (6, "slayed"),
    (4, "rock"),
    (2, "track"),
]
TIER_NONE = "none"

# Recommendation scoring weights
REC_NEW_GOAL_BONUS = 20.0
REC_GOAL_SUCCESS_WEIGHT = 15.0
REC_NEVER_COMPLETED_PENALTY = -5.0
REC_CATEGORY_SUCCESS_WEIGHT = 10.0
REC_RECENT_CATEGORY_BONUS = 5.0
REC_POPULARITY_WEIGHT = 8.0
REC_CUSTOM_GOAL_BONUS = 5.0
REC_DIVERSITY_BONUS = 3.0

# Category activity newer than this counts as "recent" (days)
REC_RECENT_WINDOW_DAYS = 28

# Success-ratio cut points for the qualitative notes
REC_EXCELLENT_RATIO = 0.8
REC_GOOD_RATIO = 0.5

# How many recommendations to return
REC_LIMIT_ALL = 12
REC_LIMIT_CATEGORY = 6

REC_SEPARATOR = " • "
REC_DEFAULT_REASON = "Recommended for you"

# Activity feed page size
ACTIVITY_FEED_LIMIT = 50

# Logout blacklist is cleared wholesale past this many tokens
TOKEN_BLACKLIST_MAX = 10_000
