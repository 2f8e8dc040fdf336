# gentrify/config.py

# Bounds
PERCENT_MIN = 0.0
PERCENT_MAX = 100.0
RENT_MULTIPLIER_MIN = 0.5
RENT_MULTIPLIER_MAX = 3.0

# Genre compatibility (exactly one applies per show)
GENRE_MATCH_BONUS = 1.2
GENRE_MISMATCH_PENALTY = 0.8
GENRE_NEUTRAL = 1.0

# Baseline drift, applied once per turn
GENTRIFICATION_RATE_MULTIPLIER = 50   # warehouse 0.02 -> +1.0 level/turn
GENTRIFICATION_THRESHOLD = 50.0       # above this the secondary effects kick in
RENT_INCREASE_RATE = 1.02             # compounding, per turn
MAX_RENT_MULTIPLIER = RENT_MULTIPLIER_MAX
POLICE_PRESENCE_INCREASE = 1.0
SCENE_STRENGTH_DECREASE = 1.0

# Show-driven pressure (bonuses are additive, not exclusive)
SUCCESS_SHOW_IMPACT = 1.0
HIGH_ATTENDANCE_THRESHOLD = 100
HIGH_ATTENDANCE_IMPACT = 2.0
HIGH_REVENUE_THRESHOLD = 500
HIGH_REVENUE_IMPACT = 3.0
GENTRIFICATION_MULTIPLIER = 20        # scale applied on top of the district rate

# Catalog events
EVENT_TRIGGER_CHANCE = 0.1

# Stability / forecast
NEUTRAL_STABILITY = 50.0
FORECAST_TURNS = 5

# Warnings
CRITICAL_GENTRIFICATION = 70
RISING_GENTRIFICATION = 50
LOW_SCENE_STRENGTH = 30
HEAVY_POLICE_PRESENCE = 70
HIGH_RENT_MULTIPLIER = 2.0

# District defaults used when normalizing malformed district data
DEFAULT_SCENE_STRENGTH = 50.0
DEFAULT_GENTRIFICATION_LEVEL = 0.0
DEFAULT_POLICE_PRESENCE = 20.0
DEFAULT_RENT_MULTIPLIER = 1.0
