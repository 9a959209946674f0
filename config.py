"""Configuration settings for FF VBD Engine"""
from pathlib import Path

# Project paths
BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = DATA_DIR / "output"

# Ensure directories exist
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

# Default league settings
DEFAULT_SETTINGS = {
    "scoring": "PPR",
    "teams": 12,
    "roster": {
        "QB": 1,
        "RB": 2,
        "WR": 3,
        "TE": 1,
        "FLEX": 1,
        "K": 1,
        "DST": 1,
        "BENCH": 6
    },
    "flex_eligible": ["RB", "WR", "TE"]
}

# Scoring format multipliers applied to curve-based projections.
# Tuned empirically; the curves themselves are calibrated on PPR data.
SCORING_MULTIPLIERS = {
    "STANDARD": {"QB": 1.0, "RB": 1.0, "WR": 0.85, "TE": 0.8},
    "HALF_PPR": {"QB": 1.0, "RB": 0.95, "WR": 0.92, "TE": 0.88},
    "PPR": {"QB": 1.0, "RB": 0.9, "WR": 1.0, "TE": 0.95},
    "SUPERFLEX": {"QB": 1.8, "RB": 0.85, "WR": 0.85, "TE": 0.75},
}

# Share of league flex slots attributed to each position (tunable)
DEFAULT_FLEX_SHARE = {"QB": 0.0, "RB": 0.4, "WR": 0.4, "TE": 0.2}

FLEX_SHARE_PRESETS = {
    "default": DEFAULT_FLEX_SHARE,
    "superflex": {"QB": 0.3, "RB": 0.3, "WR": 0.3, "TE": 0.1},
    "3wr": {"QB": 0.0, "RB": 0.35, "WR": 0.5, "TE": 0.15},
}

# Replacement-level discount for positions that are easy to stream (tunable)
STREAMING_DISCOUNT = {"QB": 0.95, "TE": 0.95}

# Minimum season points after schedule adjustment
POSITION_FLOORS = {"QB": 110.0, "RB": 90.0, "WR": 90.0, "TE": 95.0}

# Projection returned for invalid ranks or unvalued positions
PROJECTION_FALLBACK = 100.0

# Ranks past a regime boundary over which the curve moves onto the next regime
CURVE_BLEND_WINDOW = 1.0

# Strength of schedule (1 = hardest, 32 = easiest)
SOS_NEUTRAL = 16.5
SOS_SENSITIVITY = 0.08
SOS_MULTIPLIER_MIN = 0.92
SOS_MULTIPLIER_MAX = 1.08
PLAYOFF_SOS_WEIGHT = 0.3

# Rank used when a player cannot be found in the pool: ceil(adp / divisor)
FALLBACK_RANK_ADP_DIVISOR = 10

# Tier break thresholds by draft round band.
# through_round=None closes the last band.
TIER_THRESHOLDS = [
    {"through_round": 3, "percent": 0.15, "absolute": 20.0},
    {"through_round": 8, "percent": 0.10, "absolute": 10.0},
    {"through_round": None, "percent": 0.07, "absolute": 5.0},
]

# Rounds in which small tiers are protected from fragmenting
ELITE_PROTECTION_ROUNDS = 3

# Maximum tier size as (through_round, size) steps for each value decay shape
MAX_TIER_SIZES = {
    "exponential": [(3, 4), (6, 6), (None, 8)],   # RBs - tight tiers
    "linear": [(3, 6), (8, 8), (None, 12)],        # WRs - broader tiers
    "bimodal": [(2, 3), (None, 15)],               # TEs - small elite, large streaming
    "stepped": [(5, 5), (None, 8)],                # QBs - consistent groups
}
DEFAULT_MAX_TIER_SIZE = 6

# Per-position tier shape
TIER_CONFIG = {
    "RB": {"elite_tier_size": 3, "value_decay": "exponential", "dead_zone": (4, 6)},
    "WR": {"elite_tier_size": 5, "value_decay": "linear"},
    "TE": {"elite_tier_size": 2, "value_decay": "bimodal"},
    "QB": {"elite_tier_size": 3, "value_decay": "stepped"},
    "K": {"elite_tier_size": 2, "value_decay": "linear"},
    "DST": {"elite_tier_size": 3, "value_decay": "linear"},
}

# Validated roster shapes
VALID_ROSTER_CONFIGS = {
    "standard_roster": {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "FLEX": 1, "SUPERFLEX": 0},
    "3wr_roster": {"QB": 1, "RB": 2, "WR": 3, "TE": 1, "FLEX": 1, "SUPERFLEX": 0},
    "2flex_roster": {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "FLEX": 2, "SUPERFLEX": 0},
    "3wr_2flex": {"QB": 1, "RB": 2, "WR": 3, "TE": 1, "FLEX": 2, "SUPERFLEX": 0},
    "superflex": {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "FLEX": 1, "SUPERFLEX": 1},
}

# Platform presets for quick setup
PLATFORM_PRESETS = {
    "espn_standard": {
        "scoring": "STANDARD",
        "teams": 10,
        "roster": {
            "QB": 1, "RB": 2, "WR": 2, "TE": 1,
            "FLEX": 1, "K": 1, "DST": 1, "BENCH": 7
        }
    },
    "yahoo_half_ppr": {
        "scoring": "HALF_PPR",
        "teams": 12,
        "roster": {
            "QB": 1, "RB": 2, "WR": 3, "TE": 1,
            "FLEX": 1, "K": 1, "DST": 1, "BENCH": 5
        }
    },
    "sleeper_ppr": {
        "scoring": "PPR",
        "teams": 12,
        "roster": {
            "QB": 1, "RB": 2, "WR": 2, "TE": 1,
            "FLEX": 2, "K": 1, "DST": 1, "BENCH": 5
        }
    },
    "sleeper_superflex": {
        "scoring": "SUPERFLEX",
        "teams": 12,
        "roster": {
            "QB": 1, "RB": 2, "WR": 2, "TE": 1,
            "FLEX": 1, "SUPERFLEX": 1, "K": 1, "DST": 1, "BENCH": 5
        },
        "flex_share": "superflex"
    }
}
