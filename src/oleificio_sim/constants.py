"""
Domain constants for the olive mill simulation.

Groups:
- Climate: MONTHLY_PROFILES, WEATHER_EXTREMES, DAYTIME_HOURS
- Batches: VARIETY_SHARE, PREMIUM_PROBABILITY_*
- Process: MAX_PROCESSING_TEMP, MIXING_TIME, CENTRIFUGE_SPEED, YIELD_RATES
- Quality: QUALITY_LIMITS and per-variety base values
- Machines: MACHINES, BASE_FAILURE_RATES, MAINTENANCE_DURATION, STORAGE_CAPACITY
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MonthlyProfile:
    """Climate averages for one calendar month."""

    temp_min: float
    temp_max: float
    humidity_min: float
    humidity_max: float
    rain_probability: float


# =============================================================================
# Climate (Bitonto, harvest months)
# =============================================================================

MONTHLY_PROFILES: dict[int, MonthlyProfile] = {
    10: MonthlyProfile(15, 22, 65, 80, 0.25),
    11: MonthlyProfile(12, 18, 70, 85, 0.35),
    12: MonthlyProfile(8, 15, 75, 90, 0.40),
    1: MonthlyProfile(7, 13, 75, 90, 0.45),
}

# (min, max) observable extremes
WEATHER_EXTREMES = {
    "temperature": (2.0, 25.0),
    "humidity": (40.0, 95.0),
    "wind_speed": (0.0, 45.0),
    "precipitation": (0.0, 80.0),  # mm per day
}

# Working hours sampled for the daily aggregate, 8:00 to 18:00 inclusive
DAYTIME_HOURS = range(8, 19)
TEMPERATURE_PEAK_HOUR = 14

# =============================================================================
# Batches
# =============================================================================

VARIETY_SHARE = {"Ogliarola": 0.7, "Coratina": 0.3}
PREMIUM_PROBABILITY_START = 0.8
PREMIUM_PROBABILITY_MONTHLY_DECAY = 0.2
ARRIVAL_HOURS = (8, 17)

# =============================================================================
# Process
# =============================================================================

MAX_PROCESSING_TEMP = 27.0
GRINDING_AMBIENT_OFFSET = 5.0

MIXING_TIME = {"min": 30.0, "optimal": 35.0, "max": 45.0}
MIXING_REFERENCE_HUMIDITY = 70.0
MIXING_TOLERANCE = 5.0

CENTRIFUGE_SPEED = {
    "Premium": {"min": 3000, "optimal": 3200, "max": 3400},
    "Standard": {"min": 3400, "optimal": 3600, "max": 3800},
}
CENTRIFUGE_JITTER = 0.02
CENTRIFUGE_REFERENCE_SPEED = 3500.0

YIELD_RATES = {
    "Ogliarola": {"base": 13.5, "variation": 0.5},
    "Coratina": {"base": 15.0, "variation": 1.0},
}
QUALITY_YIELD_MODIFIER = {"Premium": 1.1, "Standard": 0.9}
# Absolute ceiling on any batch yield, %
MAX_YIELD_PCT = 16.5

BASE_MINUTES_PER_TONNE = 45.0
ENERGY_KWH_PER_KG = 0.1
WATER_L_PER_KG = 0.1

# =============================================================================
# Quality (EU extra-virgin limits)
# =============================================================================

QUALITY_LIMITS = {
    "acidity": {"extra_virgin": 0.8, "organic": 0.6},
    "peroxides": {"extra_virgin": 20},
    "polyphenols": {"min": 200, "max": 500},
    "alkyl_esters": {"extra_virgin": 75},
    "panel_test": {"min_extra_virgin": 6.5, "max": 9.0},
}

MAX_FRESHNESS_HOURS = 48.0
DOP_ORIGIN = "Bitonto"
DOP_VARIETIES = frozenset({"Ogliarola", "Coratina"})
CERTIFICATION_BODY = "EU-authorised Certification Body"
CERTIFICATION_PREFIX = "CIMA"

BASE_ACIDITY = {"Ogliarola": 0.30, "Coratina": 0.35}
BASE_PEROXIDES = {"Ogliarola": 10.0, "Coratina": 12.0}
BASE_POLYPHENOLS = {"Ogliarola": 300.0, "Coratina": 400.0}
# (premium, standard) panel-test base score
BASE_PANEL_SCORE = {"Ogliarola": (7.5, 6.8), "Coratina": (8.0, 7.0)}

# =============================================================================
# Machines
# =============================================================================

MACHINES: tuple[str, ...] = (
    "defogliatore",
    "frangitore",
    "gramola",
    "decanter",
    "separatore",
)

# Percent chance of failure per day at full workload
BASE_FAILURE_RATES = {
    "defogliatore": 0.5,  # simplest machine
    "frangitore": 1.0,  # high mechanical stress
    "gramola": 0.7,  # moderate thermal stress
    "decanter": 1.2,  # critical component
    "separatore": 0.8,
}

# Hours
MAINTENANCE_DURATION = {"routine": 2.0, "repair": 6.0, "emergency": 12.0}

MAX_DAILY_BATCHES = 20
HOURS_PER_SHIFT = 8.0
MAINTENANCE_INTERVAL_DAYS = 30
MAINTENANCE_HOURS_LIMIT = 200.0
PREEMPTIVE_HOURS_THRESHOLD = 150.0

STORAGE_CAPACITY = {"olives": 50_000, "oil": 20_000}
AVERAGE_BATCH_KG = 1500
OIL_VOLUME_RATIO = 0.15
