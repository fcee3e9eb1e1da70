"""Constants for the simulation collaborators."""

# Calendar
DAYS_PER_YEAR: int = 365

# Vehicle lengths are cached in 1/16 tile units
TILE_LENGTH_UNITS: int = 16

# Service interval bounds, per company setting
MIN_SERVICE_INTERVAL_PERCENT: int = 5
MAX_SERVICE_INTERVAL_PERCENT: int = 90
MIN_SERVICE_INTERVAL_DAYS: int = 30
MAX_SERVICE_INTERVAL_DAYS: int = 800

# Industries have at most this many produced / accepted cargo slots
MAX_PRODUCED_CARGO: int = 2
MAX_ACCEPTED_CARGO: int = 3

# Send-to-depot flag: service only, do not halt
DEPOT_SERVICE: int = 1
