# rentfleet/utils/constants.py

"""
Global constants for vehicle types, statuses, and the fixed pricing rules.
These constants are imported by both models and services.
"""

# Timestamp format used by the rental log
LOG_TS_FMT = "%Y-%m-%d %H:%M:%S"

# Default log file name (relative to the repo root unless configured)
DEFAULT_LOG_NAME = "rental_log.txt"


class VehicleType:
    CAR = "car"
    TRUCK = "truck"
    ELECTRIC = "electric"


class VehicleStatus:
    AVAILABLE = "available"
    RENTED = "rented"


# --- Pricing (fixed formulas, not configurable) ---
TRUCK_LOAD_FEE_PER_KG = 0.10  # per kg per day
EV_READY_RATIO = 0.10  # min charge share to start the vehicle
EV_SURCHARGE_RATIO = 0.20  # below this share a flat surcharge applies
EV_LOW_BATTERY_SURCHARGE = 50.0

# --- Settlement ---
HOURS_PER_DAY = 24
LATE_FEE_PER_DAY = 20.0
MINOR_DAMAGE_FEE = 100.0
