"""Shared service helpers and factories."""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from rentfleet.models.vehicle import VehicleBase, Car, Truck, ElectricVehicle
from rentfleet.utils.constants import HOURS_PER_DAY, VehicleType


# -------- time & math helpers --------
def _now() -> datetime:
    """Wrapper for easier testing/mocking."""
    return datetime.now(timezone.utc)


def days_from(start: datetime, days: int) -> datetime:
    """`start` plus whole 24-hour days."""
    return start + timedelta(hours=HOURS_PER_DAY * days)


def late_days(due_at: datetime, now: datetime) -> int:
    """
    Number of late days charged when returning at `now`.
    0 when not past due; otherwise whole elapsed hours // 24, plus one
    (so being one minute late already costs a day).
    """
    if now <= due_at:
        return 0
    hours = int((now - due_at).total_seconds() // 3600)
    return hours // HOURS_PER_DAY + 1


def round2(x: float) -> float:
    return round(float(x), 2)


def norm_type(value: Optional[str]) -> str:
    """Normalize vehicle type to lowercase; return '' if None."""
    return (value or "").strip().lower()


def to_float_safe(value) -> Optional[float]:
    """Safely convert to a finite float; return None if invalid, NaN or infinite."""
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def to_int_safe(value) -> Optional[int]:
    """Safely convert to int; return None if invalid (bools and fractions rejected)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


# -------- dict -> rich model mappers --------
def vehicle_from_dict(d: Optional[dict]) -> Optional[VehicleBase]:
    """Map a plain vehicle dict (seed data, API payload) to a rich vehicle object."""
    if not d:
        return None
    vtype = norm_type(d.get("type"))
    base = dict(
        vehicle_id=int(d.get("vehicle_id") or d.get("id")),
        model=d.get("model") or "",
        rate=float(d.get("rate") or 0.0),
    )
    if vtype == VehicleType.TRUCK:
        return Truck(**base, max_load_kg=float(d.get("max_load_kg") or 0.0))
    if vtype == VehicleType.ELECTRIC:
        return ElectricVehicle(
            **base,
            battery_capacity_kwh=float(d.get("battery_capacity_kwh") or 0.0),
            current_charge_kwh=float(d.get("current_charge_kwh") or 0.0),
        )
    return Car(**base, passenger_capacity=int(d.get("passenger_capacity") or 4))
