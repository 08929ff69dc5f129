from dataclasses import dataclass, field
from typing import Optional

from rentfleet.exceptions import BatteryLowError
from rentfleet.utils.constants import (
    EV_LOW_BATTERY_SURCHARGE,
    EV_READY_RATIO,
    EV_SURCHARGE_RATIO,
    TRUCK_LOAD_FEE_PER_KG,
    VehicleStatus,
    VehicleType,
)
from rentfleet.utils.filters import fmt_num


@dataclass
class VehicleBase:
    """
    Base vehicle model. `rate` is the listed price per day.
    The variant set is closed: Car, Truck, ElectricVehicle. Subclasses adjust
    pricing and readiness; `rented` is only ever flipped by the RentalManager.
    """
    vehicle_id: int
    model: str
    rate: float  # base rate per day
    rented: bool = field(default=False, init=False)

    type = ""

    def rent_cost(self, days: int) -> float:
        """Price for the rental length. Subclasses can override to add surcharges."""
        return self.rate * days

    def prepare_for_use(self) -> None:
        """Readiness check run at rent time. Nothing to check by default."""
        return None

    def describe(self) -> str:
        return f"[{self.vehicle_id}] {self.model} (rate {fmt_num(self.rate)})"

    def to_dict(self) -> dict:
        return {
            "vehicle_id": self.vehicle_id,
            "model": self.model,
            "type": self.type,
            "rate": self.rate,
            "status": VehicleStatus.RENTED if self.rented else VehicleStatus.AVAILABLE,
            "rented": self.rented,
            "info": self.describe(),
        }


@dataclass
class Car(VehicleBase):
    """
    Cars follow the base rule. Passenger capacity is informational only.
    """
    passenger_capacity: int = 4

    type = VehicleType.CAR

    def describe(self) -> str:
        return f"{super().describe()} Car cap={self.passenger_capacity}"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["passenger_capacity"] = self.passenger_capacity
        return d


@dataclass
class Truck(VehicleBase):
    """
    Trucks are priced on load as well as days: every kg carried costs
    TRUCK_LOAD_FEE_PER_KG per day on top of the daily rate.
    """
    max_load_kg: float = 0.0

    type = VehicleType.TRUCK

    def rent_cost(self, days: int, load_kg: Optional[float] = None) -> float:
        base = super().rent_cost(days)
        if load_kg is None:
            return base
        return base + load_kg * TRUCK_LOAD_FEE_PER_KG * days

    def describe(self) -> str:
        return f"{super().describe()} Truck maxLoadKg={fmt_num(self.max_load_kg)}"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["max_load_kg"] = self.max_load_kg
        return d


@dataclass
class ElectricVehicle(VehicleBase):
    """
    Electric vehicles carry battery state.
      - readiness: charge must be at least 10% of capacity
      - pricing: flat surcharge while charge is under 20% of capacity
    """
    battery_capacity_kwh: float = 0.0
    current_charge_kwh: float = 0.0

    type = VehicleType.ELECTRIC

    def rent_cost(self, days: int) -> float:
        surcharge = 0.0
        if self.current_charge_kwh < EV_SURCHARGE_RATIO * self.battery_capacity_kwh:
            surcharge = EV_LOW_BATTERY_SURCHARGE
        return super().rent_cost(days) + surcharge

    def prepare_for_use(self) -> None:
        if self.current_charge_kwh < EV_READY_RATIO * self.battery_capacity_kwh:
            raise BatteryLowError(f"Battery too low to start vehicle id={self.vehicle_id}")

    def charge(self, kwh: float) -> float:
        """Add charge, saturating at capacity. Returns the new level."""
        self.current_charge_kwh = min(self.current_charge_kwh + kwh, self.battery_capacity_kwh)
        return self.current_charge_kwh

    def describe(self) -> str:
        return (f"{super().describe()} Electric battery="
                f"{fmt_num(self.current_charge_kwh)}/{fmt_num(self.battery_capacity_kwh)}")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["battery_capacity_kwh"] = self.battery_capacity_kwh
        d["current_charge_kwh"] = self.current_charge_kwh
        return d
