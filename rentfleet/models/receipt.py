from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RentalReceipt:
    vehicle_id: int
    renter_id: str
    days: int
    cost: float
    due_at: datetime
    summary: str

    def to_dict(self) -> dict:
        d = asdict(self)
        d["due_at"] = self.due_at.isoformat(timespec="seconds")
        return d


@dataclass(frozen=True)
class ReturnReceipt:
    """Settlement of a completed return. `penalty` = late fee + damage fee."""
    vehicle_id: int
    renter_id: str
    actual_days: int
    base_cost: float
    penalty: float
    total: float
    late_days: int
    damage_fee: float
    summary: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ChargeReceipt:
    vehicle_id: int
    kwh: float
    current_charge_kwh: float
    summary: str
    renter_id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
