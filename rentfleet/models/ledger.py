from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class RentalRecord:
    """
    One active rental. `load_kg` is the load committed at rent time
    (0 for anything that is not a truck); settlement reuses it.
    """
    vehicle_id: int
    renter_id: str
    due_at: datetime
    load_kg: float = 0.0

    def to_dict(self) -> dict:
        return {
            "vehicle_id": self.vehicle_id,
            "renter_id": self.renter_id,
            "due_at": self.due_at.isoformat(timespec="seconds"),
            "load_kg": self.load_kg,
        }


class RentalLedger:
    """Active rentals keyed by vehicle id. At most one record per vehicle."""

    def __init__(self):
        self.rentals: dict[int, RentalRecord] = {}

    def __contains__(self, vehicle_id) -> bool:
        return vehicle_id in self.rentals

    def __len__(self) -> int:
        return len(self.rentals)

    def get(self, vehicle_id) -> Optional[RentalRecord]:
        return self.rentals.get(vehicle_id)

    def open(self, record: RentalRecord) -> RentalRecord:
        self.rentals[record.vehicle_id] = record
        return record

    def close(self, vehicle_id) -> Optional[RentalRecord]:
        """Remove and return the record for `vehicle_id` (None if there was none)."""
        return self.rentals.pop(vehicle_id, None)

    def records(self) -> list[RentalRecord]:
        return list(self.rentals.values())
