from __future__ import annotations

import copy
from typing import Iterator, Optional

from rentfleet.models.vehicle import VehicleBase


class FleetRegistry:
    """
    Ordered, registry-owned collection of vehicles.

    `add()` stores a private copy, so callers can never mutate a fleet vehicle
    through the object they handed in. Insertion order is the listing order.
    Identifiers are assumed unique; no duplicate check is performed.
    """

    def __init__(self):
        self._vehicles: list[VehicleBase] = []

    def __len__(self) -> int:
        return len(self._vehicles)

    def __iter__(self) -> Iterator[VehicleBase]:
        return iter(list(self._vehicles))

    def add(self, vehicle: VehicleBase) -> VehicleBase:
        """Insert a copy of `vehicle` and return the registry-owned instance."""
        owned = copy.deepcopy(vehicle)
        self._vehicles.append(owned)
        return owned

    def find(self, vehicle_id) -> Optional[VehicleBase]:
        """Linear scan by identifier; None if absent."""
        for v in self._vehicles:
            if v.vehicle_id == vehicle_id:
                return v
        return None

    def list(self) -> list[dict]:
        """Read-only snapshot of the fleet, in insertion order."""
        return [v.to_dict() for v in self._vehicles]

    def describe_lines(self) -> list[str]:
        return [f"  {v.describe()}" + (" [RENTED]" if v.rented else "") for v in self._vehicles]

    def format_listing(self) -> str:
        """The console fleet block: a 'Fleet:' header then one line per vehicle."""
        return "\n".join(["Fleet:"] + self.describe_lines())
