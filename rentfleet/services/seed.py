"""Reference fleet: the three vehicles every fresh app starts with."""

from rentfleet.services.common import vehicle_from_dict

DEMO_VEHICLES = [
    {"vehicle_id": 1, "type": "car", "model": "Toyota Avanza", "rate": 200.0,
     "passenger_capacity": 7},
    {"vehicle_id": 2, "type": "truck", "model": "Hino Dutro", "rate": 400.0,
     "max_load_kg": 1000.0},
    {"vehicle_id": 3, "type": "electric", "model": "Tesla Model 3", "rate": 350.0,
     "battery_capacity_kwh": 75.0, "current_charge_kwh": 5.0},
]


def seed_fleet(manager, vehicles=None) -> int:
    """
    Add the demo vehicles (or `vehicles`, a list of dicts) to `manager`.
    Skipped when the fleet already has vehicles. Returns how many were added.
    """
    if len(manager.fleet):
        return 0
    added = 0
    for d in vehicles if vehicles is not None else DEMO_VEHICLES:
        manager.add_vehicle(vehicle_from_dict(d))
        added += 1
    return added
