"""
Damage adjudication policies.

A policy takes the vehicle id of a damaged return and answers whether the
damage is severe. The engine is handed one at construction time, so a real
inspection step can replace the placeholder without touching settlement.
"""


def is_severe_damage(vehicle_id: int) -> bool:
    """Placeholder inspection: even vehicle ids are severe, odd ids are minor."""
    return vehicle_id % 2 == 0
