from .rental_log import RentalLog, MemoryLog
from .rental_service import RentalManager
from .seed import seed_fleet

__all__ = [
    "RentalManager",
    "RentalLog",
    "MemoryLog",
    "seed_fleet",
]
