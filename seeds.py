"""
seeds.py
--------
Seed the reference fleet and replay the demo scenario against it:
overloaded truck, flat EV, charge-then-rent, a car return, and a damaged
truck return. Every step is written to the rental log as well as printed.

Usage:
    $ python seeds.py [path/to/rental_log.txt]
"""

import sys
import time

from rentfleet.exceptions import (
    BatteryLowError,
    LogSinkUnavailableError,
    OverloadError,
    RentalError,
    SevereDamageError,
)
from rentfleet.services import RentalLog, RentalManager, seed_fleet


def _caught(log, label: str, exc: Exception) -> None:
    line = f"Caught {label}: {exc}"
    print(line)
    log.log(line)


def run_scenario(manager: RentalManager, log, pause: float = 1.0) -> None:
    """The five demo steps. Expected failures are caught and reported."""
    manager.fleet_report()

    print("\n--- Truck with overload -> expect Overload ---")
    try:
        manager.rent("memberA", 2, 3, 1200.0)
    except OverloadError as e:
        _caught(log, "OverloadError", e)
    except RentalError as e:
        _caught(log, "other error", e)

    print("\n--- Electric vehicle with low charge -> expect BatteryLow ---")
    try:
        manager.rent("memberB", 3, 2)
    except BatteryLowError as e:
        _caught(log, "BatteryLowError", e)
    except RentalError as e:
        _caught(log, "other error", e)

    print("\n--- Charge the electric vehicle, then rent ---")
    try:
        manager.charge_battery(3, 30.0, renter_id="memberB")
        manager.rent("memberB", 3, 2)
    except RentalError as e:
        _caught(log, "error during charge/rent", e)

    print("\n--- Car rented for 1 day, returned with actual_days=3 ---")
    try:
        manager.rent("memberC", 1, 1)
        time.sleep(pause)
        manager.return_vehicle("memberC", 1, 3, damaged=False)
    except RentalError as e:
        _caught(log, "error", e)

    print("\n--- Damaged return -> SevereDamage for even ids ---")
    try:
        manager.rent("memberD", 2, 2, 500.0)
        manager.return_vehicle("memberD", 2, 2, damaged=True)
    except SevereDamageError as e:
        _caught(log, "SevereDamageError", e)
    except RentalError as e:
        _caught(log, "other error", e)

    print("\n--- Final fleet status ---")
    manager.fleet_report()


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        with RentalLog(argv[0] if argv else None) as log:
            manager = RentalManager(log, echo=True)
            seed_fleet(manager)
            run_scenario(manager, log)
    except LogSinkUnavailableError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
