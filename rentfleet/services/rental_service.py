"""Rental engine: admission, cost, state transitions and settlement."""

import threading
from typing import Callable, Optional

from rentfleet.exceptions import (
    NotElectricError,
    OverloadError,
    RenterMismatchError,
    SevereDamageError,
    VehicleNotFoundError,
    VehicleNotRentedError,
    VehicleUnavailableError,
)
from rentfleet.models.fleet import FleetRegistry
from rentfleet.models.ledger import RentalLedger, RentalRecord
from rentfleet.models.receipt import ChargeReceipt, RentalReceipt, ReturnReceipt
from rentfleet.models.vehicle import ElectricVehicle, Truck, VehicleBase
from rentfleet.services.common import _now, days_from, late_days, round2
from rentfleet.services.policies import is_severe_damage
from rentfleet.utils.constants import LATE_FEE_PER_DAY, MINOR_DAMAGE_FEE
from rentfleet.utils.filters import fmt_num


class RentalManager:
    """
    Rent, return and charge operations over one fleet and its ledger.

    Invariant: a fleet vehicle has `rented == True` exactly when the ledger
    holds a record for its id. Every public operation runs under one
    per-manager lock, so the registry and ledger change together.

    Failures are raised as RentalError subclasses after being logged. Only
    SevereDamageError leaves a state change behind (the vehicle is freed).
    """

    def __init__(
            self,
            log,
            fleet: Optional[FleetRegistry] = None,
            *,
            clock: Optional[Callable] = None,
            severity_policy: Callable[[int], bool] = is_severe_damage,
            echo: bool = False,
    ):
        self.log = log
        self.fleet = fleet if fleet is not None else FleetRegistry()
        self.ledger = RentalLedger()
        self._clock = clock or _now
        self._is_severe = severity_policy
        self.echo = echo
        self._rw = threading.RLock()

    # ---------- Helpers ----------
    def _fail(self, exc, log_msg: Optional[str] = None):
        """Log, then raise. Every failure path goes through here."""
        self.log.log(log_msg or exc.message)
        raise exc

    def _report(self, summary: str) -> None:
        self.log.log(summary)
        if self.echo:
            print(summary)

    def _lookup(self, vehicle_id, prefix: str = "") -> VehicleBase:
        v = self.fleet.find(vehicle_id)
        if v is None:
            self._fail(VehicleNotFoundError(f"{prefix}Vehicle not found id={vehicle_id}"))
        return v

    # ---------- Fleet ----------
    def add_vehicle(self, vehicle: VehicleBase) -> VehicleBase:
        """Add a copy of `vehicle` to the fleet."""
        with self._rw:
            return self.fleet.add(vehicle)

    def list_fleet(self) -> list:
        with self._rw:
            return self.fleet.list()

    def fleet_report(self) -> str:
        """The 'Fleet:' listing block; printed too when echo is on."""
        with self._rw:
            text = self.fleet.format_listing()
        if self.echo:
            print(text)
        return text

    def active_rentals(self) -> list:
        with self._rw:
            return [r.to_dict() for r in self.ledger.records()]

    # ---------- Rent ----------
    def rent(self, renter_id: str, vehicle_id, days: int, load_kg: float = 0.0) -> RentalReceipt:
        """
        Admit a rental if the vehicle exists, is free, can carry the load
        (trucks) and is ready to start (electric vehicles).
        Admission is all-or-nothing: any failure leaves state untouched.

        Raises:
            VehicleNotFoundError, VehicleUnavailableError, OverloadError,
            BatteryLowError
        """
        with self._rw:
            v = self._lookup(vehicle_id)
            if v.rented:
                self._fail(VehicleUnavailableError(
                    f"Vehicle not available (already rented) id={vehicle_id}"))

            if isinstance(v, Truck):
                if load_kg > v.max_load_kg:
                    msg = f"Requested load {fmt_num(load_kg)} > max {fmt_num(v.max_load_kg)}"
                    self._fail(OverloadError(msg), f"Overload attempt: {msg}")
                cost = v.rent_cost(days, load_kg)
            else:
                cost = v.rent_cost(days)
            cost = round2(cost)

            try:
                v.prepare_for_use()
            except Exception as e:
                self.log.log(f"Start failed for vehicle id={vehicle_id} -> {e}")
                raise

            now = self._clock()
            v.rented = True
            record = self.ledger.open(RentalRecord(
                vehicle_id=v.vehicle_id,
                renter_id=renter_id,
                due_at=days_from(now, days),
                load_kg=load_kg if isinstance(v, Truck) else 0.0,
            ))

            summary = (f"Rented vehicle id={vehicle_id} to renter={renter_id} "
                       f"for {days} days; cost={fmt_num(cost)}")
            self._report(summary)
            return RentalReceipt(
                vehicle_id=v.vehicle_id,
                renter_id=renter_id,
                days=days,
                cost=cost,
                due_at=record.due_at,
                summary=summary,
            )

    # ---------- Return ----------
    def return_vehicle(self, renter_id: str, vehicle_id, actual_days: int,
                       damaged: bool = False) -> ReturnReceipt:
        """
        Settle a rental.
          - base cost is re-priced with `actual_days` (trucks use the load
            recorded at rent time)
          - past the due date: LATE_FEE_PER_DAY per late day
          - damaged: severe (per policy) frees the vehicle and raises
            SevereDamageError; minor adds MINOR_DAMAGE_FEE

        Raises:
            VehicleNotFoundError, VehicleNotRentedError, RenterMismatchError,
            SevereDamageError
        """
        with self._rw:
            v = self._lookup(vehicle_id, prefix="Return failed: ")
            record = self.ledger.get(v.vehicle_id)
            if record is None:
                self._fail(VehicleNotRentedError(
                    f"Return failed: Vehicle not rented id={vehicle_id}"))
            if record.renter_id != renter_id:
                self._fail(RenterMismatchError(
                    f"Return failed: renter mismatch for vehicle id={vehicle_id}"))

            if isinstance(v, Truck):
                base_cost = v.rent_cost(actual_days, record.load_kg)
            else:
                base_cost = v.rent_cost(actual_days)
            base_cost = round2(base_cost)

            n_late = late_days(record.due_at, self._clock())
            penalty = n_late * LATE_FEE_PER_DAY

            damage_fee = 0.0
            if damaged:
                if self._is_severe(v.vehicle_id):
                    v.rented = False
                    self.ledger.close(v.vehicle_id)
                    self._fail(SevereDamageError(
                        f"Severe damage reported on return for vehicle id={vehicle_id}"))
                damage_fee = MINOR_DAMAGE_FEE
                penalty += damage_fee
                self.log.log(f"Minor damage fee applied for vehicle id={vehicle_id}")

            penalty = round2(penalty)
            total = round2(base_cost + penalty)

            v.rented = False
            self.ledger.close(v.vehicle_id)

            summary = (f"Vehicle id={vehicle_id} returned by {renter_id}. "
                       f"Base={fmt_num(base_cost)} Penalty={fmt_num(penalty)} Total={fmt_num(total)}")
            self._report(summary)
            return ReturnReceipt(
                vehicle_id=v.vehicle_id,
                renter_id=renter_id,
                actual_days=actual_days,
                base_cost=base_cost,
                penalty=penalty,
                total=total,
                late_days=n_late,
                damage_fee=damage_fee,
                summary=summary,
            )

    # ---------- Charging ----------
    def charge_battery(self, vehicle_id, kwh: float, renter_id: Optional[str] = None) -> ChargeReceipt:
        """
        Charge an electric vehicle by `kwh` (saturates at capacity).

        `renter_id` is only recorded in the log; it is not checked against
        the vehicle's rental.

        Raises:
            VehicleNotFoundError, NotElectricError
        """
        with self._rw:
            v = self._lookup(vehicle_id, prefix="Charge failed: ")
            if not isinstance(v, ElectricVehicle):
                self._fail(NotElectricError(
                    f"Charge failed: vehicle id={vehicle_id} is not an EV"))

            level = v.charge(kwh)
            summary = (f"Charged EV id={vehicle_id} + {fmt_num(kwh)}kWh "
                       f"(now {fmt_num(level)} kWh)")
            self._report(summary)
            if renter_id is not None:
                self.log.log(f"Charge requested by renter {renter_id} for vehicle {vehicle_id}")
            return ChargeReceipt(
                vehicle_id=v.vehicle_id,
                kwh=kwh,
                current_charge_kwh=level,
                summary=summary,
                renter_id=renter_id,
            )
