"""
Rental admission: availability, truck load limits and EV readiness.
Admission is all-or-nothing, so every failure must leave the fleet and the
ledger exactly as they were.
"""

from datetime import timedelta

import pytest

from conftest import START, assert_ledger_consistent
from rentfleet.exceptions import (
    BatteryLowError,
    OverloadError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from rentfleet.models.vehicle import Car


def test_rent_car_opens_ledger_record(manager):
    receipt = manager.rent("memberC", 1, 2)

    assert receipt.cost == 400.0
    assert receipt.due_at == START + timedelta(hours=48)
    assert manager.fleet.find(1).rented is True

    record = manager.ledger.get(1)
    assert record.renter_id == "memberC"
    assert record.due_at == START + timedelta(days=2)
    assert record.load_kg == 0.0
    assert_ledger_consistent(manager)


def test_rent_logs_and_reports_summary(manager, memory_log):
    receipt = manager.rent("memberC", 1, 1)
    assert receipt.summary == "Rented vehicle id=1 to renter=memberC for 1 days; cost=200"
    assert memory_log.messages[-1] == receipt.summary


def test_rent_echoes_summary_to_stdout(manager, capsys):
    manager.echo = True
    manager.rent("memberC", 1, 1)
    assert "Rented vehicle id=1 to renter=memberC" in capsys.readouterr().out


def test_rent_unknown_vehicle(manager, memory_log):
    with pytest.raises(VehicleNotFoundError):
        manager.rent("memberA", 42, 1)
    assert memory_log.messages == ["Vehicle not found id=42"]


def test_rent_already_rented_leaves_state_unchanged(manager, memory_log):
    manager.rent("memberA", 1, 1)
    before = manager.ledger.get(1)

    with pytest.raises(VehicleUnavailableError) as exc:
        manager.rent("memberB", 1, 5)

    assert "already rented" in exc.value.message
    assert manager.ledger.get(1) is before
    assert manager.ledger.get(1).renter_id == "memberA"
    assert len(manager.ledger) == 1
    assert memory_log.messages[-1].startswith("Vehicle not available")
    assert_ledger_consistent(manager)


def test_truck_overload_rejected(manager, memory_log):
    with pytest.raises(OverloadError) as exc:
        manager.rent("memberA", 2, 3, 1200.0)

    assert exc.value.message == "Requested load 1200 > max 1000"
    assert memory_log.messages[-1] == "Overload attempt: Requested load 1200 > max 1000"
    assert manager.fleet.find(2).rented is False
    assert 2 not in manager.ledger


def test_truck_at_max_load_is_allowed(manager):
    receipt = manager.rent("memberA", 2, 1, 1000.0)
    # 400 + 1000*0.10
    assert receipt.cost == 500.0
    assert manager.ledger.get(2).load_kg == 1000.0


def test_truck_cost_includes_load(manager):
    receipt = manager.rent("memberD", 2, 2, 500.0)
    assert receipt.cost == 900.0


def test_load_ignored_for_non_trucks(manager):
    receipt = manager.rent("memberC", 1, 2, load_kg=5000.0)
    assert receipt.cost == 400.0
    assert manager.ledger.get(1).load_kg == 0.0


def test_ev_low_battery_blocks_rental(manager, memory_log):
    with pytest.raises(BatteryLowError):
        manager.rent("memberB", 3, 2)

    assert manager.fleet.find(3).rented is False
    assert 3 not in manager.ledger
    assert memory_log.messages[-1].startswith("Start failed for vehicle id=3")
    assert_ledger_consistent(manager)


def test_ev_rent_succeeds_after_charging(manager):
    with pytest.raises(BatteryLowError):
        manager.rent("memberB", 3, 2)

    manager.charge_battery(3, 30.0, renter_id="memberB")
    receipt = manager.rent("memberB", 3, 2)

    # 35 kWh is above the 15 kWh surcharge line: no surcharge
    assert receipt.cost == 700.0
    assert manager.fleet.find(3).rented is True
    assert_ledger_consistent(manager)


def test_ev_surcharge_applied_when_ready_but_low(manager):
    manager.charge_battery(3, 5.0)  # 10 kWh: ready (>= 7.5) but under 15
    receipt = manager.rent("memberB", 3, 1)
    assert receipt.cost == 400.0


def test_fleet_owns_copies(manager):
    car = Car(7, "Honda Jazz", 120.0, 5)
    owned = manager.add_vehicle(car)
    assert owned is not car

    manager.rent("memberE", 7, 1)
    assert owned.rented is True
    assert car.rented is False
