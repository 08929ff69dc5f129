import sys, os, pathlib
from datetime import datetime, timedelta, timezone

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest

from rentfleet import create_app
from rentfleet.services import MemoryLog, RentalManager, seed_fleet

START = datetime(2030, 1, 10, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock the tests move by hand."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def assert_ledger_consistent(manager: RentalManager):
    """rented flag <=> ledger record, for every fleet vehicle."""
    for v in manager.fleet:
        assert v.rented == (v.vehicle_id in manager.ledger), v.describe()


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    yield


@pytest.fixture
def memory_log():
    return MemoryLog()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(memory_log, clock):
    """
    Engine seeded with the reference fleet:
      1 = Car 'Toyota Avanza' 200/day, 2 = Truck 400/day max 1000kg,
      3 = EV 350/day, 75 kWh battery at 5 kWh.
    """
    m = RentalManager(memory_log, clock=clock)
    seed_fleet(m)
    return m


@pytest.fixture
def client(memory_log):
    app = create_app({"TESTING": True}, log=memory_log)
    with app.test_client() as c:
        yield c
