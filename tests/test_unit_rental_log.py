from datetime import datetime, timezone

import pytest

from conftest import FakeClock
from rentfleet import create_app
from rentfleet.exceptions import LogSinkUnavailableError
from rentfleet.services.rental_log import RentalLog
from rentfleet.utils.filters import fmt_iso_local, fmt_log_ts, fmt_num


def test_log_appends_timestamped_lines(tmp_path):
    path = tmp_path / "logs" / "rental_log.txt"
    with RentalLog(path, clock=FakeClock()) as log:
        log.log("first")
        log.log("second")

    assert path.read_text(encoding="utf-8").splitlines() == [
        "[2030-01-10 09:00:00] first",
        "[2030-01-10 09:00:00] second",
    ]


def test_log_appends_across_instances(tmp_path):
    path = tmp_path / "rental_log.txt"
    with RentalLog(path, clock=FakeClock()) as log:
        log.log("one")
    with RentalLog(path, clock=FakeClock()) as log:
        log.log("two")
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_log_closes_on_error(tmp_path):
    with pytest.raises(RuntimeError):
        with RentalLog(tmp_path / "x.txt") as log:
            raise RuntimeError("boom")
    assert log.closed


def test_log_uses_configured_timezone(tmp_path):
    path = tmp_path / "rental_log.txt"
    with RentalLog(path, tz_name="Pacific/Auckland", clock=FakeClock()) as log:
        log.log("hello")
    # NZDT is UTC+13 in January
    assert path.read_text(encoding="utf-8") == "[2030-01-10 22:00:00] hello\n"


def test_unopenable_log_is_fatal(tmp_path):
    # a directory cannot be opened for appending
    with pytest.raises(LogSinkUnavailableError):
        RentalLog(tmp_path)


def test_app_startup_fails_without_log(tmp_path):
    with pytest.raises(LogSinkUnavailableError):
        create_app({"RENTAL_LOG_PATH": str(tmp_path)})


def test_app_opens_configured_log(tmp_path):
    path = tmp_path / "app.log"
    app = create_app({"TESTING": True, "RENTAL_LOG_PATH": str(path)})
    app.extensions["rentfleet"].rent("memberC", 1, 1)
    app.extensions["rentfleet"].log.close()
    assert "Rented vehicle id=1 to renter=memberC" in path.read_text(encoding="utf-8")


def test_formatting_helpers():
    assert fmt_num(200.0) == "200"
    assert fmt_num(0.5) == "0.5"
    assert fmt_num(1234567.0) == "1234567"
    dt = datetime(2030, 1, 10, 9, 0, tzinfo=timezone.utc)
    assert fmt_log_ts(dt) == "2030-01-10 09:00:00"
    assert fmt_iso_local(dt) == "10/01/2030 09:00"
    assert fmt_iso_local("2030-01-10T09:00:00Z", "Pacific/Auckland") == "10/01/2030 22:00"
    assert fmt_iso_local("2030-01-10") == "10/01/2030"
    assert fmt_iso_local("not a date") == "not a date"
    assert fmt_iso_local(None) == ""


def test_unknown_timezone_fails_at_construction(tmp_path):
    with pytest.raises(LogSinkUnavailableError):
        RentalLog(tmp_path / "rental_log.txt", tz_name="Not/AZone")


def test_app_startup_fails_on_unknown_timezone(tmp_path):
    with pytest.raises(LogSinkUnavailableError):
        create_app({"RENTAL_LOG_PATH": str(tmp_path / "app.log"), "TIMEZONE": "Not/AZone"})


def test_app_closes_log_when_setup_fails(tmp_path, monkeypatch):
    import rentfleet

    opened = []

    class TrackedLog(RentalLog):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            opened.append(self)

    def broken_seed(manager):
        raise RuntimeError("seed failed")

    monkeypatch.setattr(rentfleet, "RentalLog", TrackedLog)
    monkeypatch.setattr(rentfleet, "seed_fleet", broken_seed)

    with pytest.raises(RuntimeError):
        create_app({"RENTAL_LOG_PATH": str(tmp_path / "app.log")})

    assert len(opened) == 1
    assert opened[0].closed
