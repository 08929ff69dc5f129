"""Append-only rental log (the engine's audit trail)."""

import os
import threading
from pathlib import Path

import pytz

from rentfleet.exceptions import LogSinkUnavailableError
from rentfleet.services.common import _now
from rentfleet.utils.constants import DEFAULT_LOG_NAME
from rentfleet.utils.filters import fmt_log_ts

# ---- Paths ----
BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_LOG_PATH = BASE_DIR / DEFAULT_LOG_NAME


class RentalLog:
    """
    Timestamped, append-only log file.

    Every line reads `[YYYY-MM-DD HH:MM:SS] message`. The file is opened once
    at construction; if that fails the log is unusable and
    LogSinkUnavailableError is raised, which callers treat as fatal.
    Use as a context manager (or call close()) to release the handle.
    """

    def __init__(self, path: str | os.PathLike | None = None, tz_name: str = "UTC", clock=None):
        self.path = str(path or DEFAULT_LOG_PATH)
        self.tz_name = tz_name
        try:
            self._tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError as e:
            raise LogSinkUnavailableError(f"Unknown log timezone {tz_name!r}") from e
        self._clock = clock or _now
        self._lock = threading.Lock()
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._fh = open(self.path, "a", encoding="utf-8")
        except OSError as e:
            raise LogSinkUnavailableError(f"Cannot open log file {self.path}: {e}") from e

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def log(self, message: str) -> None:
        line = f"[{fmt_log_ts(self._clock(), self._tz)}] {message}\n"
        with self._lock:
            self._fh.write(line)
            self._fh.flush()

    def close(self) -> None:
        with self._lock:
            if not self._fh.closed:
                self._fh.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class MemoryLog:
    """In-memory stand-in with the same `log()` capability (tests, embedding)."""

    def __init__(self):
        self.messages: list[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)

    def close(self) -> None:
        pass
