"""Number and date formatting helpers (used by the log, receipts and the API)."""
from datetime import datetime, timezone
import pytz

from rentfleet.utils.constants import LOG_TS_FMT


def fmt_num(value: float) -> str:
    """
    Compact number for display lines: 200.0 -> '200', 0.5 -> '0.5'.
    Trailing zeros are dropped; amounts are rounded to cents first.
    """
    s = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if s in ("", "-0") else s


def localize(dt: datetime, tz_name: str = "UTC") -> datetime:
    """Convert an aware datetime to `tz_name`. Naive values are assumed UTC."""
    tz = pytz.timezone(tz_name) if isinstance(tz_name, str) else tz_name
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def fmt_log_ts(dt: datetime, tz_name: str = "UTC") -> str:
    """Timestamp prefix for log lines, e.g. '2030-01-10 09:30:00'."""
    return localize(dt, tz_name).strftime(LOG_TS_FMT)


def fmt_iso_local(value, tz_name: str = "UTC") -> str:
    """
    Format a datetime (or ISO string) as 'DD/MM/YYYY HH:MM' in `tz_name`.
    Supports:
      - datetime objects (naive = UTC)
      - 'YYYY-MM-DDTHH:MM:SS' with or without 'Z' / offsets
      - 'YYYY-MM-DD' (returned as 'DD/MM/YYYY')
    On parse error, returns the original value.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return localize(value, tz_name).strftime("%d/%m/%Y %H:%M")

    s = str(value).strip()
    if not s:
        return ""

    s_norm = s.replace("T", " ")
    if s_norm.endswith("Z"):
        s_norm = s_norm[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(s_norm)
    except ValueError:
        return s

    if ":" not in s_norm:
        # Date-only, nothing to convert
        return dt.strftime("%d/%m/%Y")
    return localize(dt, tz_name).strftime("%d/%m/%Y %H:%M")
