"""Swiss Ephemeris helpers used to seed the dasha timeline."""

from __future__ import annotations

import os
from datetime import datetime
from zoneinfo import ZoneInfo

import swisseph as swe


# Engine version for API responses
try:
    ENGINE_VERSION = f"swisseph-{swe.version}"
except AttributeError:
    ENGINE_VERSION = "swisseph-2.10"  # Fallback if version not available

AYANAMSHA_MAP = {
    "lahiri": swe.SIDM_LAHIRI,
    "krishnamurti": swe.SIDM_KRISHNAMURTI,
    "raman": swe.SIDM_RAMAN,
}


def _backend_flag() -> int:
    """Return the Swiss Ephemeris backend flag based on environment configuration."""

    raw_backend = os.getenv("EPHEMERIS_BACKEND")
    backend = raw_backend.strip().lower() if raw_backend else "swieph"
    return swe.FLG_MOSEPH if backend == "moseph" else swe.FLG_SWIEPH


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> None:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir:
        return

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)


def to_utc(date_str: str, time_str: str, tz: str) -> datetime:
    dt_local = datetime.fromisoformat(f"{date_str}T{time_str}").replace(tzinfo=ZoneInfo(tz))
    return dt_local.astimezone(ZoneInfo("UTC"))


def to_jd_utc(date_str: str, time_str: str, tz: str) -> float:
    """Convert a local date/time to a Julian day in UTC."""

    dt_utc = to_utc(date_str, time_str, tz)
    hour = (
        dt_utc.hour
        + dt_utc.minute / 60
        + dt_utc.second / 3600
        + dt_utc.microsecond / 3_600_000_000
    )
    return swe.julday(dt_utc.year, dt_utc.month, dt_utc.day, hour, swe.GREG_CAL)


def moon_longitude_sidereal(jd_utc: float, ayanamsha: str = "lahiri") -> float:
    """Sidereal ecliptic longitude of the Moon, in ``[0, 360)``."""

    swe.set_sid_mode(AYANAMSHA_MAP.get(ayanamsha.lower(), swe.SIDM_LAHIRI))
    flag = _backend_flag() | swe.FLG_SIDEREAL
    values, _ = swe.calc_ut(jd_utc, swe.MOON, flag)
    return values[0] % 360.0
