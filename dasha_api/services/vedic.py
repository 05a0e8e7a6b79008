import os
from datetime import date
from fractions import Fraction
from typing import Any, Dict

from .vimshottari.model import AnchorInput
from .vimshottari.rounding import as_fraction
from .vimshottari.weights import VIMSHOTTARI, WeightTable

NAKSHATRAS = [
  "Ashwini","Bharani","Krittika","Rohini","Mrigashira","Ardra","Punarvasu","Pushya","Ashlesha",
  "Magha","Purva Phalguni","Uttara Phalguni","Hasta","Chitra","Swati","Vishakha","Anuradha",
  "Jyeshtha","Mula","Purva Ashadha","Uttara Ashadha","Shravana","Dhanishtha","Shatabhisha",
  "Purva Bhadrapada","Uttara Bhadrapada","Revati"
]

# Each nakshatra = 13°20′, each pada a quarter of that
NAKSHATRA_SPAN = Fraction(40, 3)
PADA_SPAN = NAKSHATRA_SPAN / 4


def _split(lon_sid) -> tuple:
    lon = as_fraction(lon_sid) % 360
    idx = int(lon // NAKSHATRA_SPAN)
    return idx, lon - idx * NAKSHATRA_SPAN


def nakshatra_from_lon_sidereal(lon_sid: float) -> dict:
    idx, into = _split(lon_sid)
    pada = int(into // PADA_SPAN) + 1
    return {"name": NAKSHATRAS[idx], "pada": pada, "index": idx}


def anchor_from_moon_longitude(lon_sid, birth_date: date, table: WeightTable = VIMSHOTTARI) -> AnchorInput:
    """Birth lord and elapsed fraction from the Moon's sidereal longitude.

    Nakshatras are ruled by the ring in order, Ashwini by its first lord, so
    the lord is ``ring[index % 9]``; the elapsed fraction is how far the Moon
    has travelled through its nakshatra.
    """

    idx, into = _split(lon_sid)
    return AnchorInput(
        birth_date=birth_date,
        starting_symbol=table.symbols[idx % len(table)],
        progress_fraction=into / NAKSHATRA_SPAN,
    )


def anchor_for_chart(chart_input: Dict[str, Any], ayanamsha: str = "lahiri") -> AnchorInput:
    from . import ephem

    ephem.init_paths(os.getenv("EPHEMERIS_DIR"))
    place = chart_input["place"]
    jd = ephem.to_jd_utc(chart_input["date"], chart_input["time"], place["tz"])
    moon = ephem.moon_longitude_sidereal(jd, ayanamsha=ayanamsha)
    # dashas run from the local civil birth date
    return anchor_from_moon_longitude(moon, date.fromisoformat(chart_input["date"]))
