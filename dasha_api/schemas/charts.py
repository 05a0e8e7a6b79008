from pydantic import BaseModel
from typing import Optional, Literal

System = Literal["western", "vedic"]

class Place(BaseModel):
    lat: float
    lon: float
    tz: str
    query: Optional[str] = None

class ChartInput(BaseModel):
    system: System = "vedic"
    date: str  # YYYY-MM-DD
    time: str  # HH:MM:SS
    time_known: bool = True
    place: Place
    options: Optional[dict] = None
