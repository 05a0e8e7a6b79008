import datetime as dt
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal, Dict, Any, Union
from .charts import ChartInput

Level = Literal[1, 2]  # 1 = Mahadasha only, 2 = Maha + Antar

class AnchorIn(BaseModel):
    birth_date: dt.date
    starting_lord: str
    progress_fraction: Union[float, str] = Field(
        ..., description="Fraction of the birth lord's period already elapsed, e.g. '0.5'",
        json_schema_extra={"example": "0.5"},
    )

class DashaOptions(BaseModel):
    levels: Level = 2
    ayanamsha: str = "lahiri"  # KP etc. via chart_input.options if you prefer
    horizon_intervals: Optional[int] = Field(default=None, ge=1, le=60)
    year_days: Optional[str] = None  # e.g. "365.25"; defaults to DASHA_YEAR_DAYS

class _DashaSource(BaseModel):
    chart_input: Optional[ChartInput] = None
    anchor: Optional[AnchorIn] = None
    options: DashaOptions = DashaOptions()

    @model_validator(mode="after")
    def _one_source(self):
        if (self.chart_input is None) == (self.anchor is None):
            raise ValueError("provide exactly one of chart_input or anchor")
        return self

class DashaComputeRequest(_DashaSource):
    as_of: Optional[dt.date] = None
    depth: int = Field(default=3, ge=1, le=6)

class DashaResolveRequest(_DashaSource):
    date: dt.date
    depth: int = Field(default=3, ge=1, le=6)

class DashaTransitionsRequest(_DashaSource):
    level: int = Field(default=1, ge=1, le=6)
    from_date: dt.date
    horizon_days: int = Field(default=365, ge=0, le=36500)

class DashaPeriod(BaseModel):
    level: int
    level_name: str
    lord: str
    start: str  # ISO date
    end: str    # ISO date, exclusive
    days: int
    parent: Optional[str] = None  # maha lord for antars
    # set on resolved chains, relative to the query date
    elapsed_days: Optional[int] = None
    remaining_days: Optional[int] = None
    progress_percent: Optional[float] = None

class TransitionWindowOut(BaseModel):
    level: int
    from_lord: str
    to_lord: str
    transition_date: str
    window_start: str
    window_end: str  # exclusive

class DashaComputeResponse(BaseModel):
    meta: Dict[str, Any]
    periods: List[DashaPeriod]
    current: Optional[List[DashaPeriod]] = None

class DashaResolveResponse(BaseModel):
    meta: Dict[str, Any]
    date: str
    chain: List[DashaPeriod]
    label: str

class DashaTransitionsResponse(BaseModel):
    meta: Dict[str, Any]
    transitions: List[TransitionWindowOut]
