from .errors import (
    DashaError,
    IndivisiblePeriodError,
    InvalidDepthError,
    InvalidWeightTableError,
    MissingAnchorError,
    OutOfRangeQueryError,
    PartitionConsistencyError,
)
from .model import LEVEL_NAMES, MAX_LEVEL, AnchorInput, Interval, TransitionWindow, as_date
from .weights import RING_SIZE, VIMSHOTTARI, SequenceRing, WeightTable
from .rounding import as_fraction, round_half_even, to_days
from .partition import partition, partition_interval
from .timeline import build
from .descent import children_of, resolve
from .sandhi import collect_upcoming, default_window_percent
