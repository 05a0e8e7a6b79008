from .charts import ChartInput, Place

from .dashas import (
    AnchorIn,
    DashaOptions,
    DashaComputeRequest,
    DashaComputeResponse,
    DashaResolveRequest,
    DashaResolveResponse,
    DashaTransitionsRequest,
    DashaTransitionsResponse,
    DashaPeriod,
    TransitionWindowOut,
)
