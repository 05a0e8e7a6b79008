import logging

from fastapi import APIRouter, HTTPException
from ..schemas import (
    DashaComputeRequest,
    DashaComputeResponse,
    DashaResolveRequest,
    DashaResolveResponse,
    DashaTransitionsRequest,
    DashaTransitionsResponse,
)
from ..services.dashas_vimshottari import DashaTimeline, describe_chain, flat_periods
from ..services.vimshottari.errors import InvalidDepthError, MissingAnchorError, OutOfRangeQueryError
from ..services.vimshottari.model import AnchorInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/dashas", tags=["dashas"])


def _timeline(req) -> DashaTimeline:
    opts = req.options
    try:
        if req.anchor is not None:
            anchor = AnchorInput(req.anchor.birth_date, req.anchor.starting_lord, req.anchor.progress_fraction)
        else:
            from ..services.vedic import anchor_for_chart

            # Force Vedic assumptions regardless of chart_input.system (dashas are Vedic)
            ayan = (req.chart_input.options or {}).get("ayanamsha", opts.ayanamsha)
            anchor = anchor_for_chart(req.chart_input.model_dump(), ayanamsha=ayan)
        return DashaTimeline.build(anchor, horizon_intervals=opts.horizon_intervals, year_length_days=opts.year_days)
    except MissingAnchorError as exc:
        raise HTTPException(status_code=422, detail={"code": "INVALID_ANCHOR", "message": str(exc)}) from exc
    except (ValueError, OverflowError) as exc:
        raise HTTPException(status_code=422, detail={"code": "INVALID_OPTIONS", "message": str(exc)}) from exc


def _meta(timeline: DashaTimeline, req) -> dict:
    meta = {
        "system": "vedic",
        "table": timeline.table.name,
        "birth_lord": timeline.anchor.starting_symbol,
        "progress_fraction": str(timeline.anchor.progress_fraction),
        "start": timeline.start.isoformat(),
        "end": timeline.end.isoformat(),
        "source": "anchor" if req.anchor is not None else "chart",
    }
    if req.anchor is None:
        from ..services.ephem import ENGINE_VERSION

        meta["engine"] = ENGINE_VERSION
    return meta


def _resolve(timeline: DashaTimeline, day, depth: int):
    try:
        return timeline.resolve(day, depth)
    except OutOfRangeQueryError as exc:
        raise HTTPException(status_code=400, detail={"code": "DATE_OUT_OF_RANGE", "message": str(exc)}) from exc
    except InvalidDepthError as exc:
        raise HTTPException(status_code=422, detail={"code": "INVALID_DEPTH", "message": str(exc)}) from exc


def _chain_out(chain, as_of) -> list:
    out, parent = [], None
    for iv in chain:
        out.append({
            **iv.to_dict(),
            "parent": parent,
            "elapsed_days": iv.elapsed_days(as_of),
            "remaining_days": iv.remaining_days(as_of),
            "progress_percent": iv.progress_percent(as_of),
        })
        parent = iv.symbol
    return out


@router.post("/compute", response_model=DashaComputeResponse)
def compute_dashas(req: DashaComputeRequest):
    timeline = _timeline(req)
    periods = flat_periods(timeline, req.options.levels)
    current = None
    if req.as_of is not None:
        current = _chain_out(_resolve(timeline, req.as_of, req.depth), req.as_of)
    return DashaComputeResponse(
        meta={**_meta(timeline, req), "levels": req.options.levels},
        periods=periods,
        current=current,
    )


@router.post("/resolve", response_model=DashaResolveResponse)
def resolve_dasha(req: DashaResolveRequest):
    timeline = _timeline(req)
    chain = _resolve(timeline, req.date, req.depth)
    if len(chain) < req.depth:
        logger.info("dasha_resolve_truncated", extra={"requested": req.depth, "resolved": len(chain)})
    return DashaResolveResponse(
        meta={**_meta(timeline, req), "depth": req.depth, "resolved_depth": len(chain)},
        date=req.date.isoformat(),
        chain=_chain_out(chain, req.date),
        label=describe_chain(chain),
    )


@router.post("/transitions", response_model=DashaTransitionsResponse)
def dasha_transitions(req: DashaTransitionsRequest):
    timeline = _timeline(req)
    try:
        windows = timeline.upcoming_transitions(req.level, req.from_date, req.horizon_days)
    except OutOfRangeQueryError as exc:
        raise HTTPException(status_code=400, detail={"code": "DATE_OUT_OF_RANGE", "message": str(exc)}) from exc
    return DashaTransitionsResponse(
        meta={**_meta(timeline, req), "level": req.level, "horizon_days": req.horizon_days},
        transitions=[w.to_dict() for w in windows],
    )
