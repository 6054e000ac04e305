"""Net worth timeline endpoints."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies.services import get_portfolio_client
from app.config import get_settings
from app.core.telemetry import get_tracer
from app.schemas import (
    PortfolioHistoryDaySchema,
    PortfolioHistoryRequest,
    PortfolioHistoryResponse,
    PortfolioPositionSchema,
    PositionSummarySchema,
    SkippedPositionSchema,
)
from app.services.portfolio import PortfolioServiceClient
from networth.dates import DateRange, TimeRange
from networth.errors import DataUnavailableError, PreconditionViolation
from networth.models import PortfolioPosition
from networth.timeline import build_history_report, summarize_positions

router = APIRouter()
logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


def _window(
    start_date: Optional[date],
    end_date: Optional[date],
    time_range: Optional[TimeRange],
) -> DateRange:
    if start_date is not None and end_date is not None:
        return DateRange(start_date, end_date)
    chosen = time_range or get_settings().default_history_range
    return DateRange.for_time_range(chosen, end=date.today())


def _history(
    positions: Sequence[PortfolioPosition],
    liabilities_total: Decimal,
    window: DateRange,
) -> PortfolioHistoryResponse:
    with tracer.start_as_current_span("networth.build_history") as span:
        span.set_attribute("networth.range_days", len(window))
        span.set_attribute("networth.position_count", len(positions))
        report = build_history_report(
            positions, liabilities_total, window.start, window.end, logger=logger
        )
        span.set_attribute("networth.skipped_count", len(report.skipped))

    return PortfolioHistoryResponse(
        start_date=window.start,
        end_date=window.end,
        days=[
            PortfolioHistoryDaySchema(
                date=day.date,
                value=day.value,
                change=day.change,
                change_percentage=day.change_percentage,
            )
            for day in report.days
        ],
        skipped=[SkippedPositionSchema(asset_id=s.asset_id, reason=s.reason) for s in report.skipped],
    )


@router.post("/history", response_model=PortfolioHistoryResponse)
async def portfolio_history(payload: PortfolioHistoryRequest) -> PortfolioHistoryResponse:
    """Compute the daily net worth series for a supplied portfolio snapshot."""

    try:
        window = _window(payload.start_date, payload.end_date, payload.range)
    except PreconditionViolation as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    positions = [position.to_domain() for position in payload.positions]
    return _history(positions, payload.liabilities_total, window)


@router.get("/history", response_model=PortfolioHistoryResponse)
async def stored_portfolio_history(
    time_range: Optional[TimeRange] = Query(default=None, alias="range"),
    client: PortfolioServiceClient = Depends(get_portfolio_client),
) -> PortfolioHistoryResponse:
    """Compute the daily net worth series for the portfolio held by the CRUD service."""

    try:
        snapshot = await client.fetch_snapshot()
    except DataUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    window = _window(None, None, time_range)
    return _history(snapshot.positions, snapshot.liabilities_total, window)


@router.post("/summary", response_model=List[PositionSummarySchema])
async def positions_summary(
    positions: List[PortfolioPositionSchema],
    as_of: Optional[date] = Query(default=None),
) -> List[PositionSummarySchema]:
    """Return quantity, price, value and net invested per position."""

    summaries = summarize_positions(
        [position.to_domain() for position in positions],
        as_of or date.today(),
        logger=logger,
    )
    return [
        PositionSummarySchema(
            asset_id=summary.asset_id,
            name=summary.name,
            quantity=summary.quantity,
            price=summary.price,
            value=summary.value,
            net_invested=summary.net_invested,
        )
        for summary in summaries
    ]
