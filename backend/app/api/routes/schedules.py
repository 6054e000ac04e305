"""Payment schedule normalization endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.schemas import (
    NormalizedScheduleSchema,
    PaymentScheduleSchema,
    ScheduleBreakdownRequest,
    ScheduleBreakdownResponse,
)
from networth.errors import PreconditionViolation
from networth.schedules import monthly_breakdown, normalize

router = APIRouter()


@router.post("/normalize", response_model=NormalizedScheduleSchema)
async def normalize_schedule(payload: PaymentScheduleSchema) -> NormalizedScheduleSchema:
    """Return the monthly and annual equivalents of a schedule."""

    try:
        result = normalize(payload.to_domain())
    except PreconditionViolation as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return NormalizedScheduleSchema(
        monthly_amount=result.monthly_amount,
        annual_amount=result.annual_amount,
        paying_months=sorted(result.paying_months),
    )


@router.post("/breakdown", response_model=ScheduleBreakdownResponse)
async def schedule_breakdown(payload: ScheduleBreakdownRequest) -> ScheduleBreakdownResponse:
    """Return the amount paid in each calendar month."""

    try:
        breakdown = monthly_breakdown(payload.schedule.to_domain(), payload.quantity)
    except PreconditionViolation as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return ScheduleBreakdownResponse(
        monthly_breakdown=breakdown,
        annual_amount=sum(breakdown.values()),
    )
