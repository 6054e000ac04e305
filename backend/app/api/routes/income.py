"""Per-asset income endpoints backed by the income memo table."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from app.api.dependencies.services import get_income_cache, get_portfolio_income_cache
from app.schemas import (
    CacheClearResponse,
    IncomeAssetSchema,
    IncomeResultSchema,
    PortfolioIncomeRequest,
    PortfolioIncomeResponse,
)
from networth.cache import IncomeCacheService
from networth.errors import PreconditionViolation

router = APIRouter()


async def _cached_income(cache: IncomeCacheService, payload: IncomeAssetSchema) -> IncomeResultSchema:
    asset = payload.to_domain()
    try:
        # The store may be backed by a blocking database session
        result = await run_in_threadpool(cache.get_or_compute, asset)
    except PreconditionViolation as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return IncomeResultSchema(
        asset_id=asset.definition.id,
        monthly_amount=result.monthly_amount,
        annual_amount=result.annual_amount,
        monthly_breakdown=result.monthly_breakdown,
        cache_hit=result.cache_hit,
    )


@router.post("/assets", response_model=IncomeResultSchema)
async def asset_income(
    payload: IncomeAssetSchema,
    cache: IncomeCacheService = Depends(get_income_cache),
) -> IncomeResultSchema:
    """Return the monthly and annual income of one held asset."""

    return await _cached_income(cache, payload)


@router.post("/portfolio", response_model=PortfolioIncomeResponse)
async def portfolio_income(
    payload: PortfolioIncomeRequest,
    cache: IncomeCacheService = Depends(get_portfolio_income_cache),
) -> PortfolioIncomeResponse:
    """Return the combined income of every supplied asset."""

    results = [await _cached_income(cache, asset) for asset in payload.assets]
    combined: Dict[int, Decimal] = {month: Decimal("0") for month in range(1, 13)}
    for result in results:
        for month, amount in result.monthly_breakdown.items():
            combined[month] += amount
    return PortfolioIncomeResponse(
        monthly_amount=sum((r.monthly_amount for r in results), Decimal("0")),
        annual_amount=sum((r.annual_amount for r in results), Decimal("0")),
        monthly_breakdown=combined,
        assets=results,
    )


@router.delete("/cache", response_model=CacheClearResponse)
async def clear_income_cache(
    asset_cache: IncomeCacheService = Depends(get_income_cache),
    portfolio_cache: IncomeCacheService = Depends(get_portfolio_income_cache),
) -> CacheClearResponse:
    """Drop every memoized income result."""

    removed = await run_in_threadpool(asset_cache.clear_cache)
    removed += await run_in_threadpool(portfolio_cache.clear_cache)
    return CacheClearResponse(removed=removed)
