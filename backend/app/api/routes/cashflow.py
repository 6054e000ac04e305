"""Household cash-flow summary, allocation and projection endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from app.api.dependencies.services import get_portfolio_income_cache
from app.schemas import (
    AllocationRequest,
    AllocationResponse,
    AllocationSliceSchema,
    CashFlowRequest,
    CashFlowSummary,
    ProjectionMonthSchema,
    ProjectionRequest,
    ProjectionResponse,
)
from networth import schedules
from networth.cache import IncomeCacheService
from networth.errors import PreconditionViolation
from networth.projections import asset_allocation, cash_flow_projection, income_allocation

router = APIRouter()


@router.post("/summary", response_model=CashFlowSummary)
async def cash_flow_summary(payload: CashFlowRequest) -> CashFlowSummary:
    try:
        incomes = [income.to_domain() for income in payload.incomes]
        expenses = [expense.to_domain() for expense in payload.expenses]
        liabilities = [liability.to_domain() for liability in payload.liabilities]

        monthly_income = schedules.total_monthly_income(incomes)
        passive_income = schedules.passive_monthly_income(incomes)
        monthly_expenses = schedules.total_monthly_expenses(expenses)
        debt_payments = schedules.monthly_liability_payments(liabilities)
        by_category = schedules.expenses_by_category(expenses)
    except PreconditionViolation as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    debt = schedules.total_debt(liabilities)
    cash_flow = schedules.monthly_cash_flow(monthly_income, monthly_expenses, debt_payments)
    return CashFlowSummary(
        total_monthly_income=monthly_income,
        passive_monthly_income=passive_income,
        total_monthly_expenses=monthly_expenses,
        expenses_by_category=by_category,
        monthly_liability_payments=debt_payments,
        total_debt=debt,
        net_worth=schedules.net_worth(payload.total_assets, debt),
        monthly_cash_flow=cash_flow,
        passive_income_ratio=schedules.passive_income_ratio(monthly_income, passive_income),
        expense_ratio=schedules.expense_ratio(monthly_expenses, monthly_income),
        savings_rate=schedules.savings_rate(cash_flow, monthly_income),
        debt_to_income_ratio=schedules.debt_to_income_ratio(debt, monthly_income),
    )


@router.post("/allocation", response_model=AllocationResponse)
async def allocation(
    payload: AllocationRequest,
    cache: IncomeCacheService = Depends(get_portfolio_income_cache),
) -> AllocationResponse:
    """Split asset value by asset type and monthly income by income type."""

    incomes = [income.to_domain() for income in payload.incomes]
    assets = [asset.to_domain() for asset in payload.assets]
    try:
        by_income = await run_in_threadpool(income_allocation, incomes, assets, cache.get_or_compute)
    except PreconditionViolation as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return AllocationResponse(
        assets=[AllocationSliceSchema.from_domain(s) for s in asset_allocation(assets)],
        income=[AllocationSliceSchema.from_domain(s) for s in by_income],
    )


@router.post("/projection", response_model=ProjectionResponse)
async def projection(
    payload: ProjectionRequest,
    cache: IncomeCacheService = Depends(get_portfolio_income_cache),
) -> ProjectionResponse:
    """Project monthly cash flow, including asset payouts, from the start month."""

    try:
        months = await run_in_threadpool(
            cash_flow_projection,
            [income.to_domain() for income in payload.incomes],
            [expense.to_domain() for expense in payload.expenses],
            [liability.to_domain() for liability in payload.liabilities],
            [asset.to_domain() for asset in payload.assets],
            months=payload.months,
            start=payload.start,
            income_fn=cache.get_or_compute,
        )
    except PreconditionViolation as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return ProjectionResponse(months=[ProjectionMonthSchema.from_domain(m) for m in months])
