"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .cashflow import router as cashflow_router
from .income import router as income_router
from .portfolio import router as portfolio_router
from .schedules import router as schedules_router

api_router = APIRouter()
api_router.include_router(schedules_router, prefix="/schedules", tags=["schedules"])
api_router.include_router(cashflow_router, prefix="/cashflow", tags=["cashflow"])
api_router.include_router(portfolio_router, prefix="/portfolio", tags=["portfolio"])
api_router.include_router(income_router, prefix="/income", tags=["income"])

__all__ = ["api_router"]
