"""Pydantic schema exports."""

from .cashflow import (
    AllocationRequest,
    AllocationResponse,
    AllocationSliceSchema,
    CashFlowRequest,
    CashFlowSummary,
    ExpenseSchema,
    IncomeSchema,
    LiabilitySchema,
    ProjectionMonthSchema,
    ProjectionRequest,
    ProjectionResponse,
)
from .income import (
    CacheClearResponse,
    IncomeAssetSchema,
    IncomeResultSchema,
    PortfolioIncomeRequest,
    PortfolioIncomeResponse,
)
from .portfolio import (
    AssetDefinitionSchema,
    PortfolioHistoryDaySchema,
    PortfolioHistoryRequest,
    PortfolioHistoryResponse,
    PortfolioPositionSchema,
    PositionSummarySchema,
    PriceHistoryPointSchema,
    SkippedPositionSchema,
    TransactionSchema,
)
from .schedules import (
    NormalizedScheduleSchema,
    PaymentScheduleSchema,
    ScheduleBreakdownRequest,
    ScheduleBreakdownResponse,
)

__all__ = [
    "PaymentScheduleSchema",
    "NormalizedScheduleSchema",
    "ScheduleBreakdownRequest",
    "ScheduleBreakdownResponse",
    "IncomeSchema",
    "ExpenseSchema",
    "LiabilitySchema",
    "CashFlowRequest",
    "CashFlowSummary",
    "AllocationSliceSchema",
    "AllocationRequest",
    "AllocationResponse",
    "ProjectionRequest",
    "ProjectionMonthSchema",
    "ProjectionResponse",
    "PriceHistoryPointSchema",
    "TransactionSchema",
    "AssetDefinitionSchema",
    "PortfolioPositionSchema",
    "PositionSummarySchema",
    "PortfolioHistoryRequest",
    "PortfolioHistoryDaySchema",
    "SkippedPositionSchema",
    "PortfolioHistoryResponse",
    "IncomeAssetSchema",
    "IncomeResultSchema",
    "PortfolioIncomeRequest",
    "PortfolioIncomeResponse",
    "CacheClearResponse",
]
