"""Pydantic schemas for cash-flow summaries."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from networth.models import AllocationSlice, Expense, Income, IncomeType, Liability, ProjectionMonth

from .income import IncomeAssetSchema
from .schedules import PaymentScheduleSchema


class IncomeSchema(BaseModel):
    name: str = Field(..., examples=["Salary"])
    schedule: PaymentScheduleSchema
    is_passive: bool = False
    income_type: IncomeType = IncomeType.OTHER
    source_id: Optional[str] = Field(default=None, description="Asset definition id this income is paid by")

    def to_domain(self) -> Income:
        return Income(
            name=self.name,
            schedule=self.schedule.to_domain(),
            is_passive=self.is_passive,
            income_type=self.income_type,
            source_id=self.source_id,
        )


class ExpenseSchema(BaseModel):
    name: str = Field(..., examples=["Rent"])
    schedule: PaymentScheduleSchema
    category: str = "other"

    def to_domain(self) -> Expense:
        return Expense(name=self.name, schedule=self.schedule.to_domain(), category=self.category)


class LiabilitySchema(BaseModel):
    name: str = Field(..., examples=["Mortgage"])
    current_balance: Decimal
    schedule: PaymentScheduleSchema
    interest_rate: Decimal = Decimal("0")

    def to_domain(self) -> Liability:
        return Liability(
            name=self.name,
            current_balance=self.current_balance,
            schedule=self.schedule.to_domain(),
            interest_rate=self.interest_rate,
        )


class CashFlowRequest(BaseModel):
    incomes: List[IncomeSchema] = Field(default_factory=list)
    expenses: List[ExpenseSchema] = Field(default_factory=list)
    liabilities: List[LiabilitySchema] = Field(default_factory=list)
    total_assets: Decimal = Decimal("0")


class CashFlowSummary(BaseModel):
    total_monthly_income: Decimal
    passive_monthly_income: Decimal
    total_monthly_expenses: Decimal
    expenses_by_category: Dict[str, Decimal]
    monthly_liability_payments: Decimal
    total_debt: Decimal
    net_worth: Decimal
    monthly_cash_flow: Decimal
    passive_income_ratio: Decimal
    expense_ratio: Decimal
    savings_rate: Decimal
    debt_to_income_ratio: Decimal


class AllocationSliceSchema(BaseModel):
    type: str
    value: Decimal
    percentage: Decimal
    count: int

    @classmethod
    def from_domain(cls, allocation: AllocationSlice) -> AllocationSliceSchema:
        return cls(
            type=allocation.type,
            value=allocation.value,
            percentage=allocation.percentage,
            count=allocation.count,
        )


class AllocationRequest(BaseModel):
    incomes: List[IncomeSchema] = Field(default_factory=list)
    assets: List[IncomeAssetSchema] = Field(default_factory=list)


class AllocationResponse(BaseModel):
    assets: List[AllocationSliceSchema]
    income: List[AllocationSliceSchema]


class ProjectionRequest(BaseModel):
    incomes: List[IncomeSchema] = Field(default_factory=list)
    expenses: List[ExpenseSchema] = Field(default_factory=list)
    liabilities: List[LiabilitySchema] = Field(default_factory=list)
    assets: List[IncomeAssetSchema] = Field(default_factory=list)
    months: int = Field(default=12, ge=1, le=120)
    start: Optional[date] = Field(default=None, description="Any day of the first projected month; today when omitted")

    class Config:
        json_schema_extra = {
            "example": {
                "incomes": [{"name": "Salary", "schedule": {"frequency": "monthly", "amount": "3000"}}],
                "expenses": [{"name": "Rent", "schedule": {"frequency": "monthly", "amount": "1200"}}],
                "months": 12,
            }
        }


class ProjectionMonthSchema(BaseModel):
    month: date
    active_income: Decimal
    passive_income: Decimal
    asset_income: Decimal
    expense_total: Decimal
    liability_payments: Decimal
    income_total: Decimal
    net_cash_flow: Decimal
    cumulative_cash_flow: Decimal
    passive_income_coverage: Decimal

    @classmethod
    def from_domain(cls, month: ProjectionMonth) -> ProjectionMonthSchema:
        return cls(**vars(month))


class ProjectionResponse(BaseModel):
    months: List[ProjectionMonthSchema]
