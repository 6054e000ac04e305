"""Pydantic schemas for payment schedules."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from networth.models import PaymentFrequency, PaymentSchedule


class PaymentScheduleSchema(BaseModel):
    frequency: PaymentFrequency = Field(..., examples=["quarterly"])
    amount: Decimal = Decimal("0")
    months: Optional[Set[int]] = None
    custom_amounts: Optional[Dict[int, Decimal]] = None
    payment_months: Optional[Set[int]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "frequency": "custom",
                "amount": "100",
                "months": [3, 9],
                "custom_amounts": {"9": "150"},
            }
        }

    def to_domain(self) -> PaymentSchedule:
        return PaymentSchedule(
            frequency=self.frequency,
            amount=self.amount,
            months=frozenset(self.months) if self.months is not None else None,
            custom_amounts=dict(self.custom_amounts) if self.custom_amounts is not None else None,
            payment_months=frozenset(self.payment_months) if self.payment_months is not None else None,
        )


class NormalizedScheduleSchema(BaseModel):
    monthly_amount: Decimal
    annual_amount: Decimal
    paying_months: List[int]


class ScheduleBreakdownRequest(BaseModel):
    schedule: PaymentScheduleSchema
    quantity: Decimal = Field(default=Decimal("1"), description="Multiplier, e.g. shares held")


class ScheduleBreakdownResponse(BaseModel):
    monthly_breakdown: Dict[int, Decimal]
    annual_amount: Decimal
