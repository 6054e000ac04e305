"""Pydantic schemas for portfolio snapshots and the net worth timeline."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from networth.dates import TimeRange
from networth.models import (
    AssetDefinition,
    AssetType,
    BondInfo,
    PortfolioPosition,
    PriceHistoryPoint,
    RentalInfo,
    Transaction,
)

from .schedules import PaymentScheduleSchema


class PriceHistoryPointSchema(BaseModel):
    date: date
    price: Decimal


class TransactionSchema(BaseModel):
    # Quantity, price and type are left loose so that a malformed position is
    # reported as skipped by the timeline instead of failing the whole request.
    id: str
    purchase_date: date
    purchase_quantity: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None
    transaction_type: str = Field(default="buy", examples=["buy", "sell"])
    value: Decimal = Decimal("0")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "tx-1",
                "purchase_date": "2024-01-01",
                "purchase_quantity": "10",
                "purchase_price": "100",
                "transaction_type": "buy",
                "value": "1000",
            }
        }

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            purchase_date=self.purchase_date,
            purchase_quantity=self.purchase_quantity,  # type: ignore[arg-type]
            purchase_price=self.purchase_price,  # type: ignore[arg-type]
            transaction_type=self.transaction_type,  # type: ignore[arg-type]
            value=self.value,
        )


class RentalInfoSchema(BaseModel):
    base_rent: Decimal


class BondInfoSchema(BaseModel):
    interest_rate: Decimal = Field(..., description="Annual interest rate in percent")


class AssetDefinitionSchema(BaseModel):
    id: str
    name: str
    current_price: Optional[Decimal] = None
    price_history: List[PriceHistoryPointSchema] = Field(default_factory=list)
    asset_type: AssetType = AssetType.STOCK
    ticker: Optional[str] = None
    dividend_info: Optional[PaymentScheduleSchema] = None
    rental_info: Optional[RentalInfoSchema] = None
    bond_info: Optional[BondInfoSchema] = None

    def to_domain(self) -> AssetDefinition:
        return AssetDefinition(
            id=self.id,
            name=self.name,
            current_price=self.current_price,
            price_history=tuple(
                PriceHistoryPoint(date=point.date, price=point.price) for point in self.price_history
            ),
            asset_type=self.asset_type,
            ticker=self.ticker,
            dividend_info=self.dividend_info.to_domain() if self.dividend_info else None,
            rental_info=RentalInfo(base_rent=self.rental_info.base_rent) if self.rental_info else None,
            bond_info=BondInfo(interest_rate=self.bond_info.interest_rate) if self.bond_info else None,
        )


class PortfolioPositionSchema(BaseModel):
    asset_definition: AssetDefinitionSchema
    transactions: List[TransactionSchema] = Field(default_factory=list)

    def to_domain(self) -> PortfolioPosition:
        return PortfolioPosition(
            asset_definition=self.asset_definition.to_domain(),
            transactions=tuple(tx.to_domain() for tx in self.transactions),
        )


class PortfolioHistoryRequest(BaseModel):
    positions: List[PortfolioPositionSchema] = Field(default_factory=list)
    liabilities_total: Decimal = Decimal("0")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    range: Optional[TimeRange] = Field(default=None, description="Preset window ending today")

    @model_validator(mode="after")
    def _dates_or_range(self) -> "PortfolioHistoryRequest":
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("start_date and end_date must be supplied together")
        if self.start_date is not None and self.range is not None:
            raise ValueError("supply either explicit dates or a range, not both")
        return self


class PortfolioHistoryDaySchema(BaseModel):
    date: date
    value: Decimal
    change: Decimal
    change_percentage: Decimal


class SkippedPositionSchema(BaseModel):
    asset_id: Optional[str] = None
    reason: str


class PortfolioHistoryResponse(BaseModel):
    start_date: date
    end_date: date
    days: List[PortfolioHistoryDaySchema]
    skipped: List[SkippedPositionSchema] = Field(default_factory=list)


class PositionSummarySchema(BaseModel):
    asset_id: str
    name: str
    quantity: Decimal
    price: Decimal
    value: Decimal
    net_invested: Decimal
