"""Pydantic schemas for per-asset income."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from networth.models import IncomeAsset

from .portfolio import PortfolioPositionSchema


class IncomeAssetSchema(BaseModel):
    position: PortfolioPositionSchema
    quantity: Optional[Decimal] = Field(
        default=None, description="Shares held; replayed from the position transactions when omitted"
    )
    value: Decimal = Decimal("0")

    def to_domain(self) -> IncomeAsset:
        return IncomeAsset(position=self.position.to_domain(), quantity=self.quantity, value=self.value)


class IncomeResultSchema(BaseModel):
    asset_id: str
    monthly_amount: Decimal
    annual_amount: Decimal
    monthly_breakdown: Dict[int, Decimal]
    cache_hit: bool


class PortfolioIncomeRequest(BaseModel):
    assets: List[IncomeAssetSchema] = Field(default_factory=list)


class PortfolioIncomeResponse(BaseModel):
    monthly_amount: Decimal
    annual_amount: Decimal
    monthly_breakdown: Dict[int, Decimal]
    assets: List[IncomeResultSchema]


class CacheClearResponse(BaseModel):
    removed: int
