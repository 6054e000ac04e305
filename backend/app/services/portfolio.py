"""HTTP client for the portfolio CRUD service that owns positions and liabilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, List

import httpx
from opentelemetry.propagate import inject
from pydantic import TypeAdapter, ValidationError

from app.config import AppSettings, get_settings
from app.schemas.portfolio import PortfolioPositionSchema
from networth.errors import DataUnavailableError
from networth.models import PortfolioPosition

logger = logging.getLogger(__name__)

_POSITIONS = TypeAdapter(List[PortfolioPositionSchema])


@dataclass(frozen=True)
class PortfolioSnapshot:
    positions: List[PortfolioPosition]
    liabilities_total: Decimal


class PortfolioServiceClient:
    """Read-only view of the portfolio service used by the timeline routes."""

    def __init__(self, settings: AppSettings | None = None, *, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings or get_settings()
        self._transport = transport

    async def _request(self, method: str, path: str) -> Any:
        base_url = self._settings.portfolio_service_url.rstrip("/")
        url = f"{base_url}{path}"
        headers: dict[str, str] = {}
        if self._settings.portfolio_service_token:
            headers["X-Internal-Token"] = self._settings.portfolio_service_token
        # Inject current trace context so downstream spans link to this request
        inject(headers)
        timeout = self._settings.portfolio_service_timeout_seconds
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.request(method, url, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Portfolio service unreachable at %s: %s", url, exc)
            raise DataUnavailableError(f"portfolio service unreachable: {exc}") from exc
        if response.status_code >= 400:
            logger.warning("Portfolio service error %s for %s", response.status_code, url)
            raise DataUnavailableError(f"portfolio service returned {response.status_code} for {path}")
        try:
            return response.json()
        except ValueError as exc:
            raise DataUnavailableError(f"portfolio service sent a non-JSON body for {path}") from exc

    async def fetch_positions(self) -> List[PortfolioPosition]:
        payload = await self._request("GET", "/positions")
        if isinstance(payload, dict):
            payload = payload.get("positions", [])
        try:
            schemas = _POSITIONS.validate_python(payload)
        except ValidationError as exc:
            raise DataUnavailableError(f"portfolio service sent malformed positions: {exc}") from exc
        return [schema.to_domain() for schema in schemas]

    async def fetch_liabilities_total(self) -> Decimal:
        payload = await self._request("GET", "/liabilities/total")
        raw = payload.get("total") if isinstance(payload, dict) else payload
        try:
            total = Decimal(str(raw))
        except (InvalidOperation, ValueError) as exc:
            raise DataUnavailableError(f"portfolio service sent an invalid liabilities total: {raw!r}") from exc
        if not total.is_finite():
            raise DataUnavailableError(f"portfolio service sent an invalid liabilities total: {raw!r}")
        return total

    async def fetch_snapshot(self) -> PortfolioSnapshot:
        positions = await self.fetch_positions()
        liabilities_total = await self.fetch_liabilities_total()
        logger.info(
            "Loaded portfolio snapshot with %d positions and liabilities %s",
            len(positions),
            liabilities_total,
        )
        return PortfolioSnapshot(positions=positions, liabilities_total=liabilities_total)


__all__ = ["PortfolioServiceClient", "PortfolioSnapshot"]
