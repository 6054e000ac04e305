"""Exception types raised by the net worth engine."""

from __future__ import annotations


class NetWorthError(Exception):
    """Base class for engine errors."""


class PreconditionViolation(NetWorthError, ValueError):
    """Input that the validation layer should have rejected reached the engine."""


class DataUnavailableError(NetWorthError):
    """Prerequisite data (such as a portfolio snapshot) could not be obtained."""


class InvalidPositionError(NetWorthError):
    """A single position is structurally unusable and has to be skipped."""

    def __init__(self, asset_id: str | None, reason: str):
        super().__init__(f"{asset_id or '<unknown>'}: {reason}")
        self.asset_id = asset_id
        self.reason = reason


__all__ = [
    "NetWorthError",
    "PreconditionViolation",
    "DataUnavailableError",
    "InvalidPositionError",
]
