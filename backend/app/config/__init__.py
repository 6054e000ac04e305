"""Configuration package for the net worth engine service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
