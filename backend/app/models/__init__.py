"""Database model exports."""

from .cache import KVCacheEntry

__all__ = ["KVCacheEntry"]
