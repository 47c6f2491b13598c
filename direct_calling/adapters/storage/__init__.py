"""Storage adapters."""

from direct_calling.adapters.storage.grant_store import JsonGrantStore

__all__ = ["JsonGrantStore"]
