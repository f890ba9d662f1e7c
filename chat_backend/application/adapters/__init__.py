"""Adapters implementing the application capability interfaces."""

from .session_store_adapter import SessionStoreAdapter

__all__ = ["SessionStoreAdapter"]
