"""Synchronous store adapters."""

from .remote import RemoteStore


__all__ = ["RemoteStore"]
