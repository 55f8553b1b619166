"""Errors surfaced by the admin event store."""

from __future__ import annotations


class AdminEventStoreError(RuntimeError):
    """Base class for failures while reading admin events."""


class StorageError(AdminEventStoreError):
    """The underlying database read failed."""


class ConversionError(AdminEventStoreError):
    """A stored value could not be decoded into its domain representation."""


class ValidationError(AdminEventStoreError):
    """A reconstructed object was missing a structurally required field."""
