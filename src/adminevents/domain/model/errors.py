"""Errors raised by domain builders."""

from __future__ import annotations


class InvalidStateError(ValueError):
    """Raised when a builder is finalised without a required field."""

    @classmethod
    def missing_field(cls, name: str) -> InvalidStateError:
        return cls(f"unable to build, missing field: `{name}`")
