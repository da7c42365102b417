"""Errors raised while validating and sequencing stops."""

from __future__ import annotations


class InvalidStopError(ValueError):
    """A stop record cannot be sequenced (missing id, or missing/non-numeric/NaN coordinate)."""


class EmptyInputError(ValueError):
    """No stops were supplied, so there is no starting stop to fix."""
