"""Shared type variables."""

from __future__ import annotations

from decimal import Decimal
from typing import TypeVar

T = TypeVar("T")

N = TypeVar("N", int, float, Decimal)
"""Numeric value type for comparison predicates."""
