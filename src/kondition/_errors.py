"""Exceptions raised for misuse of a validator chain."""

from __future__ import annotations

from typing import Any


class KonditionError(Exception):
    """Base class for all errors raised by kondition."""


class ChainStateError(KonditionError, RuntimeError):
    """A chain operation was called out of sequence, e.g. or_() before any condition."""


class UnmatchedBracketError(ChainStateError):
    """close_bracket() was called without a matching open_bracket()."""


class EmptyChainError(ChainStateError):
    """Evaluation reached a chain or bracket with no registered condition."""


class PreconditionError(KonditionError, ValueError):
    """A required argument was None or otherwise unusable."""


def check_not_none(value: Any, message: str) -> None:
    """Raise PreconditionError with the given message if value is None."""
    if value is None:
        raise PreconditionError(message)


def check_not_negative(value: int, message: str) -> None:
    check_not_none(value, message)
    if value < 0:
        raise PreconditionError(message)
