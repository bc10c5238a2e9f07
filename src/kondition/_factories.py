"""Entry points: one factory per supported value type."""

from __future__ import annotations

from typing import Any, TypeVar

from kondition._boolean import BooleanValidator
from kondition._collections import CollectionValidator
from kondition._core import ObjectValidator
from kondition._numbers import DecimalValidator, IntegerValidator, IntValidator
from kondition._strings import StringValidator
from kondition._temporal import DateValidator

E = TypeVar("E")


def string() -> StringValidator:
    return StringValidator()


def integer() -> IntegerValidator:
    """Validator for any int (or None, see is_null())."""
    return IntegerValidator()


def int_() -> IntValidator:
    """Same as code_point()."""
    return IntValidator()


def code_point() -> IntValidator:
    """Same as int_(), but reads better over code points, e.g. map(ord, text)."""
    return IntValidator()


def long_int() -> IntegerValidator:
    """
    Same as integer().

    Python has a single unbounded int type; use fits_long() to check the
    64-bit signed range.
    """
    return IntegerValidator()


def decimal() -> DecimalValidator:
    return DecimalValidator()


def boolean() -> BooleanValidator:
    return BooleanValidator()


def date_() -> DateValidator:
    return DateValidator()


def collection() -> CollectionValidator[Any]:
    return CollectionValidator()


def collection_of(cls: type[E]) -> CollectionValidator[E]:
    """Typed collection validator; cls is only used for type inference."""
    return CollectionValidator()


def any_() -> ObjectValidator[Any]:
    """
    Validator for arbitrary objects.

    Do not use if a more specific validator exists for the type.
    """
    return ObjectValidator()


def a(cls: type[E]) -> ObjectValidator[E]:
    """Typed any_(); cls is only used for type inference."""
    return ObjectValidator()
