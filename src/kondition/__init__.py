"""
Kondition - Fluent, Immutable Validator Chains

Build a boolean test over a value by chaining conditions left to right,
then evaluate it, use it as a predicate, or react when a value fails it.

Chaining:
    (default) = AND; and_() may be added for readability
    or_()     = OR, binds looser than AND: a.b.or_().c == (a and b) or c
    not_()    = negates the next condition (or bracket)
    open_bracket() / close_bracket() = grouping; trailing brackets close themselves

Example:
    from kondition import string, collection_of

    name = string().not_().is_null().not_().is_blank().has_at_most_chars(64)
    name.test("Alice")  # True

    year_or_empty = string().is_empty().or_().is_int(lambda y: 1900 <= y <= 2100)

    emails = collection_of(str).not_().is_empty().all_match(
        string().is_simple_email()
    )
    emails.on_invalid(addresses).then_raise(ValueError("Invalid email list"))

    valid_names = list(filter(name, candidates))

Every chain call returns a new validator, so built validators can be stored
in module globals, reused and shared between threads.
"""

from __future__ import annotations

__version__ = "0.1.0"
__all__ = [
    # Core
    "Validator",
    "ObjectValidator",
    "Condition",
    "Predicate",
    "AllOf",
    "AnyOf",
    "Negated",
    # Factories
    "string",
    "integer",
    "int_",
    "code_point",
    "long_int",
    "decimal",
    "boolean",
    "date_",
    "collection",
    "collection_of",
    "any_",
    "a",
    # Leaf validators
    "StringValidator",
    "NumberValidator",
    "IntegerValidator",
    "IntValidator",
    "DecimalValidator",
    "BooleanValidator",
    "DateValidator",
    "CollectionValidator",
    # Parsing
    "parse_integer",
    "parse_iso_date",
    "IsoDate",
    # Outcome
    "InvalidOutcome",
    # Errors
    "KonditionError",
    "ChainStateError",
    "UnmatchedBracketError",
    "EmptyChainError",
    "PreconditionError",
    # Tracing
    "TraceHook",
    "TraceConfig",
    "use_tracing",
    "PrintHook",
    "LoggingHook",
    "OpenTelemetryHook",
    # Explanation
    "explain",
]

from kondition._boolean import BooleanValidator
from kondition._collections import CollectionValidator
from kondition._conditions import AllOf, AnyOf, Condition, Negated, Predicate
from kondition._core import ObjectValidator, Validator
from kondition._errors import (
    ChainStateError,
    EmptyChainError,
    KonditionError,
    PreconditionError,
    UnmatchedBracketError,
)
from kondition._explain import explain
from kondition._factories import (
    a,
    any_,
    boolean,
    code_point,
    collection,
    collection_of,
    date_,
    decimal,
    int_,
    integer,
    long_int,
    string,
)
from kondition._numbers import (
    DecimalValidator,
    IntegerValidator,
    IntValidator,
    NumberValidator,
)
from kondition._outcome import InvalidOutcome
from kondition._strings import StringValidator, parse_integer
from kondition._temporal import DateValidator, IsoDate, parse_iso_date
from kondition._tracing import (
    LoggingHook,
    OpenTelemetryHook,
    PrintHook,
    TraceConfig,
    TraceHook,
    use_tracing,
)
