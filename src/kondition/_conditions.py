"""
Condition tree produced by a validator chain.

A collapsed validator is a tree of these nodes:
    Predicate  - a single leaf test
    AllOf      - every child must pass (conditions registered between or_() calls)
    AnyOf      - at least one child must pass (or_() boundaries)
    Negated    - inverts its child (not_() before a registration)

All nodes are immutable, so a tree can be evaluated from any number of
threads at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic

from kondition._errors import EmptyChainError
from kondition._types import T


class Condition(ABC, Generic[T]):
    """
    Base class for all nodes of a condition tree.

    Conditions are plain callables: condition(value) -> bool.
    """

    @abstractmethod
    def evaluate(self, value: T) -> bool:
        """Evaluate this condition against a value."""
        ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    def __call__(self, value: T) -> bool:
        """Shorthand for evaluate()."""
        return self.evaluate(value)


class Predicate(Condition[T]):
    """
    A leaf condition wrapping a single-argument callable.

    Example:
        is_positive: Predicate[int] = Predicate(lambda x: x > 0, "is_positive")
        is_positive(5)  # True
    """

    def __init__(self, fn: Callable[[T], Any], name: str | None = None):
        self.fn = fn
        self._name = name or getattr(fn, "__name__", "predicate")

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, value: T) -> bool:
        return bool(self.fn(value))

    def __repr__(self) -> str:
        return f"Predicate({self._name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Predicate):
            return NotImplemented
        return self.fn == other.fn and self._name == other._name

    def __hash__(self) -> int:
        return hash((id(self.fn), self._name))


@dataclass(frozen=True)
class AllOf(Condition[T]):
    """Passes if every child passes; stops at the first failure."""

    children: tuple[Condition[T], ...]

    @property
    def name(self) -> str:
        return "AND"

    def evaluate(self, value: T) -> bool:
        return all(child.evaluate(value) for child in self.children)


@dataclass(frozen=True)
class AnyOf(Condition[T]):
    """Passes if any child passes; stops at the first success."""

    children: tuple[Condition[T], ...]

    @property
    def name(self) -> str:
        return "OR"

    def evaluate(self, value: T) -> bool:
        return any(child.evaluate(value) for child in self.children)


@dataclass(frozen=True)
class Negated(Condition[T]):
    """Inverts the result of its child."""

    inner: Condition[T]

    @property
    def name(self) -> str:
        return "NOT"

    def evaluate(self, value: T) -> bool:
        return not self.inner.evaluate(value)


def negate(condition: Condition[T]) -> Condition[T]:
    """Negate a condition, unwrapping an existing negation instead of stacking."""
    if isinstance(condition, Negated):
        return condition.inner
    return Negated(condition)


def accumulate(conditions: Sequence[Condition[T]]) -> Condition[T]:
    """AND together conditions in registration order."""
    if not conditions:
        raise EmptyChainError("Cannot accumulate an empty list of conditions")
    if len(conditions) == 1:
        return conditions[0]
    children: list[Condition[T]] = []
    for condition in conditions:
        # A closed bracket of ANDs joins the surrounding AND
        if isinstance(condition, AllOf):
            children.extend(condition.children)
        else:
            children.append(condition)
    return AllOf(tuple(children))


def either(main: Condition[T] | None, other: Condition[T]) -> Condition[T]:
    """OR a new condition onto the running main condition (if any)."""
    if main is None:
        return other
    left = main.children if isinstance(main, AnyOf) else (main,)
    right = other.children if isinstance(other, AnyOf) else (other,)
    return AnyOf(left + right)


def is_composite(condition: Condition) -> bool:
    """Check if a condition has children."""
    return isinstance(condition, (AllOf, AnyOf, Negated))


def children_of(condition: Condition[T]) -> tuple[Condition[T], ...]:
    if isinstance(condition, (AllOf, AnyOf)):
        return condition.children
    if isinstance(condition, Negated):
        return (condition.inner,)
    return ()
