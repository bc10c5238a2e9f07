"""Validator chain: the immutable node every fluent call returns."""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass, replace
from typing import Any, Generic

from kondition._conditions import (
    Condition,
    Predicate,
    accumulate,
    either,
    negate,
)
from kondition._errors import (
    ChainStateError,
    EmptyChainError,
    UnmatchedBracketError,
    check_not_none,
)
from kondition._outcome import InvalidOutcome
from kondition._tracing import traced_evaluate
from kondition._types import T


def describe(name: str, *args: Any) -> str:
    """Display name for a parameterized predicate, e.g. has_chars(5)."""
    if not args:
        return name
    return f"{name}({', '.join(map(repr, args))})"



def is_member(value: Any, container: Any) -> bool:
    """value in container; an unhashable value is simply not in a set or dict."""
    try:
        return value in container
    except TypeError:
        return False

@dataclass(frozen=True, repr=False)
class Validator(Generic[T]):
    """
    Base class for all validators.

    A validator is built by chaining conditions left to right. Conditions
    are ANDed together by default; or_() starts a new alternative, so
    AND binds tighter than OR:

        a.b.or_().c   ==   (a and b) or c

    Brackets group explicitly:

        a.open_bracket().b.or_().c.close_bracket()   ==   a and (b or c)

    not_() negates the next registered condition, which may be a whole
    bracket (the negation is applied when the bracket closes):

        a.not_().open_bracket().b.or_().c.close_bracket()   ==   a and not (b or c)

    Every call returns a new validator; existing validators are never
    modified, so a built validator can be stored, reused and shared between
    threads freely.

    Attributes:
        outer: Validator active before the innermost open bracket (None at the root)
        main_condition: Alternatives folded by previous or_() calls
        pending: Conditions registered since the last or_(), ANDed together
        negate_next: Whether the next registered condition gets negated
    """

    outer: Validator[T] | None = None
    main_condition: Condition[T] | None = None
    pending: tuple[Condition[T], ...] = ()
    negate_next: bool = False

    # -------------------------------------------------------------------------
    # Chain operations
    # -------------------------------------------------------------------------

    def register_condition(self, predicate: Callable[[T], Any], name: str | None = None):
        """
        Add a condition, negating it if not_() was called right before.

        Every leaf predicate of every validator goes through this method.
        """
        check_not_none(predicate, "Predicate cannot be None")
        condition = (
            predicate if isinstance(predicate, Condition) else Predicate(predicate, name)
        )
        if self.negate_next:
            condition = negate(condition)
        return replace(self, pending=self.pending + (condition,), negate_next=False)

    def and_(self):
        """Does nothing; conditions are ANDed by default. Only useful for readability."""
        return self

    def or_(self):
        """
        Fold every condition since the last or_() (ANDed) into the running
        alternative (ORed).

        Raises:
            ChainStateError: if no condition was registered since the start,
                the last or_() or the last open_bracket()
        """
        if not self.pending:
            raise ChainStateError(
                "There must be at least a single condition before every or_()"
            )
        return replace(
            self, main_condition=self._main_condition(), pending=(), negate_next=False
        )

    def not_(self):
        """Negate the next registered condition (including a bracket). Calling twice cancels out."""
        return replace(self, negate_next=not self.negate_next)

    def open_bracket(self):
        """
        Start a group, so that a and (b or c) can be written as

            a.open_bracket().b.or_().c.close_bracket()

        A pending not_() stays with the current validator and applies to the
        whole group once it is closed.
        """
        return replace(
            self, outer=self, main_condition=None, pending=(), negate_next=False
        )

    def close_bracket(self):
        """
        End the innermost group and register it as a single condition.

        Can be omitted before test(); open brackets are closed automatically.

        Raises:
            UnmatchedBracketError: if there is no open bracket
            EmptyChainError: if the bracket contains no condition
        """
        if self.outer is None:
            raise UnmatchedBracketError(
                "You must use open_bracket() before using close_bracket()"
            )
        return self.outer.register_condition(self.collapse())

    def collapse(self) -> Condition[T]:
        """
        Build the condition tree for this level of the chain.

        Raises:
            EmptyChainError: if no condition was registered at this level
        """
        condition = self._main_condition() if self.pending else self.main_condition
        if condition is None:
            raise EmptyChainError(
                "You must have at least one condition total, "
                "or between open_bracket() and close_bracket()"
            )
        return condition

    def _main_condition(self) -> Condition[T]:
        return either(self.main_condition, accumulate(self.pending))

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def test(self, value: T) -> bool:
        """
        Close all open brackets and evaluate the chain for a value.

        Raises:
            EmptyChainError: if no condition was registered at all, or in a bracket
        """
        root = self
        while root.outer is not None:
            root = root.close_bracket()
        return traced_evaluate(type(self).__name__, root.collapse(), value)

    def is_invalid(self, value: T) -> bool:
        """Inverse of test()."""
        return not self.test(value)

    def __call__(self, value: T) -> bool:
        """Shorthand for test()."""
        return self.test(value)

    def as_predicate(self) -> Callable[[T], bool]:
        """This validator as a plain single-argument function."""
        return self.test

    def on_invalid(self, value: T) -> InvalidOutcome[T]:
        """
        Pair a value with this validator to react if it is invalid.

        Example:
            string().not_().is_blank().on_invalid(name).then_raise(ValueError)
        """
        return InvalidOutcome(self, value)

    # -------------------------------------------------------------------------
    # Predicates available for every type
    # -------------------------------------------------------------------------

    def is_equal(self, other: T):
        """Value equals other."""
        return self.register_condition(lambda v: v == other, describe("is_equal", other))

    def passes(self, predicate: Callable[[T], Any]):
        """
        Custom predicate; another validator works too:

            string().not_().passes(string().is_empty().or_().is_blank())
        """
        check_not_none(predicate, "Predicate cannot be None")
        label = getattr(predicate, "__name__", None) or repr(predicate)
        return self.register_condition(predicate, f"passes({label})")

    def is_null(self):
        """Value is None."""
        return self.register_condition(lambda v: v is None, "is_null")

    def is_contained_in(self, collection: Collection[Any]):
        """
        Value is a member of collection.

        Raises:
            PreconditionError: if collection is None
        """
        check_not_none(collection, "Collection cannot be None")
        return self.register_condition(
            lambda v: is_member(v, collection), describe("is_contained_in", collection)
        )

    def is_one_of(self, *values: T):
        """Value equals any of the given values."""
        return self.is_contained_in(values)

    def is_instance_of(self, cls: type | tuple[type, ...]):
        """Value is an instance of cls."""
        check_not_none(cls, "Class cannot be None")
        return self.register_condition(
            lambda v: isinstance(v, cls), describe("is_instance_of", cls)
        )

    def __repr__(self) -> str:
        depth = 0
        node = self.outer
        while node is not None:
            depth += 1
            node = node.outer
        parts = [f"pending={len(self.pending)}"]
        if self.main_condition is not None:
            parts.append(f"main={self.main_condition.name}")
        if self.negate_next:
            parts.append("negate_next")
        if depth:
            parts.append(f"brackets={depth}")
        return f"{type(self).__name__}({', '.join(parts)})"


class ObjectValidator(Validator[T]):
    """
    Validator for arbitrary objects.

    Do not use if a more specific validator exists for the type.
    """
