"""Reactions to a value that fails a validator."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic

from kondition._errors import check_not_none
from kondition._types import T

if TYPE_CHECKING:
    from kondition._core import Validator


class InvalidOutcome(Generic[T]):
    """
    Pairs a validator with a value and runs a reaction only if the value is invalid.

    Obtained from Validator.on_invalid(value). Each then_*() call evaluates the
    validator once; nothing happens if the value is valid.

    Example:
        string().not_().is_blank().on_invalid(name).then_raise(
            ValueError("Name cannot be blank")
        )

        integer().is_day_of_month().on_invalid(day).then_accept(rejected.append)
    """

    def __init__(self, validator: Validator[T], value: T):
        self.validator = validator
        self.value = value

    def then_run(self, action: Callable[[], Any]) -> None:
        """Call action() if the value is invalid."""
        check_not_none(action, "Action cannot be None")
        if self.validator.is_invalid(self.value):
            action()

    def then_accept(self, consumer: Callable[[T], Any]) -> None:
        """Call consumer(value) if the value is invalid."""
        check_not_none(consumer, "Consumer cannot be None")
        if self.validator.is_invalid(self.value):
            consumer(self.value)

    def then_raise(
        self, error: BaseException | type[BaseException] | Callable[[], BaseException]
    ) -> None:
        """
        Raise if the value is invalid.

        Args:
            error: An exception instance, an exception class, or a zero-argument
                factory returning an exception
        """
        check_not_none(error, "Error cannot be None")
        if self.validator.is_invalid(self.value):
            if isinstance(error, BaseException):
                raise error
            raise error()

    def then_raise_from(self, factory: Callable[[T], BaseException]) -> None:
        """Raise factory(value) if the value is invalid."""
        check_not_none(factory, "Error factory cannot be None")
        if self.validator.is_invalid(self.value):
            raise factory(self.value)

    def __repr__(self) -> str:
        return f"InvalidOutcome({self.validator!r}, {self.value!r})"
