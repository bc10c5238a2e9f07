"""Collection validators."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable
from itertools import pairwise
from typing import Any, Generic, TypeVar

from kondition._core import Validator, describe, is_member
from kondition._errors import check_not_negative, check_not_none

E = TypeVar("E")


def _label(predicate: Callable[..., Any]) -> str:
    return getattr(predicate, "__name__", None) or repr(predicate)


def _is_sorted(items: Iterable[Any], key: Callable[[Any], Any] | None, reverse: bool) -> bool:
    keys = map(key, items) if key is not None else iter(items)
    try:
        if reverse:
            return all(a >= b for a, b in pairwise(keys))
        return all(a <= b for a, b in pairwise(keys))
    except TypeError:
        # Elements that cannot be ordered against each other are not sorted
        return False


class CollectionValidator(Validator[Collection[E]], Generic[E]):
    """
    Validator for collections (lists, tuples, sets, dict keys, ...).

    A None value fails every collection predicate. None arguments are
    rejected when the validator is built.

    Example:
        emails = collection_of(str).not_().is_null().all_match(
            string().not_().is_blank().is_simple_email()
        )
        emails.on_invalid(addresses).then_raise(ValueError("Bad email list"))
    """

    def _check(self, name: str, test: Callable[[Collection[E]], Any], *args: Any):
        return self.register_condition(
            lambda c: c is not None and bool(test(c)), describe(name, *args)
        )

    def is_empty(self):
        return self._check("is_empty", lambda c: len(c) == 0)

    def has_size(self, n: int):
        check_not_negative(n, "Size cannot be negative")
        return self._check("has_size", lambda c: len(c) == n, n)

    def has_at_least(self, n: int):
        check_not_negative(n, "Size cannot be negative")
        return self._check("has_at_least", lambda c: len(c) >= n, n)

    def has_at_most(self, n: int):
        check_not_negative(n, "Size cannot be negative")
        return self._check("has_at_most", lambda c: len(c) <= n, n)

    def contains(self, element: E):
        return self._check("contains", lambda c: is_member(element, c), element)

    def contains_all(self, elements: Iterable[E]):
        check_not_none(elements, "Elements cannot be None")
        wanted = tuple(elements)
        return self._check(
            "contains_all", lambda c: all(is_member(e, c) for e in wanted), wanted
        )

    def contains_any(self, elements: Iterable[E]):
        check_not_none(elements, "Elements cannot be None")
        wanted = tuple(elements)
        return self._check(
            "contains_any", lambda c: any(is_member(e, c) for e in wanted), wanted
        )

    def is_subset_of(self, collection: Collection[Any]):
        """Every element is also in collection."""
        check_not_none(collection, "Collection cannot be None")
        return self._check(
            "is_subset_of", lambda c: all(is_member(e, collection) for e in c), collection
        )

    def has_no_nulls(self):
        return self._check("has_no_nulls", lambda c: all(e is not None for e in c))

    def is_sorted(self, key: Callable[[E], Any] | None = None, reverse: bool = False):
        """
        Elements are in non-decreasing order (non-increasing if reverse).

        Collections whose elements cannot be compared are not sorted.
        """
        name = "is_sorted_descending" if reverse else "is_sorted"
        return self._check(name, lambda c: _is_sorted(c, key, reverse))

    def all_match(self, predicate: Callable[[E], Any]):
        """Every element passes predicate (a function or another validator)."""
        check_not_none(predicate, "Predicate cannot be None")
        return self._check(
            f"all_match({_label(predicate)})", lambda c: all(predicate(e) for e in c)
        )

    def any_match(self, predicate: Callable[[E], Any]):
        check_not_none(predicate, "Predicate cannot be None")
        return self._check(
            f"any_match({_label(predicate)})", lambda c: any(predicate(e) for e in c)
        )

    def none_match(self, predicate: Callable[[E], Any]):
        check_not_none(predicate, "Predicate cannot be None")
        return self._check(
            f"none_match({_label(predicate)})",
            lambda c: not any(predicate(e) for e in c),
        )
