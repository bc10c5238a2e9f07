"""String validators and the text parsing they rely on."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from kondition._core import Validator, describe
from kondition._errors import check_not_negative, check_not_none
from kondition._temporal import parse_iso_date

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1

_INTEGER = re.compile(r"-?[0-9]+")
_COMMA_SEPARATED_INTEGERS = re.compile(r"-?[0-9]+(?:,-?[0-9]+)*")
_SIMPLE_EMAIL = re.compile(r"[^@\s]+@[^@\s.]+(?:\.[^@\s.]+)+")


def parse_integer(text: str, low: int | None = None, high: int | None = None) -> int | None:
    """
    Parse an optionally negative decimal integer, returning None if the text is
    not one or the value falls outside [low, high].

    Any number of leading zeros is allowed, with or without the sign.
    """
    if not isinstance(text, str) or _INTEGER.fullmatch(text) is None:
        return None

    negative = text.startswith("-")
    digits = text.lstrip("-").lstrip("0") or "0"
    if low is not None and high is not None:
        # More digits than either bound cannot be in range
        if len(digits) > len(str(max(abs(low), abs(high)))):
            return None

    value = -int(digits) if negative else int(digits)
    if low is not None and value < low:
        return None
    if high is not None and value > high:
        return None
    return value


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


class StringValidator(Validator[str]):
    """
    Validator for strings. A None value fails every string predicate.

    Example:
        names = string().not_().is_blank().has_at_most_chars(64)
        ids = string().is_int(lambda i: i > 0)
        emails = string().not_().is_null().is_simple_email()
    """

    def is_empty(self):
        """Zero characters."""
        return self.register_condition(lambda s: _is_str(s) and not s, "is_empty")

    def is_blank(self):
        """Only whitespace; empty strings are blank too."""
        return self.register_condition(
            lambda s: _is_str(s) and (not s or s.isspace()), "is_blank"
        )

    def has_at_most_chars(self, n: int):
        check_not_negative(n, "Character count cannot be negative")
        return self.register_condition(
            lambda s: _is_str(s) and len(s) <= n, describe("has_at_most_chars", n)
        )

    def has_at_least_chars(self, n: int):
        check_not_negative(n, "Character count cannot be negative")
        return self.register_condition(
            lambda s: _is_str(s) and len(s) >= n, describe("has_at_least_chars", n)
        )

    def has_chars(self, n: int):
        check_not_negative(n, "Character count cannot be negative")
        return self.register_condition(
            lambda s: _is_str(s) and len(s) == n, describe("has_chars", n)
        )

    def is_simple_email(self):
        """
        Looks like an email: local part, '@', and a domain with at least one dot.

        This is a shape check only, not RFC 5322 validation.
        """
        return self.register_condition(
            lambda s: _is_str(s) and _SIMPLE_EMAIL.fullmatch(s) is not None,
            "is_simple_email",
        )

    def is_comma_separated_list_of_integers(self):
        """e.g. "1,2,-3"; whitespace anywhere fails."""
        return self.register_condition(
            lambda s: _is_str(s) and _COMMA_SEPARATED_INTEGERS.fullmatch(s) is not None,
            "is_comma_separated_list_of_integers",
        )

    def is_integer(self):
        """Any decimal integer, no range limit."""
        return self.register_condition(
            lambda s: _is_str(s) and _INTEGER.fullmatch(s) is not None, "is_integer"
        )

    def is_int(self, predicate: Callable[[int], Any] | None = None):
        """
        A decimal integer within the 32-bit signed range.

        Args:
            predicate: Optional extra test the parsed value must pass
        """
        return self._register_ranged("is_int", INT_MIN, INT_MAX, predicate)

    def is_long(self, predicate: Callable[[int], Any] | None = None):
        """
        A decimal integer within the 64-bit signed range.

        Args:
            predicate: Optional extra test the parsed value must pass
        """
        return self._register_ranged("is_long", LONG_MIN, LONG_MAX, predicate)

    def _register_ranged(
        self, name: str, low: int, high: int, predicate: Callable[[int], Any] | None
    ):
        if predicate is None:
            return self.register_condition(
                lambda s: parse_integer(s, low, high) is not None, name
            )

        def check(s: str) -> bool:
            value = parse_integer(s, low, high)
            return value is not None and bool(predicate(value))

        label = getattr(predicate, "__name__", None) or repr(predicate)
        return self.register_condition(check, f"{name}({label})")

    def is_date(self):
        """Strict ISO date: YYYY-MM-DD, or +YYYYY-MM-DD for years past 9999."""
        return self.register_condition(
            lambda s: parse_iso_date(s) is not None, "is_date"
        )

    def matches(self, pattern: str | re.Pattern[str]):
        """The whole string matches a regular expression."""
        check_not_none(pattern, "Pattern cannot be None")
        compiled = re.compile(pattern)
        return self.register_condition(
            lambda s: _is_str(s) and compiled.fullmatch(s) is not None,
            describe("matches", compiled.pattern),
        )

    def starts_with(self, prefix: str):
        check_not_none(prefix, "Prefix cannot be None")
        return self.register_condition(
            lambda s: _is_str(s) and s.startswith(prefix), describe("starts_with", prefix)
        )

    def ends_with(self, suffix: str):
        check_not_none(suffix, "Suffix cannot be None")
        return self.register_condition(
            lambda s: _is_str(s) and s.endswith(suffix), describe("ends_with", suffix)
        )

    def contains(self, substring: str):
        check_not_none(substring, "Substring cannot be None")
        return self.register_condition(
            lambda s: _is_str(s) and substring in s, describe("contains", substring)
        )
