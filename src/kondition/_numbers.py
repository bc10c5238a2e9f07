"""Numeric validators."""

from __future__ import annotations

import unicodedata
from decimal import Decimal

from kondition._core import Validator, describe
from kondition._errors import PreconditionError, check_not_negative, check_not_none
from kondition._strings import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN
from kondition._types import N


def _is_number(n: object) -> bool:
    """Not None and not NaN (quiet or signaling)."""
    if n is None:
        return False
    if isinstance(n, Decimal):
        return not n.is_nan()
    return n == n


class NumberValidator(Validator[N]):
    """Comparisons shared by every numeric validator. None and NaN fail all of them."""

    def _compare(self, name: str, test, *args):
        return self.register_condition(
            lambda n: _is_number(n) and test(n), describe(name, *args)
        )

    def is_positive(self):
        return self._compare("is_positive", lambda n: n > 0)

    def is_negative(self):
        return self._compare("is_negative", lambda n: n < 0)

    def is_zero(self):
        return self._compare("is_zero", lambda n: n == 0)

    def is_more_than(self, bound: N):
        check_not_none(bound, "Bound cannot be None")
        return self._compare("is_more_than", lambda n: n > bound, bound)

    def is_less_than(self, bound: N):
        check_not_none(bound, "Bound cannot be None")
        return self._compare("is_less_than", lambda n: n < bound, bound)

    def is_at_least(self, bound: N):
        check_not_none(bound, "Bound cannot be None")
        return self._compare("is_at_least", lambda n: n >= bound, bound)

    def is_at_most(self, bound: N):
        check_not_none(bound, "Bound cannot be None")
        return self._compare("is_at_most", lambda n: n <= bound, bound)

    def is_between(self, low: N, high: N):
        """Inclusive on both ends."""
        check_not_none(low, "Lower bound cannot be None")
        check_not_none(high, "Upper bound cannot be None")
        if low > high:
            raise PreconditionError(f"Lower bound {low} is above upper bound {high}")
        return self._compare("is_between", lambda n: low <= n <= high, low, high)


class IntegerValidator(NumberValidator[int]):
    """
    Validator for integers.

    Python integers are unbounded; fits_int() and fits_long() check the
    32-bit and 64-bit signed ranges explicitly.
    """

    def is_even(self):
        return self._compare("is_even", lambda n: n % 2 == 0)

    def is_odd(self):
        return self._compare("is_odd", lambda n: n % 2 != 0)

    def is_day_of_month(self):
        """1-31."""
        return self._compare("is_day_of_month", lambda n: 1 <= n <= 31)

    def is_month_of_year(self):
        """1-12."""
        return self._compare("is_month_of_year", lambda n: 1 <= n <= 12)

    def is_hour_of_day(self):
        """0-23."""
        return self._compare("is_hour_of_day", lambda n: 0 <= n <= 23)

    def fits_int(self):
        return self._compare("fits_int", lambda n: INT_MIN <= n <= INT_MAX)

    def fits_long(self):
        return self._compare("fits_long", lambda n: LONG_MIN <= n <= LONG_MAX)


def _char_of(code_point: int) -> str | None:
    if 0 <= code_point <= 0x10FFFF:
        return chr(code_point)
    return None


class IntValidator(IntegerValidator):
    """
    Validator for ints, with extra checks for treating them as code points.

    Example:
        all(map(code_point().is_digit().or_().is_char(","), map(ord, "1,2,3")))
    """

    def _char_test(self, name: str, test, *args):
        def check(n: int) -> bool:
            char = _char_of(n) if n is not None else None
            return char is not None and test(char)

        return self.register_condition(check, describe(name, *args))

    def is_digit(self):
        """ASCII digit 0-9."""
        return self._char_test("is_digit", lambda c: "0" <= c <= "9")

    def is_letter(self):
        return self._char_test("is_letter", lambda c: unicodedata.category(c).startswith("L"))

    def is_whitespace(self):
        return self._char_test("is_whitespace", str.isspace)

    def is_char(self, char: str):
        check_not_none(char, "Character cannot be None")
        if len(char) != 1:
            raise PreconditionError(f"Expected a single character, got {char!r}")
        return self._compare("is_char", lambda n: n == ord(char), char)


class DecimalValidator(NumberValidator[Decimal]):
    """Validator for decimal.Decimal."""

    def is_whole(self):
        """No fractional part, e.g. Decimal("3.00")."""
        return self._compare(
            "is_whole", lambda d: d.is_finite() and d == d.to_integral_value()
        )

    def has_at_most_decimal_places(self, places: int):
        """Scale (digits after the point, as written) is at most places."""
        check_not_negative(places, "Decimal places cannot be negative")

        def check(d: Decimal) -> bool:
            if not d.is_finite():
                return False
            exponent = d.as_tuple().exponent
            return -exponent <= places

        return self._compare("has_at_most_decimal_places", check, places)
