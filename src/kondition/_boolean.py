"""Boolean validator."""

from __future__ import annotations

from kondition._core import Validator


class BooleanValidator(Validator[bool]):
    """Validator for booleans; only the actual True/False objects pass."""

    def is_true(self):
        return self.register_condition(lambda b: b is True, "is_true")

    def is_false(self):
        return self.register_condition(lambda b: b is False, "is_false")
