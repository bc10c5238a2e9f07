"""
Tests for the validator chain: and_/or_/not_, brackets, evaluation and errors.

Run with: pytest tests/test_chain.py -v
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import FrozenInstanceError
from itertools import product

import pytest

from kondition import (
    AnyOf,
    ChainStateError,
    EmptyChainError,
    Negated,
    ObjectValidator,
    PreconditionError,
    StringValidator,
    UnmatchedBracketError,
    any_,
    integer,
    string,
)

# =============================================================================
# Test Fixtures
# =============================================================================


def is_a(s):
    return "a" in s


def is_b(s):
    return "b" in s


def is_c(s):
    return "c" in s


# Every combination of the three letters being present or absent
VALUES = [
    "".join(letter for letter, present in zip("abc", flags) if present)
    for flags in product([False, True], repeat=3)
]


def chain():
    return any_()


# =============================================================================
# Precedence
# =============================================================================


class TestPrecedence:
    """AND binds tighter than OR, using only left-to-right calls."""

    @pytest.mark.parametrize("value", VALUES)
    def test_and(self, value):
        v = chain().passes(is_a).and_().passes(is_b)
        assert v.test(value) == (is_a(value) and is_b(value))

    @pytest.mark.parametrize("value", VALUES)
    def test_implicit_and(self, value):
        v = chain().passes(is_a).passes(is_b)
        assert v.test(value) == (is_a(value) and is_b(value))

    @pytest.mark.parametrize("value", VALUES)
    def test_or(self, value):
        v = chain().passes(is_a).or_().passes(is_b)
        assert v.test(value) == (is_a(value) or is_b(value))

    @pytest.mark.parametrize("value", VALUES)
    def test_and_then_or(self, value):
        v = chain().passes(is_a).and_().passes(is_b).or_().passes(is_c)
        assert v.test(value) == ((is_a(value) and is_b(value)) or is_c(value))

    @pytest.mark.parametrize("value", VALUES)
    def test_or_then_and(self, value):
        v = chain().passes(is_a).or_().passes(is_b).passes(is_c)
        assert v.test(value) == (is_a(value) or (is_b(value) and is_c(value)))

    @pytest.mark.parametrize("value", VALUES)
    def test_multiple_ors(self, value):
        v = chain().passes(is_a).or_().passes(is_b).or_().passes(is_c)
        assert v.test(value) == (is_a(value) or is_b(value) or is_c(value))

    def test_and_returns_same_validator(self):
        v = chain().passes(is_a)
        assert v.and_() is v


# =============================================================================
# Negation
# =============================================================================


class TestNegation:
    @pytest.mark.parametrize("value", VALUES)
    def test_not(self, value):
        assert chain().not_().passes(is_a).test(value) == (not is_a(value))

    @pytest.mark.parametrize("value", VALUES)
    def test_double_not_cancels_out(self, value):
        assert chain().not_().not_().passes(is_a).test(value) == is_a(value)

    @pytest.mark.parametrize("value", VALUES)
    def test_not_only_applies_to_next_condition(self, value):
        v = chain().not_().passes(is_a).passes(is_b)
        assert v.test(value) == ((not is_a(value)) and is_b(value))

    def test_not_is_reset_by_or(self):
        v = chain().passes(is_a).not_().or_().passes(is_b)
        assert v.test("b") is True
        assert v.test("") is False

    def test_not_of_not_registered_condition_unwraps(self):
        inner = string().not_().is_empty().collapse()
        assert isinstance(inner, Negated)
        outer = string().not_().passes(inner).collapse()
        assert not isinstance(outer, Negated)
        assert outer.evaluate("") is True
        assert outer.evaluate("x") is False


# =============================================================================
# Brackets
# =============================================================================


class TestBrackets:
    @pytest.mark.parametrize("value", VALUES)
    def test_bracket_overrides_precedence(self, value):
        v = chain().passes(is_a).open_bracket().passes(is_b).or_().passes(is_c).close_bracket()
        assert v.test(value) == (is_a(value) and (is_b(value) or is_c(value)))

    @pytest.mark.parametrize("value", VALUES)
    def test_not_before_bracket_negates_the_group(self, value):
        v = (
            chain()
            .passes(is_c)
            .not_()
            .open_bracket()
            .passes(is_a)
            .or_()
            .passes(is_b)
            .close_bracket()
        )
        assert v.test(value) == (is_c(value) and not (is_a(value) or is_b(value)))

    def test_not_before_bracket_does_not_leak_into_bracket(self):
        opened = chain().not_().open_bracket()
        assert opened.negate_next is False
        assert opened.outer.negate_next is True

        # First condition inside the bracket is not negated by itself
        v = opened.passes(is_a).close_bracket()
        assert v.collapse().evaluate("a") is False
        assert v.collapse().evaluate("") is True

    @pytest.mark.parametrize("value", VALUES)
    def test_not_before_bracket_with_implicit_close(self, value):
        v = chain().passes(is_c).not_().open_bracket().passes(is_a).or_().passes(is_b)
        assert v.test(value) == (is_c(value) and not (is_a(value) or is_b(value)))

    @pytest.mark.parametrize("value", VALUES)
    def test_nested_brackets(self, value):
        # a or (b and (not c or a))
        v = (
            chain()
            .passes(is_a)
            .or_()
            .open_bracket()
            .passes(is_b)
            .open_bracket()
            .not_()
            .passes(is_c)
            .or_()
            .passes(is_a)
            .close_bracket()
            .close_bracket()
        )
        expected = is_a(value) or (is_b(value) and ((not is_c(value)) or is_a(value)))
        assert v.test(value) == expected

    @pytest.mark.parametrize("value", VALUES)
    def test_implicit_close_of_all_brackets(self, value):
        explicit = (
            chain()
            .passes(is_a)
            .open_bracket()
            .passes(is_b)
            .open_bracket()
            .passes(is_c)
            .or_()
            .not_()
            .passes(is_a)
            .close_bracket()
            .close_bracket()
        )
        implicit = (
            chain()
            .passes(is_a)
            .open_bracket()
            .passes(is_b)
            .open_bracket()
            .passes(is_c)
            .or_()
            .not_()
            .passes(is_a)
        )
        assert implicit.test(value) == explicit.test(value)

    def test_bracket_continues_outer_chain(self):
        v = (
            chain()
            .open_bracket()
            .passes(is_a)
            .or_()
            .passes(is_b)
            .close_bracket()
            .passes(is_c)
        )
        assert v.test("ac") is True
        assert v.test("bc") is True
        assert v.test("ab") is False

    def test_bracket_keeps_outer_main_condition(self):
        v = chain().passes(is_a).or_().open_bracket().passes(is_b).passes(is_c)
        assert v.test("a") is True
        assert v.test("bc") is True
        assert v.test("b") is False

    def test_open_bracket_keeps_validator_type(self):
        v = string().open_bracket()
        assert isinstance(v, StringValidator)
        assert isinstance(v.outer, StringValidator)
        assert isinstance(v.is_empty().close_bracket(), StringValidator)


# =============================================================================
# Errors
# =============================================================================


class TestErrors:
    def test_or_before_any_condition(self):
        with pytest.raises(ChainStateError):
            chain().or_()

    def test_or_twice(self):
        with pytest.raises(ChainStateError):
            chain().passes(is_a).or_().or_()

    def test_or_right_after_open_bracket(self):
        with pytest.raises(ChainStateError):
            chain().passes(is_a).open_bracket().or_()

    def test_close_without_open(self):
        with pytest.raises(UnmatchedBracketError):
            chain().passes(is_a).close_bracket()

    def test_unmatched_bracket_is_a_chain_state_error(self):
        assert issubclass(UnmatchedBracketError, ChainStateError)
        assert issubclass(EmptyChainError, ChainStateError)

    def test_test_on_fresh_validator(self):
        with pytest.raises(EmptyChainError):
            chain().test("a")

    def test_empty_bracket(self):
        with pytest.raises(EmptyChainError):
            chain().passes(is_a).open_bracket().close_bracket()

    def test_empty_bracket_closed_implicitly(self):
        with pytest.raises(EmptyChainError):
            chain().passes(is_a).open_bracket().test("a")

    def test_only_not_is_empty(self):
        with pytest.raises(EmptyChainError):
            chain().not_().test("a")

    def test_trailing_or_still_evaluates(self):
        # or_() with nothing after it leaves the folded main condition
        v = chain().passes(is_a).or_()
        assert v.test("a") is True
        assert v.test("b") is False

    def test_none_predicate(self):
        with pytest.raises(PreconditionError):
            chain().passes(None)

    def test_none_collection(self):
        with pytest.raises(PreconditionError):
            chain().is_contained_in(None)

    def test_precondition_error_is_value_error(self):
        with pytest.raises(ValueError):
            chain().is_contained_in(None)

    def test_chain_state_error_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            chain().or_()


# =============================================================================
# Immutability & Sharing
# =============================================================================


class TestImmutability:
    def test_every_call_returns_new_validator(self):
        base = string()
        negated = base.not_()
        registered = base.is_empty()
        assert negated is not base
        assert registered is not base
        assert base.negate_next is False
        assert base.pending == ()

    def test_branching_from_shared_prefix(self):
        prefix = string().not_().is_null()
        short = prefix.has_at_most_chars(3)
        long = prefix.has_at_least_chars(10)

        assert short.test("abc") is True
        assert short.test("abcdefghijk") is False
        assert long.test("abcdefghijk") is True
        assert long.test("abc") is False
        assert len(prefix.pending) == 1

    def test_evaluation_does_not_mutate(self):
        v = string().is_empty().open_bracket().is_blank()
        before = (v.outer, v.main_condition, v.pending, v.negate_next)
        v.test("")
        assert (v.outer, v.main_condition, v.pending, v.negate_next) == before

    def test_fields_are_frozen(self):
        v = string()
        with pytest.raises(FrozenInstanceError):
            v.negate_next = True

    def test_or_folds_into_any_of(self):
        v = string().is_empty().or_().is_blank().or_().has_chars(3)
        assert isinstance(v.main_condition, AnyOf)
        assert len(v.main_condition.children) == 2
        collapsed = v.collapse()
        assert isinstance(collapsed, AnyOf)
        assert len(collapsed.children) == 3

    def test_brackets_of_the_same_kind_are_flattened(self):
        ands = string().is_empty().open_bracket().is_blank().has_chars(0).close_bracket()
        assert len(ands.collapse().children) == 3

        ors = (
            string()
            .has_chars(3)
            .or_()
            .open_bracket().is_empty().or_().is_blank().close_bracket()
        )
        assert isinstance(ors.collapse(), AnyOf)
        assert len(ors.collapse().children) == 3

    def test_negated_bracket_is_not_flattened(self):
        v = string().is_empty().not_().open_bracket().is_blank().has_chars(0).close_bracket()
        children = v.collapse().children
        assert len(children) == 2
        assert isinstance(children[1], Negated)

    def test_concurrent_evaluation_matches_sequential(self):
        validator = (
            integer()
            .is_positive()
            .is_even()
            .or_()
            .open_bracket()
            .is_negative()
            .not_()
            .is_between(-10, -1)
        )
        values = list(range(-1000, 1000))
        expected = [validator.test(v) for v in values]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(validator.test, values))

        assert results == expected


# =============================================================================
# Predicate interoperability
# =============================================================================


class TestAsPredicate:
    def test_as_predicate_with_filter(self):
        not_blank = string().not_().is_blank()
        assert list(filter(not_blank.as_predicate(), ["a", " ", "", "b"])) == ["a", "b"]

    def test_validator_is_callable(self):
        assert all(map(string().has_chars(1), ["a", "b"]))
        assert not any(map(string().has_chars(1), ["", "bb"]))

    def test_is_invalid(self):
        v = string().is_empty()
        assert v.is_invalid("x") is True
        assert v.is_invalid("") is False

    def test_validator_as_condition_of_another(self):
        empty_or_blank = string().is_empty().or_().is_blank()
        v = string().not_().is_null().not_().passes(empty_or_blank)
        assert v.test("x") is True
        assert v.test(" ") is False
        assert v.test(None) is False


# =============================================================================
# Object predicates
# =============================================================================


class TestObjectPredicates:
    def test_is_equal(self):
        assert any_().is_equal(5).test(5) is True
        assert any_().is_equal(5).test(6) is False

    def test_is_null(self):
        assert any_().is_null().test(None) is True
        assert any_().not_().is_null().test(0) is True

    def test_is_contained_in(self):
        v = any_().is_contained_in({"red", "green"})
        assert v.test("red") is True
        assert v.test("blue") is False

    def test_is_one_of(self):
        v = any_().is_one_of(1, 2, 3)
        assert v.test(2) is True
        assert v.test(4) is False

    def test_unhashable_value_is_not_contained_in_set(self):
        assert any_().is_contained_in({1, 2}).test([1]) is False
        assert any_().is_contained_in({"a": 1}).test({"a": 1}) is False
        assert any_().not_().is_contained_in({1, 2}).test([1]) is True

    def test_unhashable_value_in_list(self):
        assert any_().is_one_of([1], [2]).test([2]) is True

    def test_is_instance_of(self):
        v = any_().is_instance_of((int, float))
        assert v.test(1.5) is True
        assert v.test("1.5") is False

    def test_any_returns_object_validator(self):
        assert isinstance(any_(), ObjectValidator)

    def test_repr(self):
        v = string().is_empty().or_().open_bracket().not_()
        text = repr(v)
        assert text.startswith("StringValidator(")
        assert "brackets=1" in text
        assert "negate_next" in text
