"""
Example: Validating a signup form with Kondition

Shows how validator chains map to everyday validation needs: required
fields, alternatives, grouping, collection checks, reacting to invalid
input, and tracing why a value failed.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from kondition import (
    LoggingHook,
    collection_of,
    date_,
    explain,
    string,
    use_tracing,
)

# =============================================================================
# Domain model
# =============================================================================


@dataclass(frozen=True)
class Signup:
    username: str | None
    email: str | None
    birthday: date | None
    referral_code: str = ""
    interests: list[str] = field(default_factory=list)


class SignupError(ValueError):
    pass


# =============================================================================
# 1. Required fields: AND is the default
# =============================================================================

# Built once, shared by every request
username_ok = (
    string()
    .not_().is_null()
    .not_().is_blank()
    .has_at_least_chars(3)
    .has_at_most_chars(20)
    .matches(r"[A-Za-z0-9_]+")
)

email_ok = string().not_().is_null().is_simple_email()


# =============================================================================
# 2. Alternatives: or_() binds looser than AND
# =============================================================================

# Either no referral code at all, or a positive numeric code up to 6 digits
referral_ok = (
    string()
    .is_empty()
    .or_()
    .has_at_most_chars(6)
    .is_int(lambda code: code > 0)
)


# =============================================================================
# 3. Grouping: brackets and negated brackets
# =============================================================================

# Not null, and not (too young or in the future)
birthday_ok = (
    date_()
    .not_().is_null()
    .not_().open_bracket()
        .is_after(date(2010, 1, 1))
        .or_()
        .is_in_future()
    .close_bracket()
)


# =============================================================================
# 4. Collections, reusing other validators as element checks
# =============================================================================

interest_ok = string().not_().is_blank().has_at_most_chars(30)

interests_ok = (
    collection_of(str)
    .not_().is_null()
    .has_at_most(5)
    .has_no_nulls()
    .all_match(interest_ok)
)


# =============================================================================
# 5. Reacting to invalid input
# =============================================================================


def validate(signup: Signup) -> list[str]:
    problems: list[str] = []

    username_ok.on_invalid(signup.username).then_raise_from(
        lambda name: SignupError(f"Invalid username: {name!r}")
    )
    email_ok.on_invalid(signup.email).then_run(lambda: problems.append("email"))
    referral_ok.on_invalid(signup.referral_code).then_run(
        lambda: problems.append("referral_code")
    )
    birthday_ok.on_invalid(signup.birthday).then_run(lambda: problems.append("birthday"))
    interests_ok.on_invalid(signup.interests).then_accept(
        lambda bad: problems.append(f"interests: {bad}")
    )
    return problems


# =============================================================================
# 6. Using validators as plain predicates
# =============================================================================


def usable_usernames(candidates: list[str]) -> list[str]:
    return list(filter(username_ok.as_predicate(), candidates))


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(message)s")
    logger = logging.getLogger("signup")

    signup = Signup(
        username="ada_l",
        email="ada@example.com",
        birthday=date(1990, 12, 10),
        referral_code="000123",
        interests=["math", "engines"],
    )
    print("Problems:", validate(signup) or "none")

    print(usable_usernames(["ok_name", "  ", "x", "has space", "fine123"]))

    print()
    print(explain(birthday_ok))

    print()
    with use_tracing(LoggingHook(logger)):
        referral_ok.test("1234567")
