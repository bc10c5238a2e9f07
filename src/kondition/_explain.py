"""Plain English rendering of a validator."""

from __future__ import annotations

from kondition._conditions import AllOf, AnyOf, Condition, Negated
from kondition._core import Validator


def explain(target: Validator | Condition) -> str:
    """
    Generate a plain English explanation of what a validator checks.

    Open brackets are closed first, as test() would.

    Example:
        v = string().not_().is_null().open_bracket().is_empty().or_().has_chars(5)
        print(explain(v))

        # Output:
        # Check passes if ALL of:
        #   • NOT: is_null
        #   • ANY of:
        #     • is_empty
        #     • has_chars(5)

    Raises:
        EmptyChainError: if the validator has no conditions
    """
    if isinstance(target, Validator):
        while target.outer is not None:
            target = target.close_bracket()
        target = target.collapse()

    output_lines: list[str] = []
    stack: list[tuple[Condition, int]] = [(target, 0)]

    while stack:
        condition, depth = stack.pop()
        indent = "  " * depth
        bullet = "• " if depth > 0 else ""

        if isinstance(condition, (AllOf, AnyOf)):
            kind = "ALL" if isinstance(condition, AllOf) else "ANY"
            if depth == 0:
                output_lines.append(f"Check passes if {kind} of:")
            else:
                output_lines.append(f"{indent}{bullet}{kind} of:")
            for child in reversed(condition.children):
                stack.append((child, depth + 1))

        elif isinstance(condition, Negated):
            output_lines.append(f"{indent}{bullet}NOT: {_inline(condition.inner)}")

        elif depth == 0:
            output_lines.append(f"Check: {condition.name}")

        else:
            output_lines.append(f"{indent}{bullet}{condition.name}")

    return "\n".join(output_lines)


def _inline(condition: Condition) -> str:
    """Short one-line form, used under NOT."""
    if isinstance(condition, AllOf):
        return "(" + " AND ".join(_inline(c) for c in condition.children) + ")"
    if isinstance(condition, AnyOf):
        return "(" + " OR ".join(_inline(c) for c in condition.children) + ")"
    if isinstance(condition, Negated):
        return f"NOT {_inline(condition.inner)}"
    return condition.name
