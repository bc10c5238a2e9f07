"""Tracing hooks for validator evaluation."""

from __future__ import annotations

import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from kondition._conditions import (
    AllOf,
    Condition,
    Negated,
    children_of,
    is_composite,
)

# Optional OpenTelemetry imports - only needed if using OpenTelemetryHook
try:
    from opentelemetry.trace import Status as _Status
    from opentelemetry.trace import StatusCode as _StatusCode
    from opentelemetry.trace import set_span_in_context as _set_span_in_context

    _HAS_OPENTELEMETRY = True
except ImportError:
    _HAS_OPENTELEMETRY = False
    _Status = None
    _StatusCode = None
    _set_span_in_context = None


@runtime_checkable
class TraceHook(Protocol):
    """
    Protocol for trace hooks.

    Implement this to integrate with logging, OpenTelemetry, or other
    tracing systems.

    Example:
        class MyHook:
            def on_enter(self, name, value, depth):
                print(f"{'  ' * depth}-> {name}")
                return None  # span token

            def on_exit(self, span, name, ok, duration_ms, depth):
                status = "✔" if ok else "✗"
                print(f"{'  ' * depth}<- {name} {status} ({duration_ms:.2f}ms)")

            def on_error(self, span, name, error, duration_ms, depth):
                print(f"{'  ' * depth}<- {name} ERROR: {error}")
    """

    def on_enter(self, name: str, value: Any, depth: int) -> Any:
        """
        Called before evaluating a condition.

        Args:
            name: Name of the condition (e.g. "AND", "is_blank")
            value: Value being validated
            depth: Nesting depth (0 = the validator itself)

        Returns:
            Span token to pass to on_exit (can be None)
        """
        ...

    def on_exit(
        self, span: Any, name: str, ok: bool, duration_ms: float, depth: int
    ) -> None:
        """Called after a condition completes."""
        ...

    def on_error(
        self, span: Any, name: str, error: Exception, duration_ms: float, depth: int
    ) -> None:
        """Called if a condition raises an exception."""
        ...


@dataclass
class TraceConfig:
    """
    Configuration for tracing behavior.

    Attributes:
        nested: If True, trace child conditions (AND, OR, NOT children)
        max_depth: Maximum depth to trace (None = unlimited)
        include_leaf_only: If True, only trace leaf predicates
    """

    nested: bool = True
    max_depth: int | None = None
    include_leaf_only: bool = False


_trace_hook: ContextVar[TraceHook | None] = ContextVar("trace_hook", default=None)
_trace_config: ContextVar[TraceConfig] = ContextVar(
    "trace_config", default=TraceConfig()
)


@contextmanager
def use_tracing(hook: TraceHook, config: TraceConfig | None = None):
    """
    Context manager to enable tracing for all validator evaluations in scope.

    Tracing state lives in context variables, so it only affects the
    current thread or asyncio task.

    Example:
        with use_tracing(LoggingHook(logger)):
            validator.test(value)  # This will be traced

        with use_tracing(PrintHook(), TraceConfig(max_depth=1)):
            validator.test(value)
    """
    hook_token = _trace_hook.set(hook)
    config_token = _trace_config.set(config or TraceConfig())
    try:
        yield
    finally:
        _trace_hook.reset(hook_token)
        _trace_config.reset(config_token)


def traced_evaluate(name: str, condition: Condition, value: Any) -> bool:
    """
    Evaluate a collapsed validator under the active hook.

    The validator itself is reported at depth 0 under `name`; its condition
    tree is reported below it.
    """
    hook = _trace_hook.get()
    if hook is None:
        return condition.evaluate(value)
    config = _trace_config.get()

    if config.include_leaf_only:
        return _evaluate_node(condition, value, hook, config, 1)
    if not config.nested:
        return _run_hooked(hook, name, value, 0, lambda: condition.evaluate(value))
    return _run_hooked(
        hook, name, value, 0, lambda: _evaluate_node(condition, value, hook, config, 1)
    )


def _run_hooked(hook: TraceHook, name: str, value: Any, depth: int, evaluate) -> bool:
    span = hook.on_enter(name, value, depth)
    start = time.perf_counter()
    try:
        ok = evaluate()
    except Exception as e:
        duration_ms = (time.perf_counter() - start) * 1000
        hook.on_error(span, name, e, duration_ms, depth)
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    hook.on_exit(span, name, ok, duration_ms, depth)
    return ok


def _evaluate_node(
    condition: Condition, value: Any, hook: TraceHook, config: TraceConfig, depth: int
) -> bool:
    if config.max_depth is not None and depth > config.max_depth:
        return condition.evaluate(value)

    if not is_composite(condition):
        return _run_hooked(
            hook, condition.name, value, depth, lambda: condition.evaluate(value)
        )

    def evaluate_composite() -> bool:
        children = children_of(condition)
        if isinstance(condition, Negated):
            return not _evaluate_node(children[0], value, hook, config, depth + 1)
        if isinstance(condition, AllOf):
            return all(
                _evaluate_node(child, value, hook, config, depth + 1)
                for child in children
            )
        return any(
            _evaluate_node(child, value, hook, config, depth + 1) for child in children
        )

    if config.include_leaf_only:
        return evaluate_composite()
    return _run_hooked(hook, condition.name, value, depth, evaluate_composite)


# =============================================================================
# Built-in Hooks
# =============================================================================


class PrintHook:
    """
    Simple trace hook that prints to stdout.

    Example:
        with use_tracing(PrintHook()):
            string().not_().is_blank().is_simple_email().test("a@b.com")

        # Output:
        # -> StringValidator
        #   -> AND
        #     -> NOT
        #       -> is_blank
        #       <- is_blank ✗ (0.01ms)
        #     <- NOT ✔ (0.02ms)
        #     ...
    """

    def __init__(self, indent: str = "  ", show_value: bool = False):
        self.indent = indent
        self.show_value = show_value

    def on_enter(self, name: str, value: Any, depth: int) -> float:
        prefix = self.indent * depth
        if self.show_value:
            print(f"{prefix}-> {name} | value={value!r}")
        else:
            print(f"{prefix}-> {name}")
        return time.perf_counter()

    def on_exit(
        self, span: float, name: str, ok: bool, duration_ms: float, depth: int
    ) -> None:
        prefix = self.indent * depth
        status = "✔" if ok else "✗"
        print(f"{prefix}<- {name} {status} ({duration_ms:.2f}ms)")

    def on_error(
        self, span: float, name: str, error: Exception, duration_ms: float, depth: int
    ) -> None:
        prefix = self.indent * depth
        print(f"{prefix}<- {name} ERROR: {error} ({duration_ms:.2f}ms)")


class LoggingHook:
    """
    Trace hook that logs to a Python logger.

    Example:
        import logging
        logger = logging.getLogger("kondition")

        with use_tracing(LoggingHook(logger)):
            validator.test(value)
    """

    def __init__(self, logger, level: int = 10):  # 10 = DEBUG
        self.logger = logger
        self.level = level

    def on_enter(self, name: str, value: Any, depth: int) -> dict:
        span = {"name": name, "depth": depth, "start": time.perf_counter()}
        self.logger.log(self.level, f"[ENTER] {name} (depth={depth})")
        return span

    def on_exit(
        self, span: dict, name: str, ok: bool, duration_ms: float, depth: int
    ) -> None:
        status = "PASS" if ok else "FAIL"
        self.logger.log(self.level, f"[EXIT] {name} -> {status} ({duration_ms:.2f}ms)")

    def on_error(
        self, span: dict, name: str, error: Exception, duration_ms: float, depth: int
    ) -> None:
        self.logger.error(f"[ERROR] {name} -> {error} ({duration_ms:.2f}ms)")


class OpenTelemetryHook:
    """
    OpenTelemetry trace hook: one span per traced condition, nested to
    mirror the condition tree.

    Logical nodes (AND / OR / NOT) are tagged with their operator; leaf
    predicates can optionally be recorded as events on their parent span
    instead of spans of their own.

    Requires: pip install opentelemetry-api
    """

    def __init__(
        self,
        tracer,
        *,
        max_span_depth: int | None = None,
        predicates_as_events: bool = False,
    ):
        if not _HAS_OPENTELEMETRY:
            raise ImportError(
                "OpenTelemetry is not installed. "
                "Install it with: pip install opentelemetry-api"
            )
        self.tracer = tracer
        self.max_span_depth = max_span_depth
        self.predicates_as_events = predicates_as_events

        # Per context, so one hook can be shared by concurrent threads and tasks
        self._span_stack: ContextVar[tuple[Any, ...]] = ContextVar(
            f"kondition_otel_spans_{id(self)}", default=()
        )

    def on_enter(self, name: str, value: Any, depth: int) -> Any:
        # Guaranteed non-None because __init__ checks _HAS_OPENTELEMETRY
        assert _set_span_in_context is not None

        if self.max_span_depth is not None and depth > self.max_span_depth:
            return None

        stack = self._span_stack.get()
        parent = stack[-1] if stack else None

        if self.predicates_as_events and parent and not _is_logical(name) and depth:
            parent.add_event(
                "predicate.evaluate",
                {"kondition.predicate": name, "kondition.depth": depth},
            )
            return None

        parent_ctx = _set_span_in_context(parent) if parent else None
        span = self.tracer.start_span(name, context=parent_ctx)
        if _is_logical(name):
            span.set_attribute("kondition.operator", name)
            span.set_attribute("kondition.node_type", "logical")
        else:
            span.set_attribute("kondition.node_type", "predicate" if depth else "validator")
        span.set_attribute("kondition.name", name)
        span.set_attribute("kondition.depth", depth)

        self._span_stack.set(stack + (span,))
        return span

    def on_exit(
        self, span: Any, name: str, ok: bool, duration_ms: float, depth: int
    ) -> None:
        if span is None:
            return
        assert _Status is not None
        assert _StatusCode is not None

        span.set_attribute("kondition.valid", ok)
        span.set_attribute("kondition.duration_ms", duration_ms)
        if not ok:
            span.set_status(_Status(_StatusCode.ERROR))
        span.end()
        self._span_stack.set(self._span_stack.get()[:-1])

    def on_error(
        self, span: Any, name: str, error: Exception, duration_ms: float, depth: int
    ) -> None:
        if span is None:
            return
        assert _Status is not None
        assert _StatusCode is not None

        span.set_attribute("kondition.valid", False)
        span.set_attribute("kondition.duration_ms", duration_ms)
        span.record_exception(error)
        span.set_status(_Status(_StatusCode.ERROR, str(error)))
        span.end()
        self._span_stack.set(self._span_stack.get()[:-1])


def _is_logical(name: str) -> bool:
    return name in {"AND", "OR", "NOT"}
