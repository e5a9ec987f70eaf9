"""
RiskPilot Condition Evaluator

Evaluates rulebook guards against an AnalysisContext.

Leaves read one context field and apply a comparison from OPERATORS;
inner nodes fold their children with Kleene AND/OR/NOT. A field the
context does not carry makes its leaf UNKNOWN, and so does a comparison
between incompatible values. Only guards evaluating to TRUE fire.
"""
from __future__ import annotations

import logging
import operator as op
from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Mapping, Optional

from ..exceptions import ConditionEvaluationError
from ..models import (
    Condition,
    ConditionOperator,
    GuardResult,
    TriBool,
)


logger = logging.getLogger(__name__)

_MISSING = object()

_COLLECTIONS = (list, tuple, set, frozenset)


def resolve_field(context: Any, name: str) -> Any:
    """
    Value of a context field, or _MISSING.

    Mappings are read by key (useful for ad hoc contexts in scripts),
    everything else by attribute.
    """
    if isinstance(context, Mapping):
        return context.get(name, _MISSING)
    return getattr(context, name, _MISSING)


# =============================================================================
# Leaf Comparisons
# =============================================================================

def _is_in(actual: Any, expected: Any) -> bool:
    return isinstance(expected, _COLLECTIONS) and actual in expected


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str):
        return isinstance(expected, str) and expected in actual
    return isinstance(actual, _COLLECTIONS) and expected in actual


def _any_contains(actual: Any, expected: Any) -> bool:
    needles = (expected,) if isinstance(expected, str) else tuple(expected)
    elements = (actual,) if isinstance(actual, str) else actual
    if not isinstance(elements, _COLLECTIONS + (str,)):
        return False
    return any(
        isinstance(element, str) and needle in element
        for element in elements
        for needle in needles
    )


def _is_empty(actual: Any) -> bool:
    return isinstance(actual, (str, dict) + _COLLECTIONS) and len(actual) == 0


OPERATORS: dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQ: op.eq,
    ConditionOperator.NE: op.ne,
    ConditionOperator.GT: op.gt,
    ConditionOperator.GTE: op.ge,
    ConditionOperator.LT: op.lt,
    ConditionOperator.LTE: op.le,
    ConditionOperator.IN: _is_in,
    ConditionOperator.NOT_IN: lambda actual, expected: not _is_in(actual, expected),
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.ANY_CONTAINS: _any_contains,
    ConditionOperator.IS_EMPTY: lambda actual, _: _is_empty(actual),
    ConditionOperator.IS_NOT_EMPTY: lambda actual, _: not _is_empty(actual),
}

# Operators that give an answer for a None field value
_NULL_CHECKS: dict[ConditionOperator, bool] = {
    ConditionOperator.IS_NULL: True,
    ConditionOperator.IS_NOT_NULL: False,
}


def compare_values(actual: Any, operator: ConditionOperator, expected: Any) -> TriBool:
    """
    Apply a leaf operator.

    None compares as UNKNOWN except under is_null/is_not_null.
    """
    if operator in _NULL_CHECKS:
        return TriBool.of((actual is None) == _NULL_CHECKS[operator])
    if actual is None:
        return TriBool.UNKNOWN

    compare = OPERATORS.get(operator)
    if compare is None:
        raise ConditionEvaluationError(
            message=f"'{operator.value}' is not a comparison operator",
            details={"operator": operator.value},
        )
    try:
        return TriBool.of(bool(compare(actual, expected)))
    except TypeError:
        # e.g. ordering a string against a number
        return TriBool.UNKNOWN


# =============================================================================
# Condition Evaluator
# =============================================================================

@dataclass(frozen=True)
class ConditionEvaluator:
    """
    Evaluates guards against analysis contexts.

    Stateless; one instance may be shared by every rule and request.

    Usage:
        evaluator = ConditionEvaluator()
        if evaluator.guard_holds(rule.applies_when, context):
            ...

        result = evaluator.evaluate(guard, context)
        result.value, result.missing_fields, result.trace
    """
    trace: bool = False

    def evaluate(self, condition: Condition, context: Any) -> GuardResult:
        missing: list[str] = []
        lines: list[str] = []
        value = self._eval(condition, context, missing, lines)
        if self.trace:
            for line in lines:
                logger.debug("guard %s", line)
        return GuardResult(
            value=value,
            missing_fields=tuple(dict.fromkeys(missing)),
            trace=tuple(lines),
        )

    def is_satisfied(self, condition: Condition, context: Any) -> bool:
        return self.evaluate(condition, context).holds

    def guard_holds(self, guard: Optional[Condition], context: Any) -> bool:
        """A rule without a guard always fires."""
        return guard is None or self.is_satisfied(guard, context)

    def _eval(
        self,
        condition: Condition,
        context: Any,
        missing: list[str],
        lines: list[str],
    ) -> TriBool:
        kind = condition.op

        if kind == ConditionOperator.NOT:
            return ~self._eval(condition.children[0], context, missing, lines)

        if kind in (ConditionOperator.AND, ConditionOperator.OR):
            # Stop at the dominating value: FALSE for and, TRUE for or
            stop = TriBool.FALSE if kind == ConditionOperator.AND else TriBool.TRUE
            fold = op.and_ if kind == ConditionOperator.AND else op.or_
            values: list[TriBool] = []
            for child in condition.children:
                values.append(self._eval(child, context, missing, lines))
                if values[-1] is stop:
                    break
            return reduce(fold, values)

        actual = resolve_field(context, condition.field)
        if actual is _MISSING:
            missing.append(condition.field)
            lines.append(f"{condition} -> UNKNOWN (no field '{condition.field}')")
            return TriBool.UNKNOWN

        value = compare_values(actual, kind, condition.value)
        lines.append(f"{condition} -> {value.name} (actual: {actual!r})")
        return value


# =============================================================================
# Convenience Functions
# =============================================================================

_DEFAULT_EVALUATOR = ConditionEvaluator()


def evaluate_condition(condition: Condition, context: Any) -> GuardResult:
    return _DEFAULT_EVALUATOR.evaluate(condition, context)


def check_condition(condition: Condition, context: Any) -> bool:
    """True only for TRUE; FALSE and UNKNOWN both mean the rule does not fire."""
    return _DEFAULT_EVALUATOR.is_satisfied(condition, context)
