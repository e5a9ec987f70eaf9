"""
RiskPilot Rule Guards

Guards decide which compliance and recommendation rules fire for an
analysis. A guard is a small tree with the same shape as its rulebook
entry:

    {op: and, children: [
        {op: contains, field: jurisdictions, value: EU},
        {op: in, field: use_case_category, value: [credit-scoring, ...]},
    ]}

Leaves compare one analysis context field against a value; inner nodes
combine children with AND/OR/NOT.

Guards are evaluated in three-valued logic. A leaf over a field the
context does not carry is UNKNOWN, and a rule fires only on TRUE.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional

from .enums import LOGICAL_OPERATORS, ConditionOperator


# =============================================================================
# Three-Valued Logic
# =============================================================================

class TriBool(Enum):
    """
    Kleene truth value.

    Values are ordered FALSE < UNKNOWN < TRUE, so conjunction is the
    minimum, disjunction the maximum and negation the mirror image.
    """
    FALSE = 0
    UNKNOWN = 1
    TRUE = 2

    def __and__(self, other: TriBool) -> TriBool:
        if not isinstance(other, TriBool):
            return NotImplemented
        return TriBool(min(self.value, other.value))

    def __or__(self, other: TriBool) -> TriBool:
        if not isinstance(other, TriBool):
            return NotImplemented
        return TriBool(max(self.value, other.value))

    def __invert__(self) -> TriBool:
        return TriBool(2 - self.value)

    def __bool__(self) -> bool:
        # if-statements must not silently treat UNKNOWN as False
        if self is TriBool.UNKNOWN:
            raise ValueError("TriBool.UNKNOWN has no boolean value; compare with TriBool.TRUE")
        return self is TriBool.TRUE

    @classmethod
    def of(cls, value: Optional[bool]) -> TriBool:
        """TRUE/FALSE for a bool, UNKNOWN for None."""
        if value is None:
            return cls.UNKNOWN
        return cls.TRUE if value else cls.FALSE


# =============================================================================
# Guard Tree
# =============================================================================

@dataclass(frozen=True)
class Condition:
    """
    One node of a guard.

    Attributes:
        op: Operator (and/or/not combine children, the rest compare a field)
        field: Analysis context field tested by a leaf
        value: Operand of a leaf (tuples for list operands)
        children: Sub-guards of an and/or/not node
        id: Optional identifier from the rulebook
        description: Optional human-readable text
    """
    op: ConditionOperator
    field: Optional[str] = None
    value: Any = None
    children: tuple[Condition, ...] = ()
    id: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.is_logical:
            if not self.children:
                raise ValueError(f"'{self.op.value}' guard needs children")
            if self.field is not None:
                raise ValueError(f"'{self.op.value}' guard cannot test a field")
            if self.op == ConditionOperator.NOT and len(self.children) != 1:
                raise ValueError("'not' guard takes exactly one child")
        else:
            if not self.field:
                raise ValueError(f"'{self.op.value}' guard needs a field")
            if self.children:
                raise ValueError(f"'{self.op.value}' guard cannot have children")

    @property
    def is_logical(self) -> bool:
        return self.op in LOGICAL_OPERATORS

    def fields(self) -> Iterator[str]:
        """Every context field the guard reads, leaves first-to-last."""
        if self.field is not None:
            yield self.field
        for child in self.children:
            yield from child.fields()

    def __str__(self) -> str:
        if self.description:
            return self.description
        if self.is_logical:
            if self.op == ConditionOperator.NOT:
                return f"not ({self.children[0]})"
            joiner = f" {self.op.value} "
            return "(" + joiner.join(str(c) for c in self.children) + ")"
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return f"{self.field} {self.op.value} {value!r}"


@dataclass(frozen=True)
class GuardResult:
    """
    Outcome of evaluating a guard.

    Attributes:
        value: Three-valued outcome
        missing_fields: Context fields the guard needed but could not read
        trace: One line per evaluated leaf, in evaluation order
    """
    value: TriBool
    missing_fields: tuple[str, ...] = ()
    trace: tuple[str, ...] = ()

    @property
    def holds(self) -> bool:
        return self.value is TriBool.TRUE


# =============================================================================
# Builders
# =============================================================================

def _leaf(op: ConditionOperator, field: str, value: Any = None) -> Condition:
    if isinstance(value, list):
        value = tuple(value)
    return Condition(op=op, field=field, value=value)


def AND(*children: Condition) -> Condition:
    return Condition(op=ConditionOperator.AND, children=children)


def OR(*children: Condition) -> Condition:
    return Condition(op=ConditionOperator.OR, children=children)


def NOT(child: Condition) -> Condition:
    return Condition(op=ConditionOperator.NOT, children=(child,))


def EQ(field: str, value: Any) -> Condition:
    return _leaf(ConditionOperator.EQ, field, value)


def NE(field: str, value: Any) -> Condition:
    return _leaf(ConditionOperator.NE, field, value)


def IN(field: str, values: list[Any]) -> Condition:
    """field is one of values."""
    return _leaf(ConditionOperator.IN, field, list(values))


def CONTAINS(field: str, value: Any) -> Condition:
    """value is an element (or substring) of field."""
    return _leaf(ConditionOperator.CONTAINS, field, value)


def ANY_CONTAINS(field: str, substrings: list[str]) -> Condition:
    """Some element of field contains one of the substrings."""
    return _leaf(ConditionOperator.ANY_CONTAINS, field, list(substrings))
