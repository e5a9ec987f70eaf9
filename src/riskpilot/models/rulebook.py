"""
RiskPilot Rulebook Models

Declarative rule tables evaluated by the engine:
- ComplianceRule: guard -> one mandatory block from the requirement matrix
- RecommendationRule: guard -> one recommendation block
- ReferenceTables: official sources, guidance and authorities

Rules are kept in file order. Every rule is evaluated independently and
any subset may fire; adding a rule is a data change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .conditions import Condition
from .enums import Priority


@dataclass(frozen=True)
class ComplianceRule:
    """
    Selects a compliance program when its guard holds.

    Attributes:
        id: Rule identifier
        category: Display name of the emitted requirement block
        program: Program id in the framework's requirement matrix
        applies_when: Guard (None = always)
        mandatory: Whether the emitted block is mandatory
    """
    id: str
    category: str
    program: str
    applies_when: Optional[Condition] = None
    mandatory: bool = True
    description: str = ""


@dataclass(frozen=True)
class PriorityOverride:
    """Replaces a recommendation's priority when its guard holds."""
    applies_when: Condition
    priority: Priority


@dataclass(frozen=True)
class RecommendationRule:
    """
    Emits one recommendation block when its guard holds.

    Attributes:
        id: Rule identifier
        priority: Default priority
        category: Block category (e.g., "Legal Review")
        action: What to do
        rationale: Why it is required
        timeline: Optional target window (e.g., "Within 1 week")
        items_key: Name of the item list in the serialized block
        items: Fixed checklist for the block
        applies_when: Guard (None = always)
        priority_overrides: First satisfied override wins
    """
    id: str
    priority: Priority
    category: str
    action: str
    rationale: str
    timeline: Optional[str] = None
    items_key: Optional[str] = None
    items: tuple[str, ...] = ()
    applies_when: Optional[Condition] = None
    priority_overrides: tuple[PriorityOverride, ...] = ()


@dataclass(frozen=True)
class ReferenceTables:
    """Static citation tables used by the reference resolver."""
    official_sources: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    guidance_documents: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    authorities: Mapping[str, str] = field(default_factory=dict)
    default_official_source: str = "Consult official government sources for this regulation"
    default_guidance: str = "Check regulatory authority websites for guidance"
    default_authority: str = "Consult national regulatory authorities"

    def __post_init__(self) -> None:
        object.__setattr__(self, "official_sources", MappingProxyType(dict(self.official_sources)))
        object.__setattr__(self, "guidance_documents", MappingProxyType(dict(self.guidance_documents)))
        object.__setattr__(self, "authorities", MappingProxyType(dict(self.authorities)))


@dataclass(frozen=True)
class Rulebook:
    """All rule tables plus the reference tables."""
    version: str
    compliance_rules: tuple[ComplianceRule, ...] = ()
    recommendation_rules: tuple[RecommendationRule, ...] = ()
    references: ReferenceTables = field(default_factory=ReferenceTables)
