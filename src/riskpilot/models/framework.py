"""
RiskPilot Risk Framework Models

Domain model for the risk framework knowledge base: the five weighted
scoring tables, the risk-level thresholds and the compliance-requirements
matrix.

All models are frozen. The framework is built once by the loader and
shared read-only by every analysis.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .enums import RiskTier, ScoringFactor


def _frozen_mapping(value: Mapping) -> Mapping:
    return MappingProxyType(dict(value))


# =============================================================================
# Scoring Tables
# =============================================================================

@dataclass(frozen=True)
class ScoreCategory:
    """
    One named severity category of a scoring table.

    Attributes:
        key: Category key (e.g., "high_risk", "eu_operations")
        score: Severity 0-100
        description: Human-readable description
        members: Request values owned by this category (empty when the
            category is addressed by its canonical key directly)
    """
    key: str
    score: int
    description: str = ""
    members: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"score": self.score, "description": self.description}
        if self.members:
            result["members"] = list(self.members)
        return result


@dataclass(frozen=True)
class ScoringTable:
    """
    A weighted scoring factor and its category table.

    Lookups fall back to `default_category` (a key into `categories`) or,
    when none is declared, to `default_score`.
    """
    factor: ScoringFactor
    weight: int
    categories: Mapping[str, ScoreCategory] = field(default_factory=dict)
    default_category: Optional[str] = None
    default_score: Optional[int] = None
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", _frozen_mapping(self.categories))

    def score_for(self, key: str) -> Optional[int]:
        """Score of the category with this key, or None."""
        category = self.categories.get(key)
        return category.score if category is not None else None

    def category_for_member(self, value: str) -> Optional[ScoreCategory]:
        """Category that lists `value` among its members, or None."""
        for category in self.categories.values():
            if value in category.members:
                return category
        return None

    @property
    def fallback_score(self) -> int:
        """Score used when no category matches."""
        if self.default_category is not None:
            return self.categories[self.default_category].score
        return self.default_score if self.default_score is not None else 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "weight": self.weight,
            "description": self.description,
            "categories": {key: c.to_dict() for key, c in self.categories.items()},
        }
        if self.default_category is not None:
            result["default_category"] = self.default_category
        if self.default_score is not None:
            result["default_score"] = self.default_score
        return result


# =============================================================================
# Risk Levels
# =============================================================================

@dataclass(frozen=True)
class RiskLevel:
    """
    A risk tier with its threshold, description and canned next steps.

    Attributes:
        tier: The tier
        min_score: Lowest rounded total score that maps to this tier
        description: Static description
        actions: Recommended next-step actions
    """
    tier: RiskTier
    min_score: int
    description: str
    actions: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        return self.tier.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "min_score": self.min_score,
            "description": self.description,
            "actions": list(self.actions),
        }


# =============================================================================
# Compliance Requirements Matrix
# =============================================================================

@dataclass(frozen=True)
class RequirementRecord:
    """A single mandatory requirement with an optional timeline tag."""
    requirement: str
    timeline: Optional[str] = None
    reference: Optional[str] = None

    def to_dict(self) -> dict:
        result = {"requirement": self.requirement}
        if self.timeline is not None:
            result["timeline"] = self.timeline
        if self.reference is not None:
            result["reference"] = self.reference
        return result


@dataclass(frozen=True)
class ComplianceProgram:
    """A named compliance program and its ordered requirements."""
    id: str
    description: str
    mandatory_requirements: tuple[RequirementRecord, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "mandatory_requirements": [r.to_dict() for r in self.mandatory_requirements],
        }


# =============================================================================
# Risk Framework
# =============================================================================

@dataclass(frozen=True)
class RiskFramework:
    """
    The complete risk framework.

    Attributes:
        name: Framework name
        version: Framework version string
        factors: Scoring tables by factor
        risk_levels: Tiers ordered by descending threshold
        compliance_programs: Requirement matrix by program id
    """
    name: str
    version: str
    factors: Mapping[ScoringFactor, ScoringTable]
    risk_levels: tuple[RiskLevel, ...]
    compliance_programs: Mapping[str, ComplianceProgram] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "factors", _frozen_mapping(self.factors))
        object.__setattr__(
            self,
            "compliance_programs",
            _frozen_mapping(self.compliance_programs),
        )
        object.__setattr__(
            self,
            "risk_levels",
            tuple(sorted(self.risk_levels, key=lambda lvl: lvl.min_score, reverse=True)),
        )

    def table(self, factor: ScoringFactor) -> ScoringTable:
        """Get the scoring table for a factor."""
        return self.factors[factor]

    def weight(self, factor: ScoringFactor) -> int:
        """Get the weight (percent) of a factor."""
        return self.factors[factor].weight

    @property
    def total_weight(self) -> int:
        return sum(table.weight for table in self.factors.values())

    def level_for(self, score: int) -> RiskLevel:
        """Map a rounded score to its risk level (thresholds closed below)."""
        for level in self.risk_levels:
            if score >= level.min_score:
                return level
        return self.risk_levels[-1]

    def level(self, tier: RiskTier) -> RiskLevel:
        """Get the risk level record for a tier."""
        for level in self.risk_levels:
            if level.tier == tier:
                return level
        raise KeyError(tier)

    def program(self, program_id: str) -> ComplianceProgram:
        """Get a compliance program by id."""
        return self.compliance_programs[program_id]

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the framework document layout."""
        return {
            "name": self.name,
            "version": self.version,
            "scoring_factors": {
                factor.value: table.to_dict() for factor, table in self.factors.items()
            },
            "risk_levels": {
                level.tier.framework_key: level.to_dict() for level in self.risk_levels
            },
            "compliance_requirements_matrix": {
                program_id: program.to_dict()
                for program_id, program in self.compliance_programs.items()
            },
        }
