"""
RiskPilot Models

All domain models for the RiskPilot regulatory-risk analysis engine.

Exports all models organized by category for convenient imports:

    from riskpilot.models import (
        # Enums
        RiskTier, ScoringFactor, Priority,
        # Conditions
        TriBool, Condition, AND, OR, NOT, EQ, IN,
        # Knowledge bases
        RiskFramework, RegulatoryCatalog, Rulebook,
        # Request / Result
        AnalysisRequest, RiskAnalysisResult,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    LOGICAL_OPERATORS,
    ConditionOperator,
    DataType,
    DecisionImpact,
    Industry,
    Jurisdiction,
    Priority,
    RiskTier,
    ScoringFactor,
    TimelineHorizon,
    TransparencyLevel,
    UseCaseCategory,
)

# =============================================================================
# Rule Guards
# =============================================================================
from .conditions import (
    TriBool,
    Condition,
    GuardResult,
    AND,
    OR,
    NOT,
    EQ,
    NE,
    IN,
    CONTAINS,
    ANY_CONTAINS,
)

# =============================================================================
# Knowledge Bases
# =============================================================================
from .framework import (
    ScoreCategory,
    ScoringTable,
    RiskLevel,
    RequirementRecord,
    ComplianceProgram,
    RiskFramework,
)
from .catalog import (
    RiskCategoryTier,
    Regulation,
    Region,
    RegulatoryCatalog,
)
from .rulebook import (
    ComplianceRule,
    PriorityOverride,
    RecommendationRule,
    ReferenceTables,
    Rulebook,
)

# =============================================================================
# Request / Result
# =============================================================================
from .request import AnalysisContext, AnalysisRequest
from .result import (
    ComponentScores,
    Provision,
    ApplicableRegulation,
    ComplianceRequirement,
    Recommendation,
    TimelineBucket,
    ComplianceTimeline,
    RegulatoryReference,
    RiskAnalysisResult,
)


__all__ = [
    # Enums
    "LOGICAL_OPERATORS",
    "ConditionOperator",
    "DataType",
    "DecisionImpact",
    "Industry",
    "Jurisdiction",
    "Priority",
    "RiskTier",
    "ScoringFactor",
    "TimelineHorizon",
    "TransparencyLevel",
    "UseCaseCategory",
    # Conditions
    "TriBool",
    "GuardResult",
    "Condition",
    "AND",
    "OR",
    "NOT",
    "EQ",
    "NE",
    "IN",
    "CONTAINS",
    "ANY_CONTAINS",
    # Framework
    "ScoreCategory",
    "ScoringTable",
    "RiskLevel",
    "RequirementRecord",
    "ComplianceProgram",
    "RiskFramework",
    # Catalog
    "RiskCategoryTier",
    "Regulation",
    "Region",
    "RegulatoryCatalog",
    # Rulebook
    "ComplianceRule",
    "PriorityOverride",
    "RecommendationRule",
    "ReferenceTables",
    "Rulebook",
    # Request / Result
    "AnalysisContext",
    "AnalysisRequest",
    "ComponentScores",
    "Provision",
    "ApplicableRegulation",
    "ComplianceRequirement",
    "Recommendation",
    "TimelineBucket",
    "ComplianceTimeline",
    "RegulatoryReference",
    "RiskAnalysisResult",
]
