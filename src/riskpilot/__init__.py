"""
RiskPilot - AI Regulatory Risk Analysis Engine

RiskPilot assesses a proposed AI use case against the AI regulations of
the jurisdictions it will operate in. It produces a GUIDANCE REPORT, not
legal advice: the compliance team decides.

Key Features:
- Weighted risk score (0-100) from five factors and a four-tier rating
- Regulation matching with provisions and penalty summaries
- Mandatory requirement sets drawn from the risk framework
- Prioritized recommendations from a declarative rulebook
- Compliance timeline and regulatory references

Quick Start:
    from riskpilot.engine import RiskAnalysisEngine
    from riskpilot.packs import load_knowledge_base

    engine = RiskAnalysisEngine.from_knowledge_base(load_knowledge_base())
    result = engine.analyze({
        "useCaseCategory": "credit-scoring",
        "jurisdictions": ["EU"],
        "dataTypes": ["financial_data"],
        "decisionImpact": "significant-economic",
    })
    print(result.risk_score, result.risk_level.value)

Version: 1.0.0
"""
from __future__ import annotations

__version__ = "1.0.0"
__author__ = "RiskPilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
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
    # Conditions
    TriBool,
    Condition,
    # Knowledge base
    RegulatoryCatalog,
    RiskFramework,
    Rulebook,
    # Request / Result
    AnalysisRequest,
    RiskAnalysisResult,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    AnalysisError,
    ConditionEvaluationError,
    KnowledgeBaseLoadError,
    KnowledgeBaseValidationError,
    RegionNotFoundError,
    RiskPilotError,
    SchemaVersionMismatch,
)

# =============================================================================
# Engine and Loading
# =============================================================================
from .engine import RiskAnalysisEngine, analyze, get_default_engine
from .packs import KnowledgeBase, KnowledgeBaseLoader, load_knowledge_base

__all__ = [
    "__version__",
    # Enums
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
    "Condition",
    # Knowledge base
    "RegulatoryCatalog",
    "RiskFramework",
    "Rulebook",
    "KnowledgeBase",
    "KnowledgeBaseLoader",
    "load_knowledge_base",
    # Request / Result
    "AnalysisRequest",
    "RiskAnalysisResult",
    # Engine
    "RiskAnalysisEngine",
    "analyze",
    "get_default_engine",
    # Exceptions
    "RiskPilotError",
    "KnowledgeBaseLoadError",
    "KnowledgeBaseValidationError",
    "SchemaVersionMismatch",
    "RegionNotFoundError",
    "ConditionEvaluationError",
    "AnalysisError",
]
