"""
RiskPilot Engine

Core services for regulatory-risk analysis.

Services:
- RiskAnalysisEngine: Facade producing a RiskAnalysisResult per request
- RiskScorer: Five score calculators and the risk aggregator
- RegulationMatcher: Match jurisdictions to catalog regulations
- RequirementResolver: Select mandatory obligation sets
- RecommendationBuilder: Build the remediation plan
- ReferenceResolver: Attach official sources and authorities
- ConditionEvaluator: Evaluate rule guards

Usage:
    from riskpilot.engine import RiskAnalysisEngine
    from riskpilot.packs import load_knowledge_base

    engine = RiskAnalysisEngine.from_knowledge_base(load_knowledge_base())
    result = engine.analyze(request)
"""
from __future__ import annotations

from .condition_evaluator import (
    OPERATORS,
    ConditionEvaluator,
    check_condition,
    compare_values,
    evaluate_condition,
    resolve_field,
)
from .normalization import (
    catalog_key,
    data_type_key,
    jurisdiction_score_key,
)
from .scoring import (
    RiskScorer,
    ScoreResult,
    transparency_level,
)
from .regulation_matcher import (
    DEFAULT_PENALTIES,
    RegulationMatcher,
    extract_penalties,
    high_risk_use_cases,
)
from .requirement_resolver import RequirementResolver
from .recommendation_builder import RecommendationBuilder
from .timeline_estimator import (
    BUCKET_DESCRIPTIONS,
    classify_timeline,
    estimate_timeline,
)
from .reference_resolver import ReferenceResolver
from .analysis_engine import (
    RiskAnalysisEngine,
    analyze,
    get_default_engine,
)

__all__ = [
    # Conditions
    "OPERATORS",
    "ConditionEvaluator",
    "check_condition",
    "compare_values",
    "evaluate_condition",
    "resolve_field",
    # Canonicalization
    "catalog_key",
    "data_type_key",
    "jurisdiction_score_key",
    # Scoring
    "RiskScorer",
    "ScoreResult",
    "transparency_level",
    # Regulations
    "DEFAULT_PENALTIES",
    "RegulationMatcher",
    "extract_penalties",
    "high_risk_use_cases",
    # Rules
    "RequirementResolver",
    "RecommendationBuilder",
    # Timeline
    "BUCKET_DESCRIPTIONS",
    "classify_timeline",
    "estimate_timeline",
    # References
    "ReferenceResolver",
    # Facade
    "RiskAnalysisEngine",
    "analyze",
    "get_default_engine",
]
