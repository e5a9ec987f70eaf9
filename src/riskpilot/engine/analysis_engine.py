"""
RiskPilot Analysis Engine

Facade over the scoring, matching and rule components.

Key features:
- analyze(): request -> RiskAnalysisResult, pure for fixed knowledge bases
- Read-only accessors over the regulatory catalog and the framework
- Plain substring search over regulation documents

Control flow of an analysis:
    request -> score calculators -> aggregator
            -> regulation matcher + requirement resolver
            -> recommendation builder
            -> timeline estimator + reference resolver
"""
from __future__ import annotations

import copy
import json
import logging
import threading
from typing import Any, Mapping, Optional, Union

from ..exceptions import (
    AnalysisError,
    KnowledgeBaseValidationError,
    RegionNotFoundError,
)
from ..models import (
    AnalysisContext,
    AnalysisRequest,
    RegulatoryCatalog,
    RiskAnalysisResult,
    RiskFramework,
    Rulebook,
)
from ..packs import (
    KnowledgeBase,
    load_default_rulebook,
    load_knowledge_base,
    validate_rulebook_integrity,
)
from ..packs.loader import FRAMEWORK_STEM
from .recommendation_builder import RecommendationBuilder
from .reference_resolver import ReferenceResolver
from .regulation_matcher import RegulationMatcher
from .requirement_resolver import RequirementResolver
from .scoring import RiskScorer
from .timeline_estimator import estimate_timeline


logger = logging.getLogger(__name__)


class RiskAnalysisEngine:
    """
    Regulatory-risk analysis over immutable knowledge bases.

    The engine holds no per-request state and may be shared between
    threads.

    Usage:
        engine = RiskAnalysisEngine(catalog, framework)
        result = engine.analyze({
            "useCaseCategory": "credit-scoring",
            "jurisdictions": ["EU"],
            "dataTypes": ["financial_data"],
            "decisionImpact": "significant-economic",
        })
        print(result.risk_score, result.risk_level.value)
    """

    def __init__(
        self,
        catalog: RegulatoryCatalog,
        framework: RiskFramework,
        rulebook: Optional[Rulebook] = None,
        framework_source: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize the engine.

        Args:
            catalog: Regulatory catalog
            framework: Risk framework
            rulebook: Rule tables (the bundled rulebook when omitted)
            framework_source: Raw framework document served by
                framework_document() (rebuilt from `framework` when omitted)

        Raises:
            KnowledgeBaseValidationError: If the rulebook references
                programs missing from the framework
        """
        if rulebook is None:
            rulebook = load_default_rulebook(framework)
        else:
            try:
                validate_rulebook_integrity(rulebook, framework)
            except ValueError as e:
                raise KnowledgeBaseValidationError(
                    message="Rulebook does not match the risk framework",
                    details={"errors": str(e)},
                )

        self.catalog = catalog
        self.framework = framework
        self.rulebook = rulebook
        self._framework_source = (
            copy.deepcopy(dict(framework_source)) if framework_source is not None else None
        )

        self._scorer = RiskScorer(framework)
        self._matcher = RegulationMatcher.from_framework(catalog, framework)
        self._requirements = RequirementResolver(framework, rulebook.compliance_rules)
        self._recommendations = RecommendationBuilder(rulebook.recommendation_rules)
        self._references = ReferenceResolver(rulebook.references)

    @classmethod
    def from_knowledge_base(cls, kb: KnowledgeBase) -> RiskAnalysisEngine:
        return cls(
            kb.catalog,
            kb.framework,
            kb.rulebook,
            framework_source=kb.documents.get(FRAMEWORK_STEM),
        )

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze(self, request: Union[AnalysisRequest, Mapping[str, Any]]) -> RiskAnalysisResult:
        """
        Assess a request.

        Accepts an AnalysisRequest or a JSON-style mapping with camelCase
        keys. Unknown enumerated values fall back to framework defaults.

        Raises:
            AnalysisError: On any failure, with the underlying message
                in `details["error"]`
        """
        try:
            if not isinstance(request, AnalysisRequest):
                request = AnalysisRequest.from_dict(request)
            return self._analyze(request)
        except Exception as e:
            raise AnalysisError(
                message="Analysis failed",
                details={"error": str(e), "type": type(e).__name__},
            ) from e

    def _analyze(self, request: AnalysisRequest) -> RiskAnalysisResult:
        scores = self._scorer.score(request)

        regulations = self._matcher.match(request.jurisdictions, request.use_case_category)
        context = AnalysisContext.from_request(
            request,
            risk_level=scores.level.label,
            regulation_jurisdictions=tuple(reg.jurisdiction for reg in regulations),
        )
        requirements = self._requirements.resolve(context)
        recommendations = self._recommendations.build(context)

        logger.debug(
            "Analysis complete: score=%d level=%s regulations=%d requirements=%d recommendations=%d",
            scores.risk_score,
            scores.level.label,
            len(regulations),
            len(requirements),
            len(recommendations),
        )

        return RiskAnalysisResult(
            risk_score=scores.risk_score,
            risk_level=scores.level.tier,
            risk_description=scores.level.description,
            breakdown=scores.breakdown,
            applicable_regulations=regulations,
            compliance_requirements=requirements,
            recommendations=recommendations,
            next_steps=scores.level.actions,
            estimated_compliance_timeline=estimate_timeline(requirements),
            regulatory_references=self._references.resolve(regulations),
            raw_score=scores.raw_score,
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def get_region(self, code: str) -> dict[str, Any]:
        """
        Region document for a catalog code (case-insensitive).

        Raises:
            RegionNotFoundError: If the code is not in the catalog
        """
        region = self.catalog.get_region(code.upper())
        if region is None:
            raise RegionNotFoundError(
                message="Region not found",
                details={"region": code},
            )
        return region.to_dict()

    def list_regions(self) -> list[dict[str, Any]]:
        """Summary of every region in catalog order."""
        return [
            {
                "code": code,
                "name": region.name,
                "primaryRegulation": region.primary_regulation,
                "regulationCount": len(region.regulations),
            }
            for code, region in self.catalog.regions.items()
        ]

    def framework_document(self) -> dict[str, Any]:
        """The framework document as loaded, deep-copied per call."""
        if self._framework_source is not None:
            return copy.deepcopy(self._framework_source)
        return self.framework.to_dict()

    def search(self, query: str) -> list[dict[str, Any]]:
        """
        Regulations whose serialized document contains `query`.

        Case-insensitive substring match; results are in catalog order
        and unranked.
        """
        needle = query.lower()
        results = []
        for region in self.catalog.regions.values():
            for regulation in region.regulations:
                document = regulation.to_dict()
                if needle in json.dumps(document, ensure_ascii=False).lower():
                    results.append({
                        "type": "regulation",
                        "region": region.name,
                        "regulation": regulation.name,
                        "relevantContent": document,
                    })
        return results


# =============================================================================
# Default Engine (Module-Level Convenience)
# =============================================================================

_default_engine: Optional[RiskAnalysisEngine] = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> RiskAnalysisEngine:
    """Engine over the bundled knowledge base, built on first use."""
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = RiskAnalysisEngine.from_knowledge_base(
                    load_knowledge_base()
                )
    return _default_engine


def analyze(request: Union[AnalysisRequest, Mapping[str, Any]]) -> RiskAnalysisResult:
    """
    Analyze a request with the default engine.

    Convenience function for scripts and notebooks.
    """
    return get_default_engine().analyze(request)
