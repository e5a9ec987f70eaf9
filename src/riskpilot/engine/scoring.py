"""
RiskPilot Risk Scoring

The five score calculators and the risk aggregator.

Calculators are total: every input, including unknown or missing values,
maps to a score in [0, 100] using the framework's declared defaults.
Multi-valued dimensions (jurisdictions, data types) take the worst case.

The aggregate is the weight-averaged sum of the components. It is
computed in integer hundredths so that half-up rounding at tier
boundaries is exact.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import (
    AnalysisRequest,
    ComponentScores,
    RiskFramework,
    RiskLevel,
    ScoringFactor,
    ScoringTable,
    TransparencyLevel,
)
from .normalization import data_type_key, jurisdiction_score_key


logger = logging.getLogger(__name__)


def transparency_level(has_human_oversight: bool, is_transparent: bool) -> TransparencyLevel:
    """Oversight x transparency decision table."""
    if has_human_oversight and is_transparent:
        return TransparencyLevel.FULL
    if is_transparent:
        return TransparencyLevel.SUBSTANTIAL
    if has_human_oversight:
        return TransparencyLevel.BASIC
    return TransparencyLevel.OPAQUE


def _member_score(table: ScoringTable, value: Optional[str]) -> int:
    category = table.category_for_member(value) if value is not None else None
    return category.score if category is not None else table.fallback_score


def _max_keyed_score(table: ScoringTable, keys: Iterable[str]) -> int:
    matched = [s for s in (table.score_for(k) for k in keys) if s is not None]
    return max(matched) if matched else table.fallback_score


@dataclass(frozen=True)
class ScoreResult:
    """
    Output of the risk aggregator.

    Attributes:
        breakdown: The five component scores
        raw_score: Weighted total before rounding
        risk_score: Weighted total rounded half-up
        level: Tier selected from risk_score
    """
    breakdown: ComponentScores
    raw_score: float
    risk_score: int
    level: RiskLevel


@dataclass(frozen=True)
class RiskScorer:
    """
    Scores requests against a risk framework.

    Usage:
        scorer = RiskScorer(framework)
        result = scorer.score(request)
        print(result.risk_score, result.level.label)
    """
    framework: RiskFramework

    # -------------------------------------------------------------------------
    # Component calculators
    # -------------------------------------------------------------------------

    def use_case_score(self, use_case_category: Optional[str]) -> int:
        """Score of the use-case bucket owning the category; moderate by default."""
        return _member_score(self.framework.table(ScoringFactor.USE_CASE_RISK), use_case_category)

    def jurisdiction_score(self, jurisdictions: Iterable[str]) -> int:
        """Highest score among recognized jurisdictions, else the default."""
        table = self.framework.table(ScoringFactor.JURISDICTION_RISK)
        return _max_keyed_score(table, (jurisdiction_score_key(j) for j in jurisdictions))

    def data_score(self, data_types: Iterable[str]) -> int:
        """Highest score among recognized data types, else the default."""
        table = self.framework.table(ScoringFactor.DATA_SENSITIVITY)
        return _max_keyed_score(table, (data_type_key(d) for d in data_types))

    def impact_score(self, decision_impact: Optional[str]) -> int:
        """Score of the impact category owning the value; limited impact by default."""
        return _member_score(self.framework.table(ScoringFactor.DECISION_IMPACT), decision_impact)

    def transparency_score(self, has_human_oversight: bool, is_transparent: bool) -> int:
        """Score of the oversight x transparency outcome."""
        table = self.framework.table(ScoringFactor.TRANSPARENCY_LEVEL)
        level = transparency_level(has_human_oversight, is_transparent)
        score = table.score_for(level.value)
        return score if score is not None else table.fallback_score

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def component_scores(self, request: AnalysisRequest) -> ComponentScores:
        return ComponentScores(
            use_case_score=self.use_case_score(request.use_case_category),
            jurisdiction_score=self.jurisdiction_score(request.jurisdictions),
            data_score=self.data_score(request.data_types),
            impact_score=self.impact_score(request.decision_impact),
            transparency_score=self.transparency_score(
                request.has_human_oversight, request.is_transparent
            ),
        )

    def aggregate(self, breakdown: ComponentScores) -> ScoreResult:
        """Weight the components, round half-up and pick the tier."""
        pairs = (
            (breakdown.use_case_score, ScoringFactor.USE_CASE_RISK),
            (breakdown.jurisdiction_score, ScoringFactor.JURISDICTION_RISK),
            (breakdown.data_score, ScoringFactor.DATA_SENSITIVITY),
            (breakdown.impact_score, ScoringFactor.DECISION_IMPACT),
            (breakdown.transparency_score, ScoringFactor.TRANSPARENCY_LEVEL),
        )
        # Total in hundredths of a point
        hundredths = sum(score * self.framework.weight(factor) for score, factor in pairs)
        risk_score = (hundredths + 50) // 100
        level = self.framework.level_for(risk_score)

        logger.debug(
            "Aggregated score %.2f -> %d (%s)", hundredths / 100, risk_score, level.label
        )
        return ScoreResult(
            breakdown=breakdown,
            raw_score=hundredths / 100,
            risk_score=risk_score,
            level=level,
        )

    def score(self, request: AnalysisRequest) -> ScoreResult:
        return self.aggregate(self.component_scores(request))
