"""
RiskPilot Recommendation Builder

Builds the prioritized remediation plan from the recommendation rules of
the rulebook.

Rules are evaluated in rulebook order against the analysis context (the
request plus the risk tier and the names of the matched regulations'
jurisdictions). Each rule whose guard holds emits one block; blocks are
never merged or deduplicated, so the plan order is the rule order.

A rule may carry priority overrides: the first override whose guard
holds replaces the rule's default priority.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..models import (
    AnalysisContext,
    Priority,
    Recommendation,
    RecommendationRule,
)
from .condition_evaluator import ConditionEvaluator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationBuilder:
    """
    Builds recommendation blocks for an analysis context.

    Usage:
        builder = RecommendationBuilder(rulebook.recommendation_rules)
        recommendations = builder.build(context)
    """
    rules: Sequence[RecommendationRule]

    def build(self, context: AnalysisContext) -> tuple[Recommendation, ...]:
        evaluator = ConditionEvaluator()
        recommendations: list[Recommendation] = []

        for rule in self.rules:
            if not evaluator.guard_holds(rule.applies_when, context):
                continue
            priority = self._priority(rule, context, evaluator)
            logger.debug("Recommendation rule %s fired (%s)", rule.id, priority.value)
            recommendations.append(
                Recommendation(
                    priority=priority,
                    category=rule.category,
                    action=rule.action,
                    rationale=rule.rationale,
                    timeline=rule.timeline,
                    items_key=rule.items_key,
                    items=rule.items,
                    rule_id=rule.id,
                )
            )

        return tuple(recommendations)

    def _priority(
        self,
        rule: RecommendationRule,
        context: AnalysisContext,
        evaluator: ConditionEvaluator,
    ) -> Priority:
        for override in rule.priority_overrides:
            if evaluator.is_satisfied(override.applies_when, context):
                return override.priority
        return rule.priority
