"""
RiskPilot Compliance Requirement Resolver

Selects mandatory obligation sets from the framework's requirement
matrix. Each compliance rule in the rulebook pairs a guard with a matrix
program; rules are evaluated independently in rulebook order and every
firing rule contributes one block.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..models import (
    AnalysisContext,
    ComplianceRequirement,
    ComplianceRule,
    RiskFramework,
)
from .condition_evaluator import ConditionEvaluator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequirementResolver:
    """
    Resolves compliance requirement blocks for an analysis context.

    Usage:
        resolver = RequirementResolver(framework, rulebook.compliance_rules)
        requirements = resolver.resolve(context)
    """
    framework: RiskFramework
    rules: Sequence[ComplianceRule]

    def resolve(self, context: AnalysisContext) -> tuple[ComplianceRequirement, ...]:
        evaluator = ConditionEvaluator()
        blocks: list[ComplianceRequirement] = []

        for rule in self.rules:
            if not evaluator.guard_holds(rule.applies_when, context):
                continue
            program = self.framework.program(rule.program)
            logger.debug("Compliance rule %s fired (program %s)", rule.id, rule.program)
            blocks.append(
                ComplianceRequirement(
                    category=rule.category,
                    requirements=program.mandatory_requirements,
                    mandatory=rule.mandatory,
                    rule_id=rule.id,
                )
            )

        return tuple(blocks)
