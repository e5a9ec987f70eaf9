"""
RiskPilot Regulation Matcher

Intersects the requested jurisdictions with the regulatory catalog and
annotates each matched regulation with the provisions relevant to the
use case, a penalty summary and its compliance deadline.

Provision extraction is additive; one regulation may contribute several
blocks:
1. risk tier "high"    -> "High-Risk AI Requirements" (high-risk use cases only)
2. risk tier "limited" -> "Transparency Obligations"
3. key_provisions      -> "Data Protection Requirements"
4. ai_specific_requirements -> "AI-Specific Requirements"
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..models import (
    ApplicableRegulation,
    Provision,
    Region,
    Regulation,
    RegulatoryCatalog,
    RiskFramework,
    ScoringFactor,
)
from .normalization import catalog_key


logger = logging.getLogger(__name__)

HIGH_RISK_TIER = "high"
LIMITED_RISK_TIER = "limited"
HIGH_RISK_BUCKET = "high_risk"

HIGH_RISK_LABEL = "High-Risk AI Requirements"
TRANSPARENCY_LABEL = "Transparency Obligations"
DATA_PROTECTION_LABEL = "Data Protection Requirements"
AI_SPECIFIC_LABEL = "AI-Specific Requirements"

DEFAULT_PENALTIES = "Penalties vary based on violation severity"


def extract_penalties(regulation: Regulation) -> str:
    """
    Penalty summary for a regulation.

    The flat `penalties` field wins; otherwise the penalties of every risk
    tier joined with "; "; otherwise a generic statement.
    """
    if regulation.penalties:
        return regulation.penalties
    tier_penalties = [
        tier.penalties for tier in regulation.risk_categories.values() if tier.penalties
    ]
    if tier_penalties:
        return "; ".join(tier_penalties)
    return DEFAULT_PENALTIES


def high_risk_use_cases(framework: RiskFramework) -> frozenset[str]:
    """Use cases owned by the framework's high-risk bucket."""
    table = framework.table(ScoringFactor.USE_CASE_RISK)
    bucket = table.categories.get(HIGH_RISK_BUCKET)
    return frozenset(bucket.members) if bucket is not None else frozenset()


@dataclass(frozen=True)
class RegulationMatcher:
    """
    Matches requests to catalog regulations.

    Usage:
        matcher = RegulationMatcher.from_framework(catalog, framework)
        regulations = matcher.match(["EU", "USA"], "credit-scoring")
    """
    catalog: RegulatoryCatalog
    high_risk_use_cases: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_framework(
        cls,
        catalog: RegulatoryCatalog,
        framework: RiskFramework,
    ) -> RegulationMatcher:
        return cls(catalog=catalog, high_risk_use_cases=high_risk_use_cases(framework))

    def match(
        self,
        jurisdictions: Iterable[str],
        use_case_category: Optional[str],
    ) -> tuple[ApplicableRegulation, ...]:
        """
        Matched regulations in request order, then catalog order.

        Jurisdictions absent from the catalog contribute nothing.
        """
        matched: list[ApplicableRegulation] = []
        for jurisdiction in jurisdictions:
            region = self.catalog.get_region(catalog_key(jurisdiction))
            if region is None:
                logger.debug("No catalog region for jurisdiction %r", jurisdiction)
                continue
            for regulation in region.regulations:
                matched.append(self._annotate(region, regulation, use_case_category))
        return tuple(matched)

    def provisions(
        self,
        regulation: Regulation,
        use_case_category: Optional[str],
    ) -> tuple[Provision, ...]:
        """Provision blocks of a regulation relevant to a use case."""
        blocks: list[Provision] = []

        high = regulation.risk_categories.get(HIGH_RISK_TIER)
        if high is not None and use_case_category in self.high_risk_use_cases:
            blocks.append(Provision(HIGH_RISK_LABEL, high.requirements, high.penalties))

        limited = regulation.risk_categories.get(LIMITED_RISK_TIER)
        if limited is not None:
            blocks.append(Provision(TRANSPARENCY_LABEL, limited.requirements, limited.penalties))

        if regulation.key_provisions:
            blocks.append(Provision(DATA_PROTECTION_LABEL, regulation.key_provisions))

        if regulation.ai_specific_requirements:
            blocks.append(Provision(AI_SPECIFIC_LABEL, regulation.ai_specific_requirements))

        return tuple(blocks)

    def _annotate(
        self,
        region: Region,
        regulation: Regulation,
        use_case_category: Optional[str],
    ) -> ApplicableRegulation:
        return ApplicableRegulation(
            jurisdiction=region.name,
            jurisdiction_code=region.code,
            regulation_id=regulation.id,
            regulation_name=regulation.name,
            status=regulation.status,
            effective_date=regulation.effective_date,
            summary=regulation.summary,
            key_provisions=self.provisions(regulation, use_case_category),
            penalties=extract_penalties(regulation),
            compliance_deadline=regulation.compliance_deadline,
        )
