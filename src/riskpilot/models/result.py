"""
RiskPilot Result Models

The structured assessment returned by the analysis engine. Every model
serializes to the camelCase JSON shape consumed by the web client via
`to_dict()`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import Priority, RiskTier, TimelineHorizon
from .framework import RequirementRecord


# =============================================================================
# Scores
# =============================================================================

@dataclass(frozen=True)
class ComponentScores:
    """The five component scores, each 0-100."""
    use_case_score: int
    jurisdiction_score: int
    data_score: int
    impact_score: int
    transparency_score: int

    def to_dict(self) -> dict[str, int]:
        return {
            "useCaseScore": self.use_case_score,
            "jurisdictionScore": self.jurisdiction_score,
            "dataScore": self.data_score,
            "impactScore": self.impact_score,
            "transparencyScore": self.transparency_score,
        }


# =============================================================================
# Regulations
# =============================================================================

@dataclass(frozen=True)
class Provision:
    """A labelled block of requirements extracted from a regulation."""
    category: str
    requirements: tuple[str, ...]
    penalties: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "category": self.category,
            "requirements": list(self.requirements),
        }
        if self.penalties is not None:
            result["penalties"] = self.penalties
        return result


@dataclass(frozen=True)
class ApplicableRegulation:
    """
    A catalog regulation matched to one of the requested jurisdictions.

    Attributes:
        jurisdiction: Region display name (e.g., "European Union")
        jurisdiction_code: Region catalog code (e.g., "EU")
        regulation_id: Regulation id
        regulation_name: Regulation display name
        status: Legislative status
        effective_date: Effective date
        summary: Short summary
        key_provisions: Provisions relevant to the use case
        penalties: Penalty description
        compliance_deadline: Full-compliance date, else effective date
    """
    jurisdiction: str
    jurisdiction_code: str
    regulation_id: str
    regulation_name: str
    status: str
    effective_date: Optional[str]
    summary: str
    key_provisions: tuple[Provision, ...]
    penalties: str
    compliance_deadline: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "jurisdiction": self.jurisdiction,
            "jurisdictionCode": self.jurisdiction_code,
            "regulationId": self.regulation_id,
            "regulationName": self.regulation_name,
            "status": self.status,
            "effectiveDate": self.effective_date,
            "summary": self.summary,
            "keyProvisions": [p.to_dict() for p in self.key_provisions],
            "penalties": self.penalties,
            "complianceDeadline": self.compliance_deadline,
        }


# =============================================================================
# Requirements and Recommendations
# =============================================================================

@dataclass(frozen=True)
class ComplianceRequirement:
    """A mandatory obligation set selected from the requirement matrix."""
    category: str
    requirements: tuple[RequirementRecord, ...]
    mandatory: bool = True
    rule_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "mandatory": self.mandatory,
            "requirements": [r.to_dict() for r in self.requirements],
        }


@dataclass(frozen=True)
class Recommendation:
    """
    One block of the remediation plan.

    The checklist is serialized under `items_key` (e.g., "specificMeasures")
    so each block keeps its own vocabulary.
    """
    priority: Priority
    category: str
    action: str
    rationale: str
    timeline: Optional[str] = None
    items_key: Optional[str] = None
    items: tuple[str, ...] = ()
    rule_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "priority": self.priority.value,
            "category": self.category,
            "action": self.action,
            "rationale": self.rationale,
        }
        if self.timeline is not None:
            result["timeline"] = self.timeline
        if self.items_key is not None:
            result[self.items_key] = list(self.items)
        return result


# =============================================================================
# Timeline
# =============================================================================

@dataclass(frozen=True)
class TimelineBucket:
    """A phase of the compliance timeline."""
    horizon: TimelineHorizon
    description: str
    items: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"description": self.description, "items": list(self.items)}


@dataclass(frozen=True)
class ComplianceTimeline:
    """The four-phase timeline, always containing every bucket."""
    immediate: TimelineBucket
    short_term: TimelineBucket
    medium_term: TimelineBucket
    ongoing: TimelineBucket

    @property
    def buckets(self) -> tuple[TimelineBucket, ...]:
        return (self.immediate, self.short_term, self.medium_term, self.ongoing)

    def to_dict(self) -> dict[str, Any]:
        return {bucket.horizon.value: bucket.to_dict() for bucket in self.buckets}


# =============================================================================
# References
# =============================================================================

@dataclass(frozen=True)
class RegulatoryReference:
    """Citations and the supervising authority for a matched regulation."""
    regulation: str
    jurisdiction: str
    official_sources: tuple[str, ...]
    guidance_documents: tuple[str, ...]
    regulatory_authority: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "regulation": self.regulation,
            "jurisdiction": self.jurisdiction,
            "officialSources": list(self.official_sources),
            "guidanceDocuments": list(self.guidance_documents),
            "regulatoryAuthority": self.regulatory_authority,
        }


# =============================================================================
# Analysis Result
# =============================================================================

@dataclass(frozen=True)
class RiskAnalysisResult:
    """
    Complete regulatory-risk assessment for one request.

    Attributes:
        risk_score: Weighted total, rounded half-up
        risk_level: Tier chosen from the rounded score
        risk_description: Static description of the tier
        breakdown: The five component scores
        applicable_regulations: Matched regulations, in request order
        compliance_requirements: Mandatory obligation sets, in rule order
        recommendations: Remediation plan, in rule order
        next_steps: The tier's canned next-step actions
        estimated_compliance_timeline: Requirements bucketed by phase
        regulatory_references: Citations per matched regulation
        raw_score: Weighted total before rounding
    """
    risk_score: int
    risk_level: RiskTier
    risk_description: str
    breakdown: ComponentScores
    applicable_regulations: tuple[ApplicableRegulation, ...]
    compliance_requirements: tuple[ComplianceRequirement, ...]
    recommendations: tuple[Recommendation, ...]
    next_steps: tuple[str, ...]
    estimated_compliance_timeline: ComplianceTimeline
    regulatory_references: tuple[RegulatoryReference, ...]
    raw_score: float = field(default=0.0, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "riskDescription": self.risk_description,
            "breakdown": self.breakdown.to_dict(),
            "applicableRegulations": [r.to_dict() for r in self.applicable_regulations],
            "complianceRequirements": [r.to_dict() for r in self.compliance_requirements],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "nextSteps": list(self.next_steps),
            "estimatedComplianceTimeline": self.estimated_compliance_timeline.to_dict(),
            "regulatoryReferences": [r.to_dict() for r in self.regulatory_references],
        }
