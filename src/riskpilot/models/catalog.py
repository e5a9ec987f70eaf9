"""
RiskPilot Regulatory Catalog Models

Regulations grouped by jurisdiction. A Region holds an ordered list of
Regulation records; tiered regimes (such as the EU AI Act) carry a
`risk_categories` sub-tree, others carry flat provision lists.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class RiskCategoryTier:
    """One tier of a tiered regulation (e.g., EU AI Act "high")."""
    name: str
    description: str = ""
    requirements: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    penalties: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"description": self.description}
        if self.requirements:
            result["requirements"] = list(self.requirements)
        if self.examples:
            result["examples"] = list(self.examples)
        if self.penalties is not None:
            result["penalties"] = self.penalties
        return result


@dataclass(frozen=True)
class Regulation:
    """
    A regulation in the catalog.

    Attributes:
        id: Regulation id (e.g., "EU-AI-ACT-2024")
        name: Display name
        status: Legislative status (e.g., "In Force")
        effective_date: ISO date the regulation took effect
        full_compliance_date: ISO date full compliance is required
        summary: Short summary
        risk_categories: Tier name -> tier (tiered regimes only)
        key_provisions: Flat provision list
        ai_specific_requirements: Requirements specific to AI systems
        penalties: Flat penalty description
    """
    id: str
    name: str
    status: str = ""
    effective_date: Optional[str] = None
    full_compliance_date: Optional[str] = None
    summary: str = ""
    risk_categories: Mapping[str, RiskCategoryTier] = field(default_factory=dict)
    key_provisions: tuple[str, ...] = ()
    ai_specific_requirements: tuple[str, ...] = ()
    penalties: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "risk_categories", MappingProxyType(dict(self.risk_categories)))

    @property
    def is_tiered(self) -> bool:
        return bool(self.risk_categories)

    @property
    def compliance_deadline(self) -> Optional[str]:
        return self.full_compliance_date or self.effective_date

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the catalog document layout (empty fields omitted)."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "effective_date": self.effective_date,
        }
        if self.full_compliance_date is not None:
            result["full_compliance_date"] = self.full_compliance_date
        result["summary"] = self.summary
        if self.risk_categories:
            result["risk_categories"] = {
                name: tier.to_dict() for name, tier in self.risk_categories.items()
            }
        if self.key_provisions:
            result["key_provisions"] = list(self.key_provisions)
        if self.ai_specific_requirements:
            result["ai_specific_requirements"] = list(self.ai_specific_requirements)
        if self.penalties is not None:
            result["penalties"] = self.penalties
        return result


@dataclass(frozen=True)
class Region:
    """A jurisdiction and its regulations."""
    code: str
    name: str
    primary_regulation: Optional[str] = None
    regulations: tuple[Regulation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "primary_regulation": self.primary_regulation,
            "regulations": [reg.to_dict() for reg in self.regulations],
        }


@dataclass(frozen=True)
class RegulatoryCatalog:
    """All regions keyed by catalog code (e.g., "EU", "SOUTH_KOREA")."""
    version: str
    regions: Mapping[str, Region] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regions", MappingProxyType(dict(self.regions)))

    def get_region(self, code: str) -> Optional[Region]:
        return self.regions.get(code)

    @property
    def regulation_count(self) -> int:
        return sum(len(region.regulations) for region in self.regions.values())
