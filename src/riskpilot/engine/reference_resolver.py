"""
RiskPilot Reference Resolver

Attaches citations to matched regulations from the rulebook's static
reference tables: official sources and guidance by regulation id, and
the supervising authority by jurisdiction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import ApplicableRegulation, ReferenceTables, RegulatoryReference


@dataclass(frozen=True)
class ReferenceResolver:
    """
    Resolves regulatory references.

    Authorities are looked up case-insensitively by jurisdiction code
    first, then by jurisdiction display name.
    """
    tables: ReferenceTables

    def official_sources(self, regulation_id: str) -> tuple[str, ...]:
        return tuple(
            self.tables.official_sources.get(regulation_id, (self.tables.default_official_source,))
        )

    def guidance_documents(self, regulation_id: str) -> tuple[str, ...]:
        return tuple(
            self.tables.guidance_documents.get(regulation_id, (self.tables.default_guidance,))
        )

    def regulatory_authority(self, code: Optional[str], name: Optional[str] = None) -> str:
        authorities = {key.upper(): value for key, value in self.tables.authorities.items()}
        for key in (code, name):
            if key and key.upper() in authorities:
                return authorities[key.upper()]
        return self.tables.default_authority

    def resolve(self, regulations: Iterable[ApplicableRegulation]) -> tuple[RegulatoryReference, ...]:
        return tuple(
            RegulatoryReference(
                regulation=reg.regulation_name,
                jurisdiction=reg.jurisdiction,
                official_sources=self.official_sources(reg.regulation_id),
                guidance_documents=self.guidance_documents(reg.regulation_id),
                regulatory_authority=self.regulatory_authority(
                    reg.jurisdiction_code, reg.jurisdiction
                ),
            )
            for reg in regulations
        )
