"""
RiskPilot Knowledge Base Schemas

Pydantic models for validating the three knowledge base documents:
- regulations.yaml   -> RegulationsDocumentSchema
- risk_framework.yaml -> FrameworkDocumentSchema
- rulebook.yaml      -> RulebookDocumentSchema

These schemas define the on-disk structure. They map to the domain
models in riskpilot.models.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

from datetime import date
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

ScoringFactorValue = Literal[
    "use_case_risk", "jurisdiction_risk", "data_sensitivity",
    "decision_impact", "transparency_level",
]

RiskTierLabel = Literal["Critical", "High", "Medium", "Low"]

PriorityValue = Literal["IMMEDIATE", "HIGH", "MEDIUM", "LOW"]

ConditionOperatorValue = Literal[
    "and", "or", "not",
    "eq", "ne", "gt", "lt", "gte", "lte",
    "in", "not_in", "contains", "any_contains",
    "is_null", "is_not_null", "is_empty", "is_not_empty",
]


def _date_to_str(value: Any) -> Any:
    # Unquoted YAML dates arrive as datetime.date
    if isinstance(value, date):
        return value.isoformat()
    return value


# =============================================================================
# Condition Schema
# =============================================================================

class ConditionSchema(BaseModel):
    """
    Schema for a composable rule guard.

    For logical operators (and, or, not), use children.
    For comparison operators, use field/value directly.
    """
    op: ConditionOperatorValue = Field(..., description="Operator")

    # For logical composition
    children: Optional[list["ConditionSchema"]] = Field(
        None, description="Child conditions for AND/OR/NOT"
    )

    # For leaf predicates
    field: Optional[str] = Field(None, description="Analysis context field")
    value: Optional[Any] = Field(None, description="Value for comparison")

    # Metadata
    id: Optional[str] = Field(None, description="Condition ID")
    description: Optional[str] = Field(None, description="Human-readable description")

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def validate_structure(self) -> "ConditionSchema":
        """Validate condition structure based on operator type."""
        logical_ops = {"and", "or", "not"}

        if self.op in logical_ops:
            if not self.children:
                raise ValueError(f"Logical operator '{self.op}' requires 'children'")
            if self.op == "not" and len(self.children) != 1:
                raise ValueError("NOT operator must have exactly one child")
            if self.field is not None:
                raise ValueError(f"Logical operator '{self.op}' cannot have 'field'")
        else:
            if not self.field:
                raise ValueError(f"Comparison operator '{self.op}' requires 'field'")

        return self


# =============================================================================
# Regulatory Catalog Schemas
# =============================================================================

class RiskCategoryTierSchema(BaseModel):
    """Schema for one tier of a tiered regulation."""
    description: str = ""
    requirements: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)
    penalties: Optional[str] = None


class RegulationSchema(BaseModel):
    """Schema for a regulation record."""
    id: str = Field(..., description="Unique identifier (e.g., 'EU-AI-ACT-2024')")
    name: str = Field(..., description="Display name")
    status: str = Field("", description="Legislative status")
    effective_date: Optional[str] = Field(None, description="ISO date")
    full_compliance_date: Optional[str] = Field(None, description="ISO date")
    summary: str = ""
    risk_categories: dict[str, RiskCategoryTierSchema] = Field(
        default_factory=dict,
        description="Tier name -> tier (tiered regimes only)",
    )
    key_provisions: list[str] = Field(default_factory=list)
    ai_specific_requirements: list[str] = Field(default_factory=list)
    penalties: Optional[str] = None

    @field_validator("effective_date", "full_compliance_date", mode="before")
    @classmethod
    def coerce_dates(cls, v: Any) -> Any:
        return _date_to_str(v)


class RegionSchema(BaseModel):
    """Schema for a jurisdiction and its regulations."""
    name: str = Field(..., description="Display name (e.g., 'European Union')")
    primary_regulation: Optional[str] = None
    regulations: list[RegulationSchema] = Field(default_factory=list)


class RegulationsDocumentSchema(BaseModel):
    """Top-level schema for regulations.yaml."""
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    version: str = Field(..., description="Catalog version string")
    last_updated: Optional[str] = None
    description: Optional[str] = None
    regions: dict[str, RegionSchema] = Field(..., description="Code -> region")

    model_config = {"extra": "forbid"}

    @field_validator("last_updated", mode="before")
    @classmethod
    def coerce_last_updated(cls, v: Any) -> Any:
        return _date_to_str(v)

    @field_validator("regions")
    @classmethod
    def validate_region_codes(cls, v: dict[str, RegionSchema]) -> dict[str, RegionSchema]:
        for code in v:
            if code != code.upper():
                raise ValueError(f"Region code '{code}' must be upper case")
        return v


# =============================================================================
# Risk Framework Schemas
# =============================================================================

class ScoreCategorySchema(BaseModel):
    """Schema for one category of a scoring table."""
    score: int = Field(..., ge=0, le=100)
    description: str = ""
    members: list[str] = Field(default_factory=list)


class ScoringFactorSchema(BaseModel):
    """
    Schema for a weighted scoring factor.

    Categories may be given under `categories` or `scoring`; both are
    merged by the loader.
    """
    weight: int = Field(..., ge=0, le=100, description="Weight in percent")
    description: str = ""
    categories: dict[str, ScoreCategorySchema] = Field(default_factory=dict)
    scoring: dict[str, ScoreCategorySchema] = Field(default_factory=dict)
    default_category: Optional[str] = None
    default_score: Optional[int] = Field(None, ge=0, le=100)

    @model_validator(mode="after")
    def validate_table(self) -> "ScoringFactorSchema":
        overlap = set(self.categories) & set(self.scoring)
        if overlap:
            raise ValueError(f"Keys listed under both 'categories' and 'scoring': {sorted(overlap)}")
        if not self.categories and not self.scoring:
            raise ValueError("Scoring factor requires 'categories' or 'scoring'")
        if self.default_category is not None:
            if self.default_category not in self.categories and self.default_category not in self.scoring:
                raise ValueError(f"default_category '{self.default_category}' is not a category")
        return self


class RiskLevelSchema(BaseModel):
    """Schema for a risk tier."""
    label: RiskTierLabel
    min_score: int = Field(..., ge=0, le=100)
    description: str = ""
    actions: list[str] = Field(default_factory=list)


class RequirementRecordSchema(BaseModel):
    """Schema for one mandatory requirement."""
    requirement: str
    timeline: Optional[str] = None
    reference: Optional[str] = None


class ComplianceProgramSchema(BaseModel):
    """Schema for an entry of the compliance requirements matrix."""
    description: str = ""
    mandatory_requirements: list[RequirementRecordSchema] = Field(default_factory=list)


class FrameworkDocumentSchema(BaseModel):
    """Top-level schema for risk_framework.yaml."""
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    name: str
    version: str
    description: Optional[str] = None
    scoring_factors: dict[ScoringFactorValue, ScoringFactorSchema]
    risk_levels: dict[str, RiskLevelSchema]
    compliance_requirements_matrix: dict[str, ComplianceProgramSchema] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def validate_risk_level_keys(self) -> "FrameworkDocumentSchema":
        for key, level in self.risk_levels.items():
            if key != level.label.lower():
                raise ValueError(f"Risk level key '{key}' does not match label '{level.label}'")
        return self


# =============================================================================
# Rulebook Schemas
# =============================================================================

class ComplianceRuleSchema(BaseModel):
    """Schema for a compliance rule."""
    id: str
    category: str
    program: str = Field(..., description="Program id in the requirement matrix")
    description: str = ""
    mandatory: bool = True
    applies_when: Optional[ConditionSchema] = Field(None, description="Guard (None = always)")


class PriorityOverrideSchema(BaseModel):
    """Schema for a conditional priority."""
    priority: PriorityValue
    applies_when: ConditionSchema


class RecommendationRuleSchema(BaseModel):
    """Schema for a recommendation rule."""
    id: str
    priority: PriorityValue
    category: str
    action: str
    rationale: str
    timeline: Optional[str] = None
    items_key: Optional[str] = Field(None, description="Serialized name of the item list")
    items: list[str] = Field(default_factory=list)
    applies_when: Optional[ConditionSchema] = None
    priority_overrides: list[PriorityOverrideSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_items(self) -> "RecommendationRuleSchema":
        if self.items and not self.items_key:
            raise ValueError(f"Recommendation '{self.id}' lists items but no 'items_key'")
        return self


class ReferenceTablesSchema(BaseModel):
    """Schema for the static reference tables."""
    official_sources: dict[str, list[str]] = Field(default_factory=dict)
    guidance_documents: dict[str, list[str]] = Field(default_factory=dict)
    authorities: dict[str, str] = Field(default_factory=dict)
    default_official_source: Optional[str] = None
    default_guidance: Optional[str] = None
    default_authority: Optional[str] = None


class RulebookDocumentSchema(BaseModel):
    """Top-level schema for rulebook.yaml."""
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    version: str
    description: Optional[str] = None
    compliance_rules: list[ComplianceRuleSchema] = Field(default_factory=list)
    recommendation_rules: list[RecommendationRuleSchema] = Field(default_factory=list)
    references: ReferenceTablesSchema = Field(default_factory=ReferenceTablesSchema)

    model_config = {"extra": "forbid"}


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_regulations(data: dict[str, Any]) -> RegulationsDocumentSchema:
    """
    Validate a regulations dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return RegulationsDocumentSchema.model_validate(data)


def validate_framework(data: dict[str, Any]) -> FrameworkDocumentSchema:
    """
    Validate a risk framework dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return FrameworkDocumentSchema.model_validate(data)


def validate_rulebook(data: dict[str, Any]) -> RulebookDocumentSchema:
    """
    Validate a rulebook dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return RulebookDocumentSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """
    Check if a document's schema version is compatible.

    Args:
        data: Dictionary with schema_version field

    Returns:
        True if compatible, False otherwise
    """
    doc_version = str(data.get("schema_version", SCHEMA_VERSION))
    # Only the major version has to match
    doc_major = doc_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return doc_major == current_major
