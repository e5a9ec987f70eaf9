"""Request schemas for the API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """Description of an AI use case to assess."""
    use_case_category: Optional[str] = Field(
        default=None,
        alias="useCaseCategory",
        description="Use case, e.g., 'credit-scoring'",
    )
    jurisdictions: list[str] = Field(..., description="Jurisdictions, e.g., ['EU', 'USA']")
    data_types: list[str] = Field(
        ...,
        alias="dataTypes",
        description="Data categories, e.g., ['financial_data']",
    )
    decision_impact: Optional[str] = Field(
        default=None,
        alias="decisionImpact",
        description="Decision impact, e.g., 'significant-economic'",
    )
    has_human_oversight: bool = Field(
        default=False,
        alias="hasHumanOversight",
        description="A human reviews the system's decisions",
    )
    is_transparent: bool = Field(
        default=False,
        alias="isTransparent",
        description="Affected people are told how the system decides",
    )
    industry: Optional[str] = Field(default=None, description="Industry, e.g., 'financial-services'")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "useCaseCategory": "credit-scoring",
                    "jurisdictions": ["EU"],
                    "dataTypes": ["financial_data"],
                    "decisionImpact": "significant-economic",
                    "hasHumanOversight": False,
                    "isTransparent": False,
                    "industry": "financial-services",
                }
            ]
        },
    )


class SearchRequest(BaseModel):
    """Free-text search over the regulatory catalog."""
    query: str = Field(..., description="Text to look for, e.g., 'biometric'")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"query": "biometric"},
            ]
        }
    }
