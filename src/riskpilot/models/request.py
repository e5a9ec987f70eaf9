"""
RiskPilot Request Models

- AnalysisRequest: the caller-supplied description of an AI use case
- AnalysisContext: the flat view of a request (plus derived facts such as
  the risk tier) that rule guards are evaluated against
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


# camelCase keys sent by the web client -> field names
_REQUEST_ALIASES = {
    "useCaseCategory": "use_case_category",
    "jurisdictions": "jurisdictions",
    "dataTypes": "data_types",
    "decisionImpact": "decision_impact",
    "hasHumanOversight": "has_human_oversight",
    "isTransparent": "is_transparent",
    "industry": "industry",
}

_LIST_FIELDS = ("jurisdictions", "data_types")


@dataclass(frozen=True)
class AnalysisRequest:
    """
    Description of an AI use case to assess.

    Enumerated fields are plain strings: values the framework does not
    know degrade to documented defaults instead of failing.

    Attributes:
        use_case_category: e.g. "credit-scoring"
        jurisdictions: e.g. ("EU", "USA")
        data_types: e.g. ("financial_data",)
        decision_impact: e.g. "significant-economic"
        has_human_oversight: Whether a human reviews decisions
        is_transparent: Whether users are told how the system decides
        industry: e.g. "financial-services" (optional)
    """
    use_case_category: Optional[str]
    jurisdictions: tuple[str, ...]
    data_types: tuple[str, ...]
    decision_impact: Optional[str] = None
    has_human_oversight: bool = False
    is_transparent: bool = False
    industry: Optional[str] = None

    def __post_init__(self) -> None:
        for name in _LIST_FIELDS:
            value = getattr(self, name)
            if value is None or isinstance(value, (str, bytes)):
                raise ValueError(f"'{name}' must be a list of strings, got {value!r}")
            items = tuple(value)
            for item in items:
                if not isinstance(item, str):
                    raise ValueError(f"'{name}' entries must be strings, got {item!r}")
            object.__setattr__(self, name, items)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> AnalysisRequest:
        """
        Build a request from a JSON payload.

        Accepts camelCase keys (useCaseCategory, dataTypes, ...) as well
        as the snake_case field names. Unknown keys are ignored.

        Raises:
            ValueError: If a list field is absent or not a list
        """
        values: dict[str, Any] = {}
        for key, value in payload.items():
            name = _REQUEST_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = value

        for name in _LIST_FIELDS:
            if name not in values:
                raise ValueError(f"Request is missing required field '{name}'")

        return cls(
            use_case_category=values.get("use_case_category"),
            jurisdictions=values["jurisdictions"],
            data_types=values["data_types"],
            decision_impact=values.get("decision_impact"),
            has_human_oversight=bool(values.get("has_human_oversight", False)),
            is_transparent=bool(values.get("is_transparent", False)),
            industry=values.get("industry"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the client's camelCase keys."""
        return {
            "useCaseCategory": self.use_case_category,
            "jurisdictions": list(self.jurisdictions),
            "dataTypes": list(self.data_types),
            "decisionImpact": self.decision_impact,
            "hasHumanOversight": self.has_human_oversight,
            "isTransparent": self.is_transparent,
            "industry": self.industry,
        }


@dataclass(frozen=True)
class AnalysisContext:
    """
    Fields visible to rule guards.

    Built after scoring and regulation matching, so recommendation rules
    can test the risk level and the matched regulations' jurisdictions.
    """
    use_case_category: Optional[str]
    jurisdictions: tuple[str, ...]
    data_types: tuple[str, ...]
    decision_impact: Optional[str]
    has_human_oversight: bool
    is_transparent: bool
    industry: Optional[str]
    risk_level: Optional[str] = None
    regulation_jurisdictions: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_request(
        cls,
        request: AnalysisRequest,
        risk_level: Optional[str] = None,
        regulation_jurisdictions: tuple[str, ...] = (),
    ) -> AnalysisContext:
        return cls(
            use_case_category=request.use_case_category,
            jurisdictions=request.jurisdictions,
            data_types=request.data_types,
            decision_impact=request.decision_impact,
            has_human_oversight=request.has_human_oversight,
            is_transparent=request.is_transparent,
            industry=request.industry,
            risk_level=risk_level,
            regulation_jurisdictions=tuple(regulation_jurisdictions),
        )
