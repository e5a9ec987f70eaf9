"""
RiskPilot Exception Hierarchy

Domain-specific exceptions for AI regulatory risk analysis.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: RP_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RiskPilotError(Exception):
    """
    Base exception for all RiskPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (RP_*)
        details: Additional context about the error
        source: Knowledge base file or request the error relates to
    """
    message: str
    code: str = "RP_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.source:
            parts.append(f"(source: {self.source})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.source:
            result["source"] = self.source
        return result


# =============================================================================
# Knowledge Base Errors
# =============================================================================

@dataclass
class KnowledgeBaseLoadError(RiskPilotError):
    """Failed to read a knowledge base file."""
    code: str = "RP_KB_LOAD_ERROR"


@dataclass
class KnowledgeBaseValidationError(RiskPilotError):
    """Knowledge base failed schema or integrity validation."""
    code: str = "RP_KB_VALIDATION_ERROR"


@dataclass
class SchemaVersionMismatch(RiskPilotError):
    """Knowledge base schema version is not supported."""
    code: str = "RP_KB_VERSION_MISMATCH"


@dataclass
class RegionNotFoundError(RiskPilotError):
    """Requested region is not in the regulatory catalog."""
    code: str = "RP_REGION_NOT_FOUND"


# =============================================================================
# Rule Evaluation Errors
# =============================================================================

@dataclass
class ConditionEvaluationError(RiskPilotError):
    """Rule condition evaluation failed."""
    code: str = "RP_CONDITION_EVAL_ERROR"


# =============================================================================
# Analysis Errors
# =============================================================================

@dataclass
class AnalysisError(RiskPilotError):
    """Risk analysis failed for a request."""
    code: str = "RP_ANALYSIS_FAILED"
