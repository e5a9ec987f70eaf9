"""
RiskPilot Enumerations

All enumeration types used throughout the RiskPilot system.
Organized by domain area for clarity.

All enums inherit from (str, Enum) for JSON serialization compatibility.

Request fields are carried as plain strings so that unknown values can
degrade to framework defaults; the enums below list the values the
knowledge bases are written against.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Request Vocabulary
# =============================================================================

class UseCaseCategory(str, Enum):
    """Functional purpose of the AI system being assessed."""
    CREDIT_SCORING = "credit-scoring"
    EMPLOYMENT_DECISIONS = "employment-decisions"
    EDUCATION_ASSESSMENT = "education-assessment"
    LAW_ENFORCEMENT = "law-enforcement"
    CRITICAL_INFRASTRUCTURE = "critical-infrastructure"
    HEALTHCARE_DIAGNOSIS = "healthcare-diagnosis"
    INSURANCE_UNDERWRITING = "insurance-underwriting"
    CONTENT_MODERATION = "content-moderation"
    CUSTOMER_SERVICE = "customer-service"
    MARKETING = "marketing"
    RECOMMENDATION_SYSTEM = "recommendation-system"
    BUSINESS_AUTOMATION = "business-automation"
    SPAM_FILTER = "spam-filter"
    GAMING = "gaming"
    RESEARCH_TOOL = "research-tool"


class Jurisdiction(str, Enum):
    """Jurisdictions offered to callers."""
    EU = "EU"
    USA = "USA"
    CALIFORNIA = "California"
    UK = "UK"
    CHINA = "China"
    CANADA = "Canada"
    SINGAPORE = "Singapore"
    AUSTRALIA = "Australia"
    JAPAN = "Japan"
    SOUTH_KOREA = "South_Korea"
    BRAZIL = "Brazil"
    INDIA = "India"


class DataType(str, Enum):
    """Categories of data processed by the AI system."""
    SPECIAL_CATEGORY_BIOMETRIC = "special_category_biometric"
    SPECIAL_CATEGORY_HEALTH = "special_category_health"
    SPECIAL_CATEGORY_OTHER = "special_category_other"
    CHILDREN_DATA = "children_data"
    FINANCIAL_DATA = "financial_data"
    BEHAVIORAL_PROFILES = "behavioral_profiles"
    PERSONAL_IDENTIFIABLE = "personal_identifiable"
    BUSINESS_DATA_ONLY = "business_data_only"
    ANONYMIZED_AGGREGATED = "anonymized_aggregated"


class DecisionImpact(str, Enum):
    """Severity of the decisions the system makes about individuals."""
    LIFE_SAFETY = "life-safety"
    LEGAL_RIGHTS = "legal-rights"
    SIGNIFICANT_ECONOMIC = "significant-economic"
    MODERATE_ECONOMIC = "moderate-economic"
    LIMITED_IMPACT = "limited-impact"
    NO_IMPACT = "no-impact"


class Industry(str, Enum):
    """Industry sector of the deploying organization."""
    FINANCIAL_SERVICES = "financial-services"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    GOVERNMENT = "government"
    RETAIL = "retail"
    TECHNOLOGY = "technology"
    MANUFACTURING = "manufacturing"
    TRANSPORTATION = "transportation"
    TELECOMMUNICATIONS = "telecommunications"
    OTHER = "other"


# =============================================================================
# Scoring
# =============================================================================

class ScoringFactor(str, Enum):
    """The five weighted dimensions of the risk score."""
    USE_CASE_RISK = "use_case_risk"
    JURISDICTION_RISK = "jurisdiction_risk"
    DATA_SENSITIVITY = "data_sensitivity"
    DECISION_IMPACT = "decision_impact"
    TRANSPARENCY_LEVEL = "transparency_level"


class TransparencyLevel(str, Enum):
    """Outcomes of the oversight x transparency decision table."""
    FULL = "full_transparency"            # oversight and transparency
    SUBSTANTIAL = "substantial_transparency"  # transparency only
    BASIC = "basic_transparency"          # oversight only
    OPAQUE = "opaque"                     # neither


class RiskTier(str, Enum):
    """Discrete risk tiers, highest first."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def framework_key(self) -> str:
        """Key of this tier under the framework's risk_levels."""
        return self.name.lower()


# =============================================================================
# Recommendations and Timeline
# =============================================================================

class Priority(str, Enum):
    """Priority of a recommendation block."""
    IMMEDIATE = "IMMEDIATE"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class TimelineHorizon(str, Enum):
    """Buckets of the compliance timeline."""
    IMMEDIATE = "immediate"
    SHORT_TERM = "shortTerm"
    MEDIUM_TERM = "mediumTerm"
    ONGOING = "ongoing"


# =============================================================================
# Condition Operators
# =============================================================================

class ConditionOperator(str, Enum):
    """Operators for rule conditions."""
    # Logical
    AND = "and"
    OR = "or"
    NOT = "not"

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"

    # Membership
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"
    ANY_CONTAINS = "any_contains"  # some list element has a substring

    # Null checks
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"


LOGICAL_OPERATORS = frozenset({
    ConditionOperator.AND,
    ConditionOperator.OR,
    ConditionOperator.NOT,
})
