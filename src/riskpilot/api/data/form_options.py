"""
Form Options

Values and labels offered by the assessment form. Values come from the
request vocabulary enums; the `risk`, `sensitivity` and `severity` hints
are display labels only; scoring always comes from the risk framework.
"""
from riskpilot.models import (
    DataType,
    DecisionImpact,
    Industry,
    Jurisdiction,
    UseCaseCategory,
)


def _option(member, label, **hints):
    return {"value": member.value, "label": label, **hints}


USE_CASE_CATEGORIES = [
    _option(UseCaseCategory.CREDIT_SCORING, "Credit Scoring / Lending Decisions", risk="High"),
    _option(UseCaseCategory.EMPLOYMENT_DECISIONS, "Employment Screening / HR Decisions", risk="High"),
    _option(UseCaseCategory.EDUCATION_ASSESSMENT, "Educational Assessment / Admissions", risk="High"),
    _option(UseCaseCategory.LAW_ENFORCEMENT, "Law Enforcement / Criminal Justice", risk="High"),
    _option(UseCaseCategory.CRITICAL_INFRASTRUCTURE, "Critical Infrastructure (Energy, Transport, Water)", risk="High"),
    _option(UseCaseCategory.HEALTHCARE_DIAGNOSIS, "Healthcare Diagnosis / Treatment", risk="Significant"),
    _option(UseCaseCategory.INSURANCE_UNDERWRITING, "Insurance Underwriting", risk="Significant"),
    _option(UseCaseCategory.CONTENT_MODERATION, "Content Moderation", risk="Significant"),
    _option(UseCaseCategory.CUSTOMER_SERVICE, "Customer Service Chatbot", risk="Moderate"),
    _option(UseCaseCategory.MARKETING, "Marketing / Advertising", risk="Moderate"),
    _option(UseCaseCategory.RECOMMENDATION_SYSTEM, "Recommendation System", risk="Moderate"),
    _option(UseCaseCategory.BUSINESS_AUTOMATION, "Business Process Automation", risk="Moderate"),
    _option(UseCaseCategory.SPAM_FILTER, "Spam Filtering", risk="Low"),
    _option(UseCaseCategory.GAMING, "Video Game AI", risk="Low"),
    _option(UseCaseCategory.RESEARCH_TOOL, "Internal Research Tool", risk="Low"),
]

JURISDICTIONS = [
    _option(Jurisdiction.EU, "European Union", flag="\U0001F1EA\U0001F1FA"),
    _option(Jurisdiction.USA, "United States (Federal)", flag="\U0001F1FA\U0001F1F8"),
    _option(Jurisdiction.CALIFORNIA, "California, USA", flag="\U0001F1FA\U0001F1F8"),
    _option(Jurisdiction.UK, "United Kingdom", flag="\U0001F1EC\U0001F1E7"),
    _option(Jurisdiction.CHINA, "China", flag="\U0001F1E8\U0001F1F3"),
    _option(Jurisdiction.CANADA, "Canada", flag="\U0001F1E8\U0001F1E6"),
    _option(Jurisdiction.SINGAPORE, "Singapore", flag="\U0001F1F8\U0001F1EC"),
    _option(Jurisdiction.AUSTRALIA, "Australia", flag="\U0001F1E6\U0001F1FA"),
    _option(Jurisdiction.JAPAN, "Japan", flag="\U0001F1EF\U0001F1F5"),
    _option(Jurisdiction.SOUTH_KOREA, "South Korea", flag="\U0001F1F0\U0001F1F7"),
    _option(Jurisdiction.BRAZIL, "Brazil", flag="\U0001F1E7\U0001F1F7"),
    _option(Jurisdiction.INDIA, "India", flag="\U0001F1EE\U0001F1F3"),
]

DATA_TYPES = [
    _option(DataType.SPECIAL_CATEGORY_BIOMETRIC, "Biometric Data (for identification)", sensitivity="Critical"),
    _option(DataType.SPECIAL_CATEGORY_HEALTH, "Health / Medical Data", sensitivity="Critical"),
    _option(DataType.SPECIAL_CATEGORY_OTHER, "Race, Religion, Political Opinion, Sexual Orientation", sensitivity="Critical"),
    _option(DataType.CHILDREN_DATA, "Children's Data (under 13-16)", sensitivity="Critical"),
    _option(DataType.FINANCIAL_DATA, "Financial Data / Credit Information", sensitivity="High"),
    _option(DataType.BEHAVIORAL_PROFILES, "Behavioral Profiles / Preferences", sensitivity="Moderate"),
    _option(DataType.PERSONAL_IDENTIFIABLE, "Personal Identifiable Information", sensitivity="Moderate"),
    _option(DataType.BUSINESS_DATA_ONLY, "Business Data Only (non-personal)", sensitivity="Low"),
    _option(DataType.ANONYMIZED_AGGREGATED, "Anonymized / Aggregated Data", sensitivity="Minimal"),
]

DECISION_IMPACTS = [
    _option(DecisionImpact.LIFE_SAFETY, "Life or Safety Critical", severity="Critical"),
    _option(DecisionImpact.LEGAL_RIGHTS, "Legal Rights / Immigration / Justice", severity="Critical"),
    _option(DecisionImpact.SIGNIFICANT_ECONOMIC, "Major Economic Impact (loans, employment, housing)", severity="High"),
    _option(DecisionImpact.MODERATE_ECONOMIC, "Moderate Economic Impact (pricing, opportunities)", severity="Moderate"),
    _option(DecisionImpact.LIMITED_IMPACT, "Limited Impact (recommendations, rankings)", severity="Low"),
    _option(DecisionImpact.NO_IMPACT, "No Direct Individual Impact", severity="Minimal"),
]

INDUSTRIES = [
    _option(Industry.FINANCIAL_SERVICES, "Financial Services"),
    _option(Industry.HEALTHCARE, "Healthcare"),
    _option(Industry.EDUCATION, "Education"),
    _option(Industry.GOVERNMENT, "Government / Public Sector"),
    _option(Industry.RETAIL, "Retail / E-commerce"),
    _option(Industry.TECHNOLOGY, "Technology"),
    _option(Industry.MANUFACTURING, "Manufacturing"),
    _option(Industry.TRANSPORTATION, "Transportation"),
    _option(Industry.TELECOMMUNICATIONS, "Telecommunications"),
    _option(Industry.OTHER, "Other"),
]

FORM_OPTIONS = {
    "useCaseCategories": USE_CASE_CATEGORIES,
    "jurisdictions": JURISDICTIONS,
    "dataTypes": DATA_TYPES,
    "decisionImpacts": DECISION_IMPACTS,
    "industries": INDUSTRIES,
}
