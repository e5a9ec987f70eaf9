"""
RiskPilot Knowledge Base Packs

Schema validation and loading for the knowledge base documents.

The knowledge base is a directory of YAML or JSON files: the regulatory
catalog, the risk framework and the rulebook of compliance and
recommendation rules. A copy ships inside the package.

Usage:
    from riskpilot.packs import load_knowledge_base, KnowledgeBaseLoader

    # Load the bundled knowledge base
    kb = load_knowledge_base()

    # Load a custom directory without the weight-sum check
    loader = KnowledgeBaseLoader(strict_weights=False)
    kb = loader.load_directory("path/to/knowledge_base")
"""
from __future__ import annotations

from .loader import (
    DEFAULT_KNOWLEDGE_BASE_DIR,
    KnowledgeBase,
    KnowledgeBaseLoader,
    load_default_rulebook,
    load_knowledge_base,
    load_rulebook_from_string,
    validate_catalog_integrity,
    validate_framework_integrity,
    validate_rulebook_integrity,
)
from .schema import (
    SCHEMA_VERSION,
    ConditionSchema,
    FrameworkDocumentSchema,
    RegulationsDocumentSchema,
    RulebookDocumentSchema,
    check_schema_version,
    validate_framework,
    validate_regulations,
    validate_rulebook,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "DEFAULT_KNOWLEDGE_BASE_DIR",
    "KnowledgeBase",
    "KnowledgeBaseLoader",
    "load_knowledge_base",
    "load_default_rulebook",
    "load_rulebook_from_string",
    # Integrity
    "validate_catalog_integrity",
    "validate_framework_integrity",
    "validate_rulebook_integrity",
    # Validation
    "validate_regulations",
    "validate_framework",
    "validate_rulebook",
    "check_schema_version",
    # Schemas (for advanced usage)
    "ConditionSchema",
    "RegulationsDocumentSchema",
    "FrameworkDocumentSchema",
    "RulebookDocumentSchema",
]
