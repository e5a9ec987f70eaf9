"""
RiskPilot Knowledge Base Loader

Loads and validates the knowledge base documents from YAML or JSON files:
- regulations    -> RegulatoryCatalog
- risk_framework -> RiskFramework
- rulebook       -> Rulebook

Converts Pydantic schema models to RiskPilot domain models and checks
cross-reference integrity before anything reaches the engine.
"""
from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from ..exceptions import (
    KnowledgeBaseLoadError,
    KnowledgeBaseValidationError,
    SchemaVersionMismatch,
)
from ..models import (
    AnalysisContext,
    ComplianceProgram,
    ComplianceRule,
    Condition,
    ConditionOperator,
    LOGICAL_OPERATORS,
    Priority,
    PriorityOverride,
    RecommendationRule,
    ReferenceTables,
    Region,
    Regulation,
    RegulatoryCatalog,
    RequirementRecord,
    RiskCategoryTier,
    RiskFramework,
    RiskLevel,
    RiskTier,
    Rulebook,
    ScoreCategory,
    ScoringFactor,
    ScoringTable,
)
from .schema import (
    SCHEMA_VERSION,
    ComplianceProgramSchema,
    ComplianceRuleSchema,
    ConditionSchema,
    FrameworkDocumentSchema,
    RecommendationRuleSchema,
    ReferenceTablesSchema,
    RegionSchema,
    RegulationSchema,
    RegulationsDocumentSchema,
    RulebookDocumentSchema,
    ScoringFactorSchema,
    check_schema_version,
    validate_framework,
    validate_regulations,
    validate_rulebook,
)


logger = logging.getLogger(__name__)

DEFAULT_KNOWLEDGE_BASE_DIR = Path(__file__).resolve().parent.parent / "knowledge_base"

REGULATIONS_STEM = "regulations"
FRAMEWORK_STEM = "risk_framework"
RULEBOOK_STEM = "rulebook"

_SUFFIXES = (".yaml", ".yml", ".json")

_SchemaT = TypeVar("_SchemaT", bound=BaseModel)


# =============================================================================
# Reference Integrity Validation
# =============================================================================

def validate_framework_integrity(
    framework: RiskFramework,
    strict_weights: bool = True,
    path: str = "",
) -> None:
    """
    Validate the risk framework is internally consistent.

    Catches:
    - Missing scoring factors
    - Weights that do not sum to 100 (when strict_weights)
    - Missing or unordered risk tiers
    - Request values listed in more than one category

    Raises:
        ValueError: If integrity errors are found
    """
    errors = []

    missing = [f.value for f in ScoringFactor if f not in framework.factors]
    if missing:
        errors.append(f"Missing scoring factors: {missing}")

    if strict_weights and not missing and framework.total_weight != 100:
        errors.append(f"Scoring factor weights sum to {framework.total_weight}, expected 100")

    tiers = [level.tier for level in framework.risk_levels]
    for tier in RiskTier:
        if tier not in tiers:
            errors.append(f"Missing risk level: '{tier.framework_key}'")
    if len(tiers) == len(RiskTier) and len(set(tiers)) == len(tiers):
        # risk_levels is sorted by threshold; tier order must agree
        if tiers != list(RiskTier):
            errors.append(
                "Risk level thresholds are not ordered "
                f"critical > high > medium > low: {[t.value for t in tiers]}"
            )
        thresholds = [level.min_score for level in framework.risk_levels]
        if len(set(thresholds)) != len(thresholds):
            errors.append(f"Risk level thresholds must be distinct: {thresholds}")

    for table in framework.factors.values():
        owner: dict[str, str] = {}
        for category in table.categories.values():
            for member in category.members:
                if member in owner:
                    errors.append(
                        f"{table.factor.value}: '{member}' listed in both "
                        f"'{owner[member]}' and '{category.key}'"
                    )
                owner[member] = category.key

    if errors:
        path_str = f" in {path}" if path else ""
        raise ValueError(
            f"Reference integrity errors{path_str}:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


def validate_catalog_integrity(catalog: RegulatoryCatalog, path: str = "") -> None:
    """
    Validate the regulatory catalog is internally consistent.

    Catches:
    - Primary regulations that are not listed in their region
    - Duplicate regulation IDs

    Raises:
        ValueError: If integrity errors are found
    """
    errors = []
    seen: dict[str, str] = {}

    for code, region in catalog.regions.items():
        ids = [reg.id for reg in region.regulations]
        if region.primary_regulation and region.primary_regulation not in ids:
            errors.append(
                f"Region '{code}' primary regulation '{region.primary_regulation}' is not listed"
            )
        for reg_id in ids:
            if reg_id in seen:
                errors.append(f"Duplicate regulation ID: '{reg_id}' (regions {seen[reg_id]}, {code})")
            seen[reg_id] = code

    if errors:
        path_str = f" in {path}" if path else ""
        raise ValueError(
            f"Reference integrity errors{path_str}:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


def validate_rulebook_integrity(
    rulebook: Rulebook,
    framework: Optional[RiskFramework] = None,
    path: str = "",
) -> None:
    """
    Validate the rulebook against itself and the framework.

    Catches:
    - Duplicate rule IDs
    - Compliance rules naming programs missing from the requirement matrix
    - Guards referencing fields the analysis context does not carry

    Raises:
        ValueError: If integrity errors are found
    """
    errors = []
    context_fields = set(AnalysisContext.__dataclass_fields__)

    def check_fields(rule_id: str, condition: Optional[Condition]) -> None:
        if condition is None:
            return
        for name in sorted(set(condition.fields()) - context_fields):
            errors.append(f"Rule '{rule_id}' references unknown field '{name}'")

    seen: set[str] = set()
    for rule in rulebook.compliance_rules:
        if rule.id in seen:
            errors.append(f"Duplicate rule ID: '{rule.id}'")
        seen.add(rule.id)
        if framework is not None and rule.program not in framework.compliance_programs:
            errors.append(f"Compliance rule '{rule.id}' references non-existent program '{rule.program}'")
        check_fields(rule.id, rule.applies_when)

    for rule in rulebook.recommendation_rules:
        if rule.id in seen:
            errors.append(f"Duplicate rule ID: '{rule.id}'")
        seen.add(rule.id)
        check_fields(rule.id, rule.applies_when)
        for override in rule.priority_overrides:
            check_fields(rule.id, override.applies_when)

    if errors:
        path_str = f" in {path}" if path else ""
        raise ValueError(
            f"Reference integrity errors{path_str}:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_condition(schema: ConditionSchema) -> Condition:
    """Convert ConditionSchema to Condition model."""
    op = ConditionOperator(schema.op)
    if op in LOGICAL_OPERATORS:
        return Condition(
            op=op,
            children=tuple(_convert_condition(c) for c in schema.children or []),
            id=schema.id,
            description=schema.description,
        )

    value = schema.value
    if isinstance(value, list):
        value = tuple(value)
    return Condition(
        op=op,
        field=schema.field,
        value=value,
        id=schema.id,
        description=schema.description,
    )


def _convert_optional_condition(schema: Optional[ConditionSchema]) -> Optional[Condition]:
    return _convert_condition(schema) if schema is not None else None


def _convert_regulation(schema: RegulationSchema) -> Regulation:
    """Convert RegulationSchema to Regulation model."""
    return Regulation(
        id=schema.id,
        name=schema.name,
        status=schema.status,
        effective_date=schema.effective_date,
        full_compliance_date=schema.full_compliance_date,
        summary=schema.summary,
        risk_categories={
            name: RiskCategoryTier(
                name=name,
                description=tier.description,
                requirements=tuple(tier.requirements),
                examples=tuple(tier.examples),
                penalties=tier.penalties,
            )
            for name, tier in schema.risk_categories.items()
        },
        key_provisions=tuple(schema.key_provisions),
        ai_specific_requirements=tuple(schema.ai_specific_requirements),
        penalties=schema.penalties,
    )


def _convert_region(code: str, schema: RegionSchema) -> Region:
    """Convert RegionSchema to Region model."""
    return Region(
        code=code,
        name=schema.name,
        primary_regulation=schema.primary_regulation,
        regulations=tuple(_convert_regulation(r) for r in schema.regulations),
    )


def _convert_catalog(schema: RegulationsDocumentSchema) -> RegulatoryCatalog:
    """Convert RegulationsDocumentSchema to RegulatoryCatalog model."""
    return RegulatoryCatalog(
        version=schema.version,
        regions={code: _convert_region(code, r) for code, r in schema.regions.items()},
    )


def _convert_scoring_table(factor: str, schema: ScoringFactorSchema) -> ScoringTable:
    """Convert ScoringFactorSchema to ScoringTable model."""
    merged = {**schema.categories, **schema.scoring}
    return ScoringTable(
        factor=ScoringFactor(factor),
        weight=schema.weight,
        categories={
            key: ScoreCategory(
                key=key,
                score=category.score,
                description=category.description,
                members=tuple(category.members),
            )
            for key, category in merged.items()
        },
        default_category=schema.default_category,
        default_score=schema.default_score,
        description=schema.description,
    )


def _convert_program(program_id: str, schema: ComplianceProgramSchema) -> ComplianceProgram:
    """Convert ComplianceProgramSchema to ComplianceProgram model."""
    return ComplianceProgram(
        id=program_id,
        description=schema.description,
        mandatory_requirements=tuple(
            RequirementRecord(
                requirement=r.requirement,
                timeline=r.timeline,
                reference=r.reference,
            )
            for r in schema.mandatory_requirements
        ),
    )


def _convert_framework(schema: FrameworkDocumentSchema) -> RiskFramework:
    """Convert FrameworkDocumentSchema to RiskFramework model."""
    factors = {
        ScoringFactor(name): _convert_scoring_table(name, table)
        for name, table in schema.scoring_factors.items()
    }
    return RiskFramework(
        name=schema.name,
        version=schema.version,
        factors=factors,
        risk_levels=tuple(
            RiskLevel(
                tier=RiskTier(level.label),
                min_score=level.min_score,
                description=level.description,
                actions=tuple(level.actions),
            )
            for level in schema.risk_levels.values()
        ),
        compliance_programs={
            program_id: _convert_program(program_id, program)
            for program_id, program in schema.compliance_requirements_matrix.items()
        },
    )


def _convert_compliance_rule(schema: ComplianceRuleSchema) -> ComplianceRule:
    """Convert ComplianceRuleSchema to ComplianceRule model."""
    return ComplianceRule(
        id=schema.id,
        category=schema.category,
        program=schema.program,
        applies_when=_convert_optional_condition(schema.applies_when),
        mandatory=schema.mandatory,
        description=schema.description,
    )


def _convert_recommendation_rule(schema: RecommendationRuleSchema) -> RecommendationRule:
    """Convert RecommendationRuleSchema to RecommendationRule model."""
    return RecommendationRule(
        id=schema.id,
        priority=Priority(schema.priority),
        category=schema.category,
        action=schema.action,
        rationale=schema.rationale,
        timeline=schema.timeline,
        items_key=schema.items_key,
        items=tuple(schema.items),
        applies_when=_convert_optional_condition(schema.applies_when),
        priority_overrides=tuple(
            PriorityOverride(
                applies_when=_convert_condition(o.applies_when),
                priority=Priority(o.priority),
            )
            for o in schema.priority_overrides
        ),
    )


def _convert_references(schema: ReferenceTablesSchema) -> ReferenceTables:
    """Convert ReferenceTablesSchema to ReferenceTables model."""
    defaults = {
        name: value
        for name, value in (
            ("default_official_source", schema.default_official_source),
            ("default_guidance", schema.default_guidance),
            ("default_authority", schema.default_authority),
        )
        if value is not None
    }
    return ReferenceTables(
        official_sources={k: tuple(v) for k, v in schema.official_sources.items()},
        guidance_documents={k: tuple(v) for k, v in schema.guidance_documents.items()},
        authorities=dict(schema.authorities),
        **defaults,
    )


def _convert_rulebook(schema: RulebookDocumentSchema) -> Rulebook:
    """Convert RulebookDocumentSchema to Rulebook model."""
    return Rulebook(
        version=schema.version,
        compliance_rules=tuple(_convert_compliance_rule(r) for r in schema.compliance_rules),
        recommendation_rules=tuple(_convert_recommendation_rule(r) for r in schema.recommendation_rules),
        references=_convert_references(schema.references),
    )


# =============================================================================
# Knowledge Base
# =============================================================================

@dataclass(frozen=True)
class KnowledgeBase:
    """
    Everything the engine is configured with.

    Attributes:
        catalog: Regulatory catalog
        framework: Risk framework
        rulebook: Compliance/recommendation rules and reference tables
        documents: Raw documents keyed by stem ("regulations", ...)
        source: Directory the documents were read from
    """
    catalog: RegulatoryCatalog
    framework: RiskFramework
    rulebook: Rulebook
    documents: dict[str, dict[str, Any]] = field(default_factory=dict)
    source: Optional[str] = None

    def document(self, stem: str) -> dict[str, Any]:
        """Deep copy of a raw document."""
        return copy.deepcopy(self.documents.get(stem, {}))


# =============================================================================
# Knowledge Base Loader
# =============================================================================

class KnowledgeBaseLoader:
    """
    Loads knowledge base documents from YAML or JSON files.

    Usage:
        loader = KnowledgeBaseLoader()
        kb = loader.load_directory("path/to/knowledge_base")

        catalog = loader.load_catalog("path/to/regulations.yaml")
    """

    def __init__(self, strict_version: bool = True, strict_weights: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject documents with incompatible schema versions
            strict_weights: If True, reject frameworks whose weights do not sum to 100
        """
        self.strict_version = strict_version
        self.strict_weights = strict_weights

    # -------------------------------------------------------------------------
    # Single documents
    # -------------------------------------------------------------------------

    def load_catalog(self, path: Union[str, Path]) -> RegulatoryCatalog:
        """
        Load the regulatory catalog from a file.

        Raises:
            KnowledgeBaseLoadError: If file cannot be read
            KnowledgeBaseValidationError: If validation fails
            SchemaVersionMismatch: If schema version incompatible
        """
        catalog, _ = self._load_catalog(Path(path))
        return catalog

    def load_framework(self, path: Union[str, Path]) -> RiskFramework:
        """
        Load the risk framework from a file.

        Raises:
            KnowledgeBaseLoadError: If file cannot be read
            KnowledgeBaseValidationError: If validation fails
            SchemaVersionMismatch: If schema version incompatible
        """
        framework, _ = self._load_framework(Path(path))
        return framework

    def load_rulebook(
        self,
        path: Union[str, Path],
        framework: Optional[RiskFramework] = None,
    ) -> Rulebook:
        """
        Load a rulebook from a file.

        When a framework is given, compliance rules are checked against
        its requirement matrix.

        Raises:
            KnowledgeBaseLoadError: If file cannot be read
            KnowledgeBaseValidationError: If validation fails
            SchemaVersionMismatch: If schema version incompatible
        """
        rulebook, _ = self._load_rulebook(Path(path), framework)
        return rulebook

    # -------------------------------------------------------------------------
    # Directory
    # -------------------------------------------------------------------------

    def load_directory(self, directory: Union[str, Path]) -> KnowledgeBase:
        """
        Load all knowledge base documents from a directory.

        The directory must hold `regulations` and `risk_framework`
        documents (.yaml, .yml or .json). A directory without a
        `rulebook` document uses the bundled rulebook.

        Raises:
            KnowledgeBaseLoadError: If a required document is missing or unreadable
            KnowledgeBaseValidationError: If validation fails
            SchemaVersionMismatch: If schema version incompatible
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise KnowledgeBaseLoadError(
                message=f"Knowledge base directory not found: {directory}",
                details={"path": str(directory)},
            )

        regulations_path = self._require(directory, REGULATIONS_STEM)
        framework_path = self._require(directory, FRAMEWORK_STEM)
        rulebook_path = _find_document(directory, RULEBOOK_STEM)
        if rulebook_path is None:
            rulebook_path = _find_document(DEFAULT_KNOWLEDGE_BASE_DIR, RULEBOOK_STEM)
            logger.info(
                "No rulebook in %s, using bundled rulebook %s", directory, rulebook_path
            )
            if rulebook_path is None:
                raise KnowledgeBaseLoadError(
                    message="Bundled rulebook is missing",
                    details={"path": str(DEFAULT_KNOWLEDGE_BASE_DIR)},
                )

        catalog, regulations_doc = self._load_catalog(regulations_path)
        framework, framework_doc = self._load_framework(framework_path)
        rulebook, rulebook_doc = self._load_rulebook(rulebook_path, framework)

        logger.debug(
            "Loaded knowledge base from %s: %d regions, %d regulations, %d rules",
            directory,
            len(catalog.regions),
            catalog.regulation_count,
            len(rulebook.compliance_rules) + len(rulebook.recommendation_rules),
        )

        return KnowledgeBase(
            catalog=catalog,
            framework=framework,
            rulebook=rulebook,
            documents={
                REGULATIONS_STEM: regulations_doc,
                FRAMEWORK_STEM: framework_doc,
                RULEBOOK_STEM: rulebook_doc,
            },
            source=str(directory),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _load_catalog(self, path: Path) -> tuple[RegulatoryCatalog, dict[str, Any]]:
        data, schema = self._read_validated(path, validate_regulations, "regulations")
        catalog = _convert_catalog(schema)
        self._check_integrity(path, lambda: validate_catalog_integrity(catalog, str(path)))
        return catalog, data

    def _load_framework(self, path: Path) -> tuple[RiskFramework, dict[str, Any]]:
        data, schema = self._read_validated(path, validate_framework, "risk framework")
        framework = _convert_framework(schema)
        self._check_integrity(
            path,
            lambda: validate_framework_integrity(framework, self.strict_weights, str(path)),
        )
        return framework, data

    def _load_rulebook(
        self,
        path: Path,
        framework: Optional[RiskFramework],
    ) -> tuple[Rulebook, dict[str, Any]]:
        data, schema = self._read_validated(path, validate_rulebook, "rulebook")
        rulebook = _convert_rulebook(schema)
        self._check_integrity(
            path,
            lambda: validate_rulebook_integrity(rulebook, framework, str(path)),
        )
        return rulebook, data

    def _read_validated(
        self,
        path: Path,
        validate: Callable[[dict[str, Any]], _SchemaT],
        kind: str,
    ) -> tuple[dict[str, Any], _SchemaT]:
        # Load raw data
        try:
            data = self._load_file(path)
        except Exception as e:
            raise KnowledgeBaseLoadError(
                message=f"Failed to load {kind}: {e}",
                details={"path": str(path), "error": str(e)},
                source=str(path),
            )

        if not isinstance(data, dict):
            raise KnowledgeBaseValidationError(
                message=f"{kind.capitalize()} document must be a mapping",
                details={"path": str(path), "type": type(data).__name__},
                source=str(path),
            )

        # Check schema version
        if self.strict_version and not check_schema_version(data):
            doc_version = data.get("schema_version", "unknown")
            raise SchemaVersionMismatch(
                message=f"Schema version mismatch: {kind} has {doc_version}, expected {SCHEMA_VERSION}",
                details={
                    "document_version": doc_version,
                    "expected_version": SCHEMA_VERSION,
                },
                source=str(path),
            )

        # Validate against schema
        try:
            schema = validate(data)
        except ValidationError as e:
            raise KnowledgeBaseValidationError(
                message=f"{kind.capitalize()} validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": str(path)},
                source=str(path),
            )

        return data, schema

    def _check_integrity(self, path: Path, check: Callable[[], None]) -> None:
        try:
            check()
        except ValueError as e:
            raise KnowledgeBaseValidationError(
                message="Reference integrity validation failed",
                details={"errors": str(e), "path": str(path)},
                source=str(path),
            )

    def _require(self, directory: Path, stem: str) -> Path:
        path = _find_document(directory, stem)
        if path is None:
            raise KnowledgeBaseLoadError(
                message=f"Missing knowledge base document '{stem}' in {directory}",
                details={"path": str(directory), "expected": [stem + s for s in _SUFFIXES]},
            )
        return path

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                return json.load(f)
            else:
                # Try YAML first, then JSON
                content = f.read()
                try:
                    return yaml.safe_load(content)
                except yaml.YAMLError:
                    return json.loads(content)


def _find_document(directory: Path, stem: str) -> Optional[Path]:
    for suffix in _SUFFIXES:
        candidate = directory / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None


# =============================================================================
# Convenience Functions
# =============================================================================

def load_knowledge_base(
    directory: Union[str, Path, None] = None,
    strict_weights: bool = True,
) -> KnowledgeBase:
    """
    Load a knowledge base directory (the bundled one by default).

    Convenience function that creates a temporary loader.
    """
    loader = KnowledgeBaseLoader(strict_weights=strict_weights)
    return loader.load_directory(directory or DEFAULT_KNOWLEDGE_BASE_DIR)


def load_default_rulebook(framework: Optional[RiskFramework] = None) -> Rulebook:
    """Load the bundled rulebook."""
    path = _find_document(DEFAULT_KNOWLEDGE_BASE_DIR, RULEBOOK_STEM)
    if path is None:
        raise KnowledgeBaseLoadError(
            message="Bundled rulebook is missing",
            details={"path": str(DEFAULT_KNOWLEDGE_BASE_DIR)},
        )
    return KnowledgeBaseLoader().load_rulebook(path, framework)


def load_rulebook_from_string(content: str, format: str = "yaml") -> Rulebook:
    """
    Load a rulebook from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    if format.lower() == "json":
        data = json.loads(content)
    else:
        data = yaml.safe_load(content)

    schema = validate_rulebook(data)
    return _convert_rulebook(schema)
