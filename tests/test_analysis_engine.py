"""
Tests for the RiskPilot analysis engine

End-to-end analyses against the bundled knowledge base plus the
read-only catalog accessors.
"""
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from riskpilot.engine import RiskAnalysisEngine, analysis_engine, get_default_engine
from riskpilot.exceptions import (
    AnalysisError,
    KnowledgeBaseValidationError,
    RegionNotFoundError,
)
from riskpilot.models import ComplianceRule, Priority, RiskTier, Rulebook
from riskpilot.packs import DEFAULT_KNOWLEDGE_BASE_DIR

from tests.conftest import make_payload, make_request, read_yaml


# =============================================================================
# EU credit scoring
# =============================================================================

class TestEuCreditScoring:
    """Opaque credit scoring in the EU for a financial-services firm."""

    @pytest.fixture(scope="class")
    def result(self, engine):
        return engine.analyze(make_request())

    def test_score(self, result):
        assert result.breakdown.to_dict() == {
            "useCaseScore": 100,
            "jurisdictionScore": 90,
            "dataScore": 75,
            "impactScore": 80,
            "transparencyScore": 100,
        }
        assert result.raw_score == pytest.approx(88.25)
        assert result.risk_score == 88
        assert result.risk_level == RiskTier.HIGH

    def test_next_steps_follow_tier(self, result, framework):
        high = [level for level in framework.risk_levels if level.tier == RiskTier.HIGH][0]
        assert result.next_steps == high.actions
        assert result.risk_description == high.description

    def test_regulations(self, result):
        ids = [r.regulation_id for r in result.applicable_regulations]
        assert ids == ["EU-AI-ACT-2024", "GDPR-AI"]

        ai_act, gdpr = result.applicable_regulations
        assert ai_act.jurisdiction == "European Union"
        assert [p.category for p in ai_act.key_provisions] == [
            "High-Risk AI Requirements",
            "Transparency Obligations",
        ]
        assert ai_act.compliance_deadline == "2026-08-02"
        assert "; " in ai_act.penalties
        assert [p.category for p in gdpr.key_provisions] == [
            "Data Protection Requirements",
            "AI-Specific Requirements",
        ]
        assert gdpr.compliance_deadline == "2018-05-25"

    def test_compliance_requirements(self, result):
        assert [block.category for block in result.compliance_requirements] == [
            "EU High-Risk AI Compliance",
            "GDPR Automated Decision-Making",
        ]
        assert all(block.mandatory for block in result.compliance_requirements)

    def test_recommendations(self, result):
        assert [(r.category, r.priority) for r in result.recommendations] == [
            ("Legal Review", Priority.IMMEDIATE),
            ("Risk Assessment", Priority.IMMEDIATE),
            ("Transparency", Priority.HIGH),
            ("Human Oversight", Priority.HIGH),
            ("Technical Documentation", Priority.IMMEDIATE),
            ("Ongoing Monitoring", Priority.MEDIUM),
            ("EU AI Act Compliance", Priority.HIGH),
            ("Staff Training", Priority.MEDIUM),
        ]

    def test_timeline(self, result):
        timeline = result.estimated_compliance_timeline
        assert len(timeline.immediate.items) == 13
        assert timeline.short_term.items == ()
        assert timeline.medium_term.items == ("Update records of processing activities",)
        assert len(timeline.ongoing.items) == 3

    def test_references(self, result):
        assert [r.regulation for r in result.regulatory_references] == [
            r.regulation_name for r in result.applicable_regulations
        ]
        for reference in result.regulatory_references:
            assert reference.regulatory_authority == (
                "European Commission, EU AI Office, National Supervisory Authorities"
            )

    def test_to_dict(self, result):
        data = result.to_dict()
        assert list(data) == [
            "riskScore",
            "riskLevel",
            "riskDescription",
            "breakdown",
            "applicableRegulations",
            "complianceRequirements",
            "recommendations",
            "nextSteps",
            "estimatedComplianceTimeline",
            "regulatoryReferences",
        ]
        assert data["riskLevel"] == "High"
        assert data["recommendations"][0]["priority"] == "IMMEDIATE"
        assert "rawScore" not in data


# =============================================================================
# Other requests
# =============================================================================

class TestUnknownJurisdiction:
    """A jurisdiction missing from every table."""

    def test_scores_default_and_matches_nothing(self, engine):
        result = engine.analyze(make_request(jurisdictions=("Mars",)))
        assert result.breakdown.jurisdiction_score == 10
        assert result.risk_score == 76
        assert result.risk_level == RiskTier.HIGH
        assert result.applicable_regulations == ()
        assert result.regulatory_references == ()
        assert "EU AI Act Compliance" not in [r.category for r in result.recommendations]


class TestFullTransparency:
    """Human oversight with transparent decisions."""

    def test_transparency_blocks_dropped(self, engine):
        result = engine.analyze(make_request(has_human_oversight=True, is_transparent=True))
        categories = [r.category for r in result.recommendations]
        assert result.breakdown.transparency_score == 10
        assert result.risk_score == 79
        assert "Transparency" not in categories
        assert "Human Oversight" not in categories


class TestPurity:
    """Tests for stateless analysis."""

    def test_repeated_analysis_is_equal(self, engine):
        assert engine.analyze(make_request()) == engine.analyze(make_request())

    def test_mapping_input(self, engine):
        assert engine.analyze(make_payload()) == engine.analyze(make_request())

    def test_missing_jurisdictions(self, engine):
        payload = make_payload()
        del payload["jurisdictions"]
        with pytest.raises(AnalysisError) as exc_info:
            engine.analyze(payload)
        assert "jurisdictions" in exc_info.value.details["error"]
        assert exc_info.value.details["type"] == "ValueError"

    def test_empty_request_is_low_risk(self, engine):
        result = engine.analyze({"jurisdictions": [], "dataTypes": []})
        assert result.risk_level == RiskTier.LOW
        assert result.applicable_regulations == ()


class TestConstruction:
    """Tests for engine construction."""

    def test_default_rulebook(self, catalog, framework):
        engine = RiskAnalysisEngine(catalog, framework)
        assert len(engine.rulebook.recommendation_rules) == 10

    def test_rulebook_with_unknown_program(self, catalog, framework):
        rulebook = Rulebook(
            version="bad",
            compliance_rules=(ComplianceRule(id="x", category="X", program="missing"),),
        )
        with pytest.raises(KnowledgeBaseValidationError):
            RiskAnalysisEngine(catalog, framework, rulebook)


# =============================================================================
# Accessors
# =============================================================================

class TestAccessors:
    """Tests for catalog and framework accessors."""

    def test_get_region(self, engine):
        region = engine.get_region("eu")
        assert region["name"] == "European Union"
        assert region["primary_regulation"] == "EU-AI-ACT-2024"
        assert region["regulations"][0]["id"] == "EU-AI-ACT-2024"

    def test_get_region_not_found(self, engine):
        with pytest.raises(RegionNotFoundError):
            engine.get_region("ATLANTIS")

    def test_list_regions(self, engine):
        regions = engine.list_regions()
        assert len(regions) == 12
        assert regions[0] == {
            "code": "EU",
            "name": "European Union",
            "primaryRegulation": "EU-AI-ACT-2024",
            "regulationCount": 2,
        }

    def test_framework_document(self, engine):
        """Test the framework is served exactly as loaded."""
        expected = read_yaml(DEFAULT_KNOWLEDGE_BASE_DIR / "risk_framework.yaml")
        assert engine.framework_document() == expected

    def test_framework_document_is_a_copy(self, engine):
        document = engine.framework_document()
        document["scoring_factors"]["use_case_risk"]["weight"] = 0
        document.clear()
        assert engine.framework_document()["scoring_factors"]["use_case_risk"]["weight"] == 30

    def test_framework_document_without_source(self, catalog, framework, rulebook):
        engine = RiskAnalysisEngine(catalog, framework, rulebook)
        document = engine.framework_document()
        assert document["scoring_factors"]["use_case_risk"]["weight"] == 30

    def test_search(self, engine):
        results = engine.search("biometric")
        assert results
        assert all(r["type"] == "regulation" for r in results)
        assert results == engine.search("BIOMETRIC")

    def test_search_no_match(self, engine):
        assert engine.search("zzz-no-such-text") == []


# =============================================================================
# Default Engine
# =============================================================================

class TestDefaultEngine:
    """Tests for the lazily built module-level engine."""

    @pytest.fixture(autouse=True)
    def reset_default_engine(self, monkeypatch):
        monkeypatch.setattr(analysis_engine, "_default_engine", None)

    def test_built_once(self):
        assert get_default_engine() is get_default_engine()

    def test_concurrent_first_use_builds_one_engine(self, kb, monkeypatch):
        calls = []

        def load():
            calls.append(1)
            time.sleep(0.05)
            return kb

        monkeypatch.setattr(analysis_engine, "load_knowledge_base", load)
        with ThreadPoolExecutor(max_workers=8) as pool:
            engines = list(pool.map(lambda _: get_default_engine(), range(8)))

        assert len(calls) == 1
        assert all(e is engines[0] for e in engines)
