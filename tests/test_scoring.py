"""
Tests for RiskPilot Risk Scoring

Tests cover:
- Each component score calculator, including defaults for unknown values
- Oversight x transparency decision table
- Weighted aggregation and half-up rounding
- Tier boundaries
"""
import pytest

from riskpilot.engine.scoring import RiskScorer, transparency_level
from riskpilot.models import (
    DataType,
    DecisionImpact,
    Jurisdiction,
    RiskTier,
    TransparencyLevel,
    UseCaseCategory,
)

from tests.conftest import make_request, make_scores


@pytest.fixture(scope="module")
def scorer(framework):
    return RiskScorer(framework)


# =============================================================================
# Component Calculators
# =============================================================================

class TestUseCaseScore:
    """Tests for the use-case calculator."""

    @pytest.mark.parametrize("use_case,expected", [
        ("credit-scoring", 100),
        ("employment-decisions", 100),
        ("law-enforcement", 100),
        ("healthcare-diagnosis", 75),
        ("content-moderation", 75),
        ("customer-service", 50),
        ("business-automation", 50),
        ("spam-filter", 20),
        ("research-tool", 20),
    ])
    def test_bucket_scores(self, scorer, use_case, expected):
        """Test each bucket's score."""
        assert scorer.use_case_score(use_case) == expected

    def test_unknown_defaults_to_moderate(self, scorer):
        """Test unrecognized use cases score as moderate risk."""
        assert scorer.use_case_score("quantum-oracle") == 50

    def test_missing_defaults_to_moderate(self, scorer):
        """Test a missing use case scores as moderate risk."""
        assert scorer.use_case_score(None) == 50

    def test_every_enumerated_use_case_in_range(self, scorer):
        """Test every enumerated value scores in [0, 100]."""
        for use_case in UseCaseCategory:
            assert 0 <= scorer.use_case_score(use_case.value) <= 100


class TestJurisdictionScore:
    """Tests for the jurisdiction calculator."""

    def test_single_jurisdiction(self, scorer):
        """Test a single jurisdiction's score."""
        assert scorer.jurisdiction_score(["EU"]) == 90
        assert scorer.jurisdiction_score(["India"]) == 40

    def test_takes_maximum(self, scorer):
        """Test the strictest jurisdiction wins."""
        assert scorer.jurisdiction_score(["India", "USA", "EU"]) == 90

    def test_unknown_falls_back_to_default(self, scorer):
        """Test unrecognized jurisdictions score the default."""
        assert scorer.jurisdiction_score(["Mars"]) == 10

    def test_unknown_ignored_next_to_known(self, scorer):
        """Test unrecognized entries do not pull a known maximum down."""
        assert scorer.jurisdiction_score(["Mars", "Japan"]) == 45

    def test_empty_falls_back_to_default(self, scorer):
        """Test an empty list scores the default."""
        assert scorer.jurisdiction_score([]) == 10

    def test_display_name_spacing(self, scorer):
        """Test 'South Korea' scores like 'South_Korea'."""
        assert scorer.jurisdiction_score(["South Korea"]) == scorer.jurisdiction_score(["South_Korea"])

    def test_monotonic_under_union(self, scorer):
        """Test adding a jurisdiction never lowers the score."""
        values = [j.value for j in Jurisdiction] + ["Mars"]
        for first in values:
            for second in values:
                assert scorer.jurisdiction_score([first, second]) >= scorer.jurisdiction_score([first])


class TestDataScore:
    """Tests for the data sensitivity calculator."""

    def test_takes_maximum(self, scorer):
        """Test the most sensitive data type wins."""
        assert scorer.data_score(["financial_data", "special_category_health"]) == 95

    def test_biometric_is_maximal(self, scorer):
        """Test biometric data scores 100."""
        assert scorer.data_score(["special_category_biometric"]) == 100

    def test_unknown_and_empty_fall_back(self, scorer):
        """Test unknown and empty lists score the default."""
        assert scorer.data_score(["telemetry"]) == 20
        assert scorer.data_score([]) == 20

    def test_hyphenated_values(self, scorer):
        """Test hyphenated spellings canonicalize."""
        assert scorer.data_score(["children-data"]) == 90

    def test_monotonic_under_union(self, scorer):
        """Test adding a recognized data type never lowers a recognized set's score."""
        values = [d.value for d in DataType]
        for first in values:
            for second in values:
                assert scorer.data_score([first, second]) >= scorer.data_score([first])

    def test_fallback_can_exceed_low_sensitivity(self, scorer):
        """Test the default for unmatched input outranks the least sensitive types."""
        assert scorer.data_score(["business_data_only"]) == 15
        assert scorer.data_score(["anonymized_aggregated"]) == 10
        assert scorer.data_score(["telemetry", "business_data_only"]) == 15
        assert scorer.data_score([]) == 20


class TestImpactScore:
    """Tests for the decision impact calculator."""

    @pytest.mark.parametrize("impact,expected", [
        ("life-safety", 100),
        ("legal-rights", 95),
        ("significant-economic", 80),
        ("moderate-economic", 60),
        ("limited-impact", 35),
        ("no-impact", 10),
    ])
    def test_category_scores(self, scorer, impact, expected):
        """Test each impact category's score."""
        assert scorer.impact_score(impact) == expected

    def test_unknown_defaults_to_limited(self, scorer):
        """Test unrecognized and missing impacts score as limited."""
        assert scorer.impact_score("catastrophic") == 35
        assert scorer.impact_score(None) == 35

    def test_every_enumerated_impact_in_range(self, scorer):
        for impact in DecisionImpact:
            assert 0 <= scorer.impact_score(impact.value) <= 100


class TestTransparency:
    """Tests for the oversight x transparency decision table."""

    @pytest.mark.parametrize("oversight,transparent,level,score", [
        (True, True, TransparencyLevel.FULL, 10),
        (False, True, TransparencyLevel.SUBSTANTIAL, 40),
        (True, False, TransparencyLevel.BASIC, 60),
        (False, False, TransparencyLevel.OPAQUE, 100),
    ])
    def test_decision_table(self, scorer, oversight, transparent, level, score):
        """Test every cell of the decision table."""
        assert transparency_level(oversight, transparent) == level
        assert scorer.transparency_score(oversight, transparent) == score


# =============================================================================
# Aggregation
# =============================================================================

class TestAggregate:
    """Tests for the risk aggregator."""

    def test_weighted_example(self, scorer):
        """Test 100*.30 + 90*.15 + 75*.25 + 80*.20 + 100*.10 = 88.25 -> 88, High."""
        result = scorer.aggregate(make_scores(100, 90, 75, 80, 100))
        assert result.raw_score == pytest.approx(88.25)
        assert result.risk_score == 88
        assert result.level.tier == RiskTier.HIGH

    def test_half_rounds_up(self, scorer):
        """Test a total of exactly 89.5 rounds up into Critical."""
        result = scorer.aggregate(make_scores(100, 100, 100, 70, 55))
        assert result.raw_score == pytest.approx(89.5)
        assert result.risk_score == 90
        assert result.level.tier == RiskTier.CRITICAL

    @pytest.mark.parametrize("score,tier", [
        (100, RiskTier.CRITICAL),
        (90, RiskTier.CRITICAL),
        (89, RiskTier.HIGH),
        (70, RiskTier.HIGH),
        (69, RiskTier.MEDIUM),
        (40, RiskTier.MEDIUM),
        (39, RiskTier.LOW),
        (0, RiskTier.LOW),
    ])
    def test_tier_boundaries(self, scorer, score, tier):
        """Test thresholds are closed below."""
        result = scorer.aggregate(make_scores(score, score, score, score, score))
        assert result.risk_score == score
        assert result.level.tier == tier

    def test_score_in_range(self, scorer):
        """Test extreme components keep the total in [0, 100]."""
        assert scorer.aggregate(make_scores(100, 100, 100, 100, 100)).risk_score == 100
        assert scorer.aggregate(make_scores()).risk_score == 0

    def test_score_request(self, scorer):
        """Test the full request path matches the component breakdown."""
        result = scorer.score(make_request())
        assert result.breakdown == make_scores(100, 90, 75, 80, 100)
        assert result.risk_score == 88

    def test_level_carries_description_and_actions(self, scorer):
        result = scorer.aggregate(make_scores(100, 100, 100, 100, 100))
        assert result.level.description
        assert len(result.level.actions) > 0
