"""
Tests for RiskPilot Recommendation Builder

Tests cover:
- Guards of each recommendation rule
- Priority overrides
- Stable block order
- Serialized item lists
"""
import pytest

from riskpilot.engine.recommendation_builder import RecommendationBuilder
from riskpilot.models import EQ, Priority, PriorityOverride, RecommendationRule

from tests.conftest import make_context


@pytest.fixture(scope="module")
def builder(rulebook):
    return RecommendationBuilder(rulebook.recommendation_rules)


def categories(recommendations):
    return [r.category for r in recommendations]


class TestEuCreditScoring:
    """The EU credit-scoring request (High risk, no oversight, opaque)."""

    @pytest.fixture
    def recommendations(self, builder):
        context = make_context(
            risk_level="High",
            regulation_jurisdictions=("European Union", "European Union"),
        )
        return builder.build(context)

    def test_block_order(self, recommendations):
        assert categories(recommendations) == [
            "Legal Review",
            "Risk Assessment",
            "Transparency",
            "Human Oversight",
            "Technical Documentation",
            "Ongoing Monitoring",
            "EU AI Act Compliance",
            "Staff Training",
        ]

    def test_priorities(self, recommendations):
        assert [r.priority for r in recommendations] == [
            Priority.IMMEDIATE,
            Priority.IMMEDIATE,
            Priority.HIGH,
            Priority.HIGH,
            Priority.IMMEDIATE,
            Priority.MEDIUM,
            Priority.HIGH,
            Priority.MEDIUM,
        ]

    def test_legal_review_timeline(self, recommendations):
        assert recommendations[0].timeline == "Within 1 week"
        assert recommendations[1].timeline == "Within 2 weeks"


class TestGuards:
    """Tests for individual rule guards."""

    def test_low_risk_fully_transparent(self, builder):
        """Test only the unconditional blocks remain."""
        context = make_context(risk_level="Low", has_human_oversight=True, is_transparent=True)
        recommendations = builder.build(context)
        assert categories(recommendations) == [
            "Technical Documentation",
            "Ongoing Monitoring",
            "Staff Training",
        ]
        assert recommendations[0].priority == Priority.MEDIUM

    def test_human_oversight_not_for_low_risk(self, builder):
        context = make_context(risk_level="Low", has_human_oversight=False)
        assert "Human Oversight" not in categories(builder.build(context))

    def test_human_oversight_for_medium_risk(self, builder):
        context = make_context(risk_level="Medium", has_human_oversight=False)
        assert "Human Oversight" in categories(builder.build(context))

    @pytest.mark.parametrize("data_type", [
        "special_category_biometric",
        "special_category_health",
        "genetic_data",
    ])
    def test_data_governance(self, builder, data_type):
        context = make_context(risk_level="Medium", data_types=(data_type,))
        assert "Data Governance" in categories(builder.build(context))

    def test_no_data_governance_for_financial_data(self, builder):
        context = make_context(risk_level="Medium", data_types=("financial_data",))
        assert "Data Governance" not in categories(builder.build(context))

    def test_china_compliance(self, builder):
        context = make_context(risk_level="Medium", regulation_jurisdictions=("China",))
        recommendations = builder.build(context)
        assert "China Compliance" in categories(recommendations)
        assert "EU AI Act Compliance" not in categories(recommendations)

    def test_eu_follows_matched_regulations_not_request(self, builder):
        """Test the EU block depends on matched regulations."""
        context = make_context(risk_level="Medium", jurisdictions=("EU",), regulation_jurisdictions=())
        assert "EU AI Act Compliance" not in categories(builder.build(context))

    def test_critical_gets_immediate_documentation(self, builder):
        context = make_context(risk_level="Critical")
        documentation = [r for r in builder.build(context) if r.category == "Technical Documentation"]
        assert documentation[0].priority == Priority.IMMEDIATE


class TestOrderStability:
    """Tests for stable ordering under unrelated input changes."""

    def test_relative_order_unchanged(self, builder):
        base = categories(builder.build(make_context(risk_level="High")))
        changed = categories(builder.build(make_context(risk_level="High", industry="retail")))
        assert base == changed

    def test_subset_keeps_order(self, builder, rulebook):
        rule_order = [rule.category for rule in rulebook.recommendation_rules]
        result = categories(builder.build(make_context(risk_level="Medium", is_transparent=True)))
        assert result == [c for c in rule_order if c in result]


class TestSerialization:
    """Tests for Recommendation.to_dict."""

    def test_items_under_rule_key(self, builder):
        context = make_context(risk_level="High", data_types=("special_category_health",))
        data_governance = [r for r in builder.build(context) if r.category == "Data Governance"][0]
        data = data_governance.to_dict()
        assert data["priority"] == "HIGH"
        assert "timeline" not in data
        assert data["specificMeasures"][0] == "Obtain explicit consent or establish alternative legal basis"

    def test_no_items_key(self, builder):
        legal = builder.build(make_context(risk_level="High"))[0].to_dict()
        assert set(legal) == {"priority", "category", "action", "rationale", "timeline"}


class TestOverrides:
    """Tests for priority overrides."""

    def test_first_matching_override_wins(self):
        rule = RecommendationRule(
            id="r",
            priority=Priority.LOW,
            category="Custom",
            action="Act",
            rationale="Because",
            priority_overrides=(
                PriorityOverride(applies_when=EQ("risk_level", "High"), priority=Priority.HIGH),
                PriorityOverride(applies_when=EQ("risk_level", "High"), priority=Priority.IMMEDIATE),
            ),
        )
        builder = RecommendationBuilder((rule,))
        assert builder.build(make_context(risk_level="High"))[0].priority == Priority.HIGH
        assert builder.build(make_context(risk_level="Low"))[0].priority == Priority.LOW
