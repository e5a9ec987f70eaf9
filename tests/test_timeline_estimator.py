"""
Tests for RiskPilot Timeline Estimator
"""
import pytest

from riskpilot.engine.timeline_estimator import (
    BUCKET_DESCRIPTIONS,
    classify_timeline,
    estimate_timeline,
)
from riskpilot.models import (
    ComplianceRequirement,
    RequirementRecord,
    TimelineHorizon,
)


def make_block(*timelines, category="Block"):
    return ComplianceRequirement(
        category=category,
        requirements=tuple(
            RequirementRecord(requirement=f"{category} {i}", timeline=timeline)
            for i, timeline in enumerate(timelines)
        ),
    )


class TestClassifyTimeline:
    """Tests for tag classification."""

    @pytest.mark.parametrize("tag,horizon", [
        ("Before market placement", TimelineHorizon.IMMEDIATE),
        ("Before deployment", TimelineHorizon.IMMEDIATE),
        ("Before launch", TimelineHorizon.IMMEDIATE),
        ("Immediate", TimelineHorizon.IMMEDIATE),
        ("Ongoing", TimelineHorizon.ONGOING),
        ("Within 30 days", TimelineHorizon.MEDIUM_TERM),
        ("Within 6 months", TimelineHorizon.MEDIUM_TERM),
    ])
    def test_tags(self, tag, horizon):
        assert classify_timeline(tag) == horizon

    def test_untagged(self):
        assert classify_timeline(None) is None
        assert classify_timeline("") is None

    def test_matching_is_case_sensitive(self):
        """Test only the capitalised keywords select a phase."""
        assert classify_timeline("before launch") == TimelineHorizon.MEDIUM_TERM
        assert classify_timeline("ongoing") == TimelineHorizon.MEDIUM_TERM


class TestEstimateTimeline:
    """Tests for bucketing requirement blocks."""

    def test_buckets_preserve_order(self):
        timeline = estimate_timeline([
            make_block("Before deployment", "Ongoing", "Within 30 days", category="A"),
            make_block("Immediate", None, category="B"),
        ])
        assert timeline.immediate.items == ("A 0", "B 0")
        assert timeline.ongoing.items == ("A 1",)
        assert timeline.medium_term.items == ("A 2",)

    def test_short_term_always_empty(self):
        timeline = estimate_timeline([make_block("Within 2 weeks", "Before launch")])
        assert timeline.short_term.items == ()
        assert timeline.short_term.description == BUCKET_DESCRIPTIONS[TimelineHorizon.SHORT_TERM]

    def test_untagged_entries_skipped(self):
        timeline = estimate_timeline([make_block(None, None)])
        assert all(bucket.items == () for bucket in timeline.buckets)

    def test_empty_input_has_every_bucket(self):
        data = estimate_timeline([]).to_dict()
        assert list(data) == ["immediate", "shortTerm", "mediumTerm", "ongoing"]
        assert data["mediumTerm"] == {
            "description": "Full compliance implementation (2-6 months)",
            "items": [],
        }

    def test_eu_programs(self, framework):
        timeline = estimate_timeline([
            ComplianceRequirement(
                category="EU",
                requirements=framework.program("high_risk_ai_eu").mandatory_requirements,
            ),
            ComplianceRequirement(
                category="GDPR",
                requirements=framework.program("automated_decision_making_gdpr").mandatory_requirements,
            ),
        ])
        assert len(timeline.immediate.items) == 13
        assert timeline.medium_term.items == ("Update records of processing activities",)
        assert len(timeline.ongoing.items) == 3
