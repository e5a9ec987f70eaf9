"""
RiskPilot Timeline Estimator

Buckets the timeline-tagged entries of the selected requirement blocks
into compliance phases:

- tag contains "Before" or equals "Immediate" -> immediate
- tag equals "Ongoing"                        -> ongoing
- any other tag                               -> medium term

Untagged entries are not scheduled. No tag maps to the short-term phase,
which is always reported empty.
"""
from __future__ import annotations

from typing import Iterable, Optional

from ..models import (
    ComplianceRequirement,
    ComplianceTimeline,
    TimelineBucket,
    TimelineHorizon,
)


BUCKET_DESCRIPTIONS = {
    TimelineHorizon.IMMEDIATE: "Actions required before deployment or immediately (0-2 weeks)",
    TimelineHorizon.SHORT_TERM: "Initial compliance phase (2-8 weeks)",
    TimelineHorizon.MEDIUM_TERM: "Full compliance implementation (2-6 months)",
    TimelineHorizon.ONGOING: "Continuous compliance activities",
}


def classify_timeline(tag: Optional[str]) -> Optional[TimelineHorizon]:
    """Phase for a requirement's timeline tag, or None when untagged."""
    if not tag:
        return None
    if "Before" in tag or tag == "Immediate":
        return TimelineHorizon.IMMEDIATE
    if tag == "Ongoing":
        return TimelineHorizon.ONGOING
    return TimelineHorizon.MEDIUM_TERM


def estimate_timeline(requirements: Iterable[ComplianceRequirement]) -> ComplianceTimeline:
    """Build the four-phase timeline, preserving block and entry order."""
    items: dict[TimelineHorizon, list[str]] = {horizon: [] for horizon in TimelineHorizon}

    for block in requirements:
        for record in block.requirements:
            horizon = classify_timeline(record.timeline)
            if horizon is not None:
                items[horizon].append(record.requirement)

    def bucket(horizon: TimelineHorizon) -> TimelineBucket:
        return TimelineBucket(
            horizon=horizon,
            description=BUCKET_DESCRIPTIONS[horizon],
            items=tuple(items[horizon]),
        )

    return ComplianceTimeline(
        immediate=bucket(TimelineHorizon.IMMEDIATE),
        short_term=bucket(TimelineHorizon.SHORT_TERM),
        medium_term=bucket(TimelineHorizon.MEDIUM_TERM),
        ongoing=bucket(TimelineHorizon.ONGOING),
    )
