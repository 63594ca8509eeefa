"""
Step 4: Timeline assembly: ordering, span and summary.
"""
from __future__ import annotations

from claims_timeline.shared.errors import NoClaimsFoundError
from claims_timeline.shared.models import (
    ClaimItem,
    ClaimKind,
    Interval,
    TimelineDocument,
    TimelineSummary,
    Warning,
)


def distinct_kinds(items: list[ClaimItem]) -> list[ClaimKind]:
    """Distinct kinds in first-encountered order."""
    return list(dict.fromkeys(item.kind for item in items))


def compute_span(items: list[ClaimItem]) -> Interval:
    return Interval(
        start=min(item.interval.start for item in items),
        end=max(item.interval.end for item in items),
    )


def build_timeline(items: list[ClaimItem], warnings: list[Warning] | None = None) -> TimelineDocument:
    """
    Sort items most recent first (stable, so ties keep encounter order) and
    attach span and summary. Raises NoClaimsFoundError for an empty list.
    """
    if not items:
        raise NoClaimsFoundError()

    ordered = sorted(items, key=lambda item: item.interval.start, reverse=True)
    kinds = distinct_kinds(ordered)

    return TimelineDocument(
        items=ordered,
        span=compute_span(ordered),
        summary=TimelineSummary(total_items=len(ordered), kinds=kinds),
        warnings=list(warnings or []),
    )
