"""Blueprint rules.

Per-group rules take a ``StoreyGroup`` and return a ``FailureKind`` or
None when the group passes. Pairwise rules take two adjacent groups in
blueprint order. Rules never raise and never look at more than their
arguments; the engine attaches group positions and collects the results.
"""

from __future__ import annotations

import math

from blueprint_builder.models.blueprint import BuildingBlueprint, IntegerRange, StoreyGroup
from blueprint_builder.validators.errors import (
    ElevationError,
    FailureKind,
    HeightError,
    RangeError,
    SlabError,
)


# ── Ranges ────────────────────────────────────────────────────────────


def start_and_end_are_positive(r: IntegerRange) -> RangeError | None:
    """Both bounds of a floor range must be above zero. Start is checked first."""
    if r.start <= 0:
        return RangeError.NON_POSITIVE_START
    if r.end <= 0:
        return RangeError.NON_POSITIVE_END
    return None


def end_is_greater_than_start(
    r: IntegerRange, allow_single_storey: bool = False
) -> RangeError | None:
    """Range end must exceed range start.

    With ``allow_single_storey`` a range covering one floor (start == end)
    is accepted.
    """
    if allow_single_storey:
        return RangeError.START_GREATER_THAN_END if r.start > r.end else None
    return RangeError.START_GREATER_THAN_END if r.start >= r.end else None


def ranges_are_consecutive(r1: IntegerRange, r2: IntegerRange) -> RangeError | None:
    """The second range must start on the floor right after the first ends."""
    if r2.start - r1.end == 1:
        return None
    return RangeError.NON_CONSECUTIVE_RANGE


# ── Storey groups ─────────────────────────────────────────────────────


def range_values_are_positive(group: StoreyGroup) -> FailureKind | None:
    return start_and_end_are_positive(group.range)


def range_end_exceeds_start(group: StoreyGroup) -> FailureKind | None:
    return end_is_greater_than_start(group.range)


def range_end_reaches_start(group: StoreyGroup) -> FailureKind | None:
    """Variant of ``range_end_exceeds_start`` that accepts single-storey groups."""
    return end_is_greater_than_start(group.range, allow_single_storey=True)


def typical_height_is_positive(group: StoreyGroup) -> FailureKind | None:
    h = group.typical_height
    if math.isnan(h) or math.isinf(h):
        return HeightError.INVALID_HEIGHT
    if h > 0:
        return None
    if h == 0:
        return HeightError.HEIGHT_EQUAL_TO_ZERO
    return HeightError.HEIGHT_LESS_THAN_ZERO


def slab_thickness_is_positive(group: StoreyGroup) -> FailureKind | None:
    t = group.slab_thickness
    if math.isfinite(t) and t > 0:
        return None
    return SlabError.NON_POSITIVE_THICKNESS


def slab_outline_is_polygon(group: StoreyGroup) -> FailureKind | None:
    """A slab outline needs at least three vertices."""
    if len(group.slab_vertices) < 3:
        return SlabError.DEGENERATE_OUTLINE
    return None


def group_ranges_are_consecutive(
    prev: StoreyGroup, next_: StoreyGroup
) -> FailureKind | None:
    return ranges_are_consecutive(prev.range, next_.range)


# ── Blueprint ─────────────────────────────────────────────────────────


def base_elevation_is_valid(blueprint: BuildingBlueprint) -> FailureKind | None:
    e = blueprint.base_elevation
    if not math.isfinite(e):
        return ElevationError.INVALID_BASE_ELEVATION
    if e < 0:
        return ElevationError.NEGATIVE_BASE_ELEVATION
    return None


def top_elevation_is_finite(blueprint: BuildingBlueprint) -> FailureKind | None:
    """Stacking every group on the base elevation must stay a finite number.

    Groups whose height or range is already reported by a group rule are
    left out of the sum.
    """
    top = blueprint.base_elevation
    if not math.isfinite(top):
        return None
    for group in blueprint.storey_groups:
        h = group.typical_height
        floors = group.range.end - group.range.start + 1
        if math.isfinite(h) and h > 0 and floors > 0:
            top += floors * h
    if math.isfinite(top):
        return None
    return ElevationError.INVALID_TOP_ELEVATION
