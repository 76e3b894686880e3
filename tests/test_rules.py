"""Tests for individual blueprint rules."""

import math

import pytest

from blueprint_builder.models.blueprint import BuildingBlueprint, IntegerRange, StoreyGroup
from blueprint_builder.validators.errors import (
    ElevationError,
    HeightError,
    RangeError,
    SlabError,
)
from blueprint_builder.validators.rules import (
    base_elevation_is_valid,
    end_is_greater_than_start,
    group_ranges_are_consecutive,
    range_end_exceeds_start,
    range_end_reaches_start,
    range_values_are_positive,
    ranges_are_consecutive,
    slab_outline_is_polygon,
    slab_thickness_is_positive,
    start_and_end_are_positive,
    top_elevation_is_finite,
    typical_height_is_positive,
)

SQUARE = [(0, 0), (6000, 0), (6000, 6000), (0, 6000)]


def _group(start: int, end: int, height: float = 3000.0, **kw) -> StoreyGroup:
    return StoreyGroup(
        range=IntegerRange(start=start, end=end),
        typical_height=height,
        slab_thickness=kw.get("thickness", 200.0),
        slab_vertices=kw.get("vertices", SQUARE),
        column_coordinate_pairs=kw.get("columns", [(0, 0)]),
    )


class TestRangeValuesArePositive:
    def test_positive_range_passes(self):
        assert range_values_are_positive(_group(1, 5)) is None

    def test_zero_start(self):
        assert range_values_are_positive(_group(0, 5)) == RangeError.NON_POSITIVE_START

    def test_negative_end(self):
        assert range_values_are_positive(_group(1, -2)) == RangeError.NON_POSITIVE_END

    def test_start_reported_before_end(self):
        """Both bounds bad → only the start failure is reported by this rule."""
        assert start_and_end_are_positive(IntegerRange(start=0, end=0)) == (
            RangeError.NON_POSITIVE_START
        )


class TestRangeEndExceedsStart:
    def test_increasing_range_passes(self):
        assert range_end_exceeds_start(_group(1, 2)) is None

    def test_reversed_range_fails(self):
        assert range_end_exceeds_start(_group(5, 3)) == RangeError.START_GREATER_THAN_END

    def test_single_storey_fails_by_default(self):
        assert range_end_exceeds_start(_group(4, 4)) == RangeError.START_GREATER_THAN_END

    def test_single_storey_allowed_when_relaxed(self):
        assert range_end_reaches_start(_group(4, 4)) is None
        assert end_is_greater_than_start(
            IntegerRange(start=4, end=4), allow_single_storey=True
        ) is None

    def test_reversed_range_fails_when_relaxed(self):
        assert range_end_reaches_start(_group(5, 3)) == RangeError.START_GREATER_THAN_END


class TestTypicalHeightIsPositive:
    def test_positive(self):
        assert typical_height_is_positive(_group(1, 2, height=3000)) is None

    def test_zero(self):
        assert typical_height_is_positive(_group(1, 2, height=0)) == (
            HeightError.HEIGHT_EQUAL_TO_ZERO
        )

    def test_negative(self):
        assert typical_height_is_positive(_group(1, 2, height=-1)) == (
            HeightError.HEIGHT_LESS_THAN_ZERO
        )

    @pytest.mark.parametrize("h", [math.nan, math.inf, -math.inf])
    def test_not_a_number(self, h):
        assert typical_height_is_positive(_group(1, 2, height=h)) == HeightError.INVALID_HEIGHT


class TestSlabRules:
    def test_valid_slab(self):
        g = _group(1, 2)
        assert slab_thickness_is_positive(g) is None
        assert slab_outline_is_polygon(g) is None

    @pytest.mark.parametrize("t", [0.0, -200.0, math.nan])
    def test_bad_thickness(self, t):
        assert slab_thickness_is_positive(_group(1, 2, thickness=t)) == (
            SlabError.NON_POSITIVE_THICKNESS
        )

    def test_two_vertices_is_degenerate(self):
        g = _group(1, 2, vertices=[(0, 0), (1000, 0)])
        assert slab_outline_is_polygon(g) == SlabError.DEGENERATE_OUTLINE


class TestRangesAreConsecutive:
    def test_touching_ranges(self):
        assert group_ranges_are_consecutive(_group(1, 3), _group(4, 6)) is None

    def test_gap(self):
        assert group_ranges_are_consecutive(_group(1, 3), _group(5, 6)) == (
            RangeError.NON_CONSECUTIVE_RANGE
        )

    def test_overlap(self):
        assert group_ranges_are_consecutive(_group(1, 3), _group(3, 6)) == (
            RangeError.NON_CONSECUTIVE_RANGE
        )

    def test_order_matters(self):
        """Groups listed top-down are not consecutive."""
        assert ranges_are_consecutive(
            IntegerRange(start=4, end=6), IntegerRange(start=1, end=3)
        ) == RangeError.NON_CONSECUTIVE_RANGE


class TestBaseElevation:
    def test_default_zero_passes(self):
        assert base_elevation_is_valid(BuildingBlueprint()) is None

    def test_negative_fails(self):
        bp = BuildingBlueprint(base_elevation=-3000)
        assert base_elevation_is_valid(bp) == ElevationError.NEGATIVE_BASE_ELEVATION

    def test_nan_fails(self):
        bp = BuildingBlueprint(base_elevation=math.nan)
        assert base_elevation_is_valid(bp) == ElevationError.INVALID_BASE_ELEVATION


class TestTopElevation:
    def test_ordinary_building_passes(self):
        bp = BuildingBlueprint(storey_groups=[_group(1, 10), _group(11, 20, 3500)])
        assert top_elevation_is_finite(bp) is None

    def test_overflowing_stack_fails(self):
        bp = BuildingBlueprint(storey_groups=[_group(1, 3, 1e308)])
        assert top_elevation_is_finite(bp) == ElevationError.INVALID_TOP_ELEVATION

    def test_overflow_across_groups(self):
        bp = BuildingBlueprint(
            base_elevation=1e308,
            storey_groups=[_group(1, 1, 1e308), _group(2, 2, 1e308)],
        )
        assert top_elevation_is_finite(bp) == ElevationError.INVALID_TOP_ELEVATION

    def test_groups_with_bad_height_or_range_skipped(self):
        bp = BuildingBlueprint(storey_groups=[_group(1, 3, math.inf), _group(5, 1, 1e308)])
        assert top_elevation_is_finite(bp) is None

    def test_invalid_base_left_to_base_rule(self):
        bp = BuildingBlueprint(base_elevation=math.nan, storey_groups=[_group(1, 2)])
        assert top_elevation_is_finite(bp) is None
