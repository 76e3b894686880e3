"""Accumulating blueprint validation.

Every group rule runs on every storey group and every pairwise rule runs
on every adjacent pair; all failures are collected before a verdict is
given. A blueprint with k defects produces k errors, never just the first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from blueprint_builder.errors import BlueprintValidationError
from blueprint_builder.generators.expansion import expand_blueprint
from blueprint_builder.models.blueprint import BuildingBlueprint, StoreyGroup
from blueprint_builder.models.building import Building
from blueprint_builder.validators import rules
from blueprint_builder.validators.errors import (
    ElevationError,
    FailureKind,
    SlabError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GroupRule = Callable[[StoreyGroup], "FailureKind | None"]
PairRule = Callable[[StoreyGroup, StoreyGroup], "FailureKind | None"]
BlueprintRule = Callable[[BuildingBlueprint], "FailureKind | None"]

GROUP_RULES: tuple[GroupRule, ...] = (
    rules.range_values_are_positive,
    rules.range_end_exceeds_start,
    rules.typical_height_is_positive,
    rules.slab_thickness_is_positive,
    rules.slab_outline_is_polygon,
)

PAIR_RULES: tuple[PairRule, ...] = (rules.group_ranges_are_consecutive,)

BLUEPRINT_RULES: tuple[BlueprintRule, ...] = (
    rules.base_elevation_is_valid,
    rules.top_elevation_is_finite,
)


def _detail(group: StoreyGroup, kind: FailureKind) -> str:
    """Short description of the offending values."""
    category = ValidationError(kind).category
    if category == "range":
        return f"range {group.range.start}-{group.range.end}"
    if category == "height":
        return f"typical height {group.typical_height} mm"
    if kind == SlabError.DEGENERATE_OUTLINE:
        return f"{len(group.slab_vertices)} vertices"
    return f"slab thickness {group.slab_thickness} mm"


def _blueprint_detail(blueprint: BuildingBlueprint, kind: FailureKind) -> str:
    if kind == ElevationError.INVALID_TOP_ELEVATION:
        return f"{len(blueprint.storey_groups)} group(s) stacked from {blueprint.base_elevation} mm"
    return f"base elevation {blueprint.base_elevation} mm"


def apply_check_to_all(
    rule: GroupRule, groups: Sequence[StoreyGroup]
) -> list[ValidationError]:
    """Run one group rule over every group. Returns the failures only."""
    errors: list[ValidationError] = []
    for i, group in enumerate(groups):
        kind = rule(group)
        if kind is not None:
            errors.append(ValidationError(kind, group_index=i, detail=_detail(group, kind)))
    return errors


def apply_check_to_pairs(
    rule: PairRule, groups: Sequence[StoreyGroup]
) -> list[ValidationError]:
    """Run one pairwise rule over every adjacent pair of groups."""
    errors: list[ValidationError] = []
    for i in range(1, len(groups)):
        prev, nxt = groups[i - 1], groups[i]
        kind = rule(prev, nxt)
        if kind is not None:
            detail = (
                f"group {i} ends at floor {prev.range.end}, "
                f"group {i + 1} starts at floor {nxt.range.start}"
            )
            errors.append(ValidationError(kind, group_index=i, detail=detail))
    return errors


def group_rules(allow_single_storey: bool = False) -> tuple[GroupRule, ...]:
    """Per-group rule set, optionally accepting one-floor groups."""
    if not allow_single_storey:
        return GROUP_RULES
    return tuple(
        rules.range_end_reaches_start if r is rules.range_end_exceeds_start else r
        for r in GROUP_RULES
    )


def check_blueprint(
    blueprint: BuildingBlueprint,
    allow_single_storey: bool = False,
) -> list[ValidationError]:
    """Run every rule against a blueprint. Returns the complete list of errors.

    Args:
        blueprint: Blueprint to check.
        allow_single_storey: Accept groups whose range covers a single floor.

    Returns:
        All failures, in rule order then group order. Empty when valid.
    """
    errors: list[ValidationError] = []
    for blueprint_rule in BLUEPRINT_RULES:
        kind = blueprint_rule(blueprint)
        if kind is not None:
            errors.append(ValidationError(kind, detail=_blueprint_detail(blueprint, kind)))
    groups = blueprint.storey_groups
    for rule in group_rules(allow_single_storey):
        errors.extend(apply_check_to_all(rule, groups))
    for pair_rule in PAIR_RULES:
        errors.extend(apply_check_to_pairs(pair_rule, groups))

    if errors:
        logger.info("Blueprint '%s' failed %d check(s)", blueprint.name, len(errors))
        for e in errors:
            logger.debug("  %s", e.message)
    else:
        logger.info(
            "Blueprint '%s' passed all checks (%d group(s))", blueprint.name, len(groups)
        )
    return errors


def validate(
    blueprint: BuildingBlueprint,
    allow_single_storey: bool = False,
) -> Building:
    """Validate a blueprint and expand it into a Building.

    Raises:
        BlueprintValidationError: one or more rules failed; ``errors`` holds
            every failure.
        EmptyBuildingError: the blueprint has no storey groups.
    """
    errors = check_blueprint(blueprint, allow_single_storey=allow_single_storey)
    if errors:
        raise BlueprintValidationError(errors)
    return expand_blueprint(blueprint)
