"""Blueprint expansion: storey groups → per-floor storeys, slabs, columns.

Walks the groups bottom to top with an elevation cursor:
- first floor of each group becomes a master storey, the rest are similar
  storeys pointing at it
- every floor gets one slab, the group's outline lifted to its elevation
- every storey except the top one gets a column per column position of its
  group, running up to the next storey's elevation

Expects a blueprint that already passed ``validators.engine.check_blueprint``.
Geometry is never compared; storeys in one group are identical by definition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blueprint_builder.errors import EmptyBuildingError
from blueprint_builder.models.blueprint import BuildingBlueprint, StoreyGroup
from blueprint_builder.models.building import (
    Building,
    Column,
    MasterStorey,
    SimilarStorey,
    Slab,
)
from blueprint_builder.models.geometry import Point2D
from blueprint_builder.models.scalars import (
    Elevation,
    Height,
    Name,
    PositiveInt,
    PositiveLength,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Floor:
    storey: MasterStorey | SimilarStorey
    group: StoreyGroup


def storey_name(number: int) -> str:
    return f"Storey {number}"


def expand_blueprint(blueprint: BuildingBlueprint) -> Building:
    """Expand a validated blueprint into a Building.

    Raises:
        EmptyBuildingError: the blueprint has no storey groups.
    """
    if not blueprint.storey_groups:
        raise EmptyBuildingError()

    cursor = Elevation.create(blueprint.base_elevation)
    floors: list[_Floor] = []
    slabs: list[Slab] = []

    for group in blueprint.storey_groups:
        height = Height.create(group.typical_height)
        thickness = PositiveLength.create(group.slab_thickness)
        outline = [Point2D.from_pair(v) for v in group.slab_vertices]
        master: MasterStorey | None = None

        for number in group.range.floors():
            name = Name.create(storey_name(number))
            if master is None:
                master = MasterStorey(
                    name=name,
                    number=PositiveInt.create(number),
                    elevation=cursor,
                    height=height,
                )
                storey: MasterStorey | SimilarStorey = master
            else:
                storey = SimilarStorey(
                    name=name,
                    number=PositiveInt.create(number),
                    elevation=cursor,
                    height=height,
                    similar_to=master.name,
                )
            floors.append(_Floor(storey=storey, group=group))
            slabs.append(
                Slab(
                    name=Name.create(f"Slab {number}"),
                    storey=name,
                    elevation=cursor,
                    thickness=thickness,
                    vertices=[p.lift(cursor.value) for p in outline],
                )
            )
            cursor = cursor.raised_by(height)

    columns = _columns_between(floors)
    building = Building(
        name=blueprint.name,
        storeys=[f.storey for f in floors],
        slabs=slabs,
        columns=columns,
    )
    logger.info(
        "Expanded '%s': %d storeys (%d master), %d slabs, %d columns",
        building.name,
        len(building.storeys),
        sum(1 for s in building.storeys if isinstance(s, MasterStorey)),
        len(building.slabs),
        len(building.columns),
    )
    return building


def _columns_between(floors: list[_Floor]) -> list[Column]:
    """One column per lower-storey column position for each adjacent storey pair."""
    columns: list[Column] = []
    for lower, upper in zip(floors, floors[1:]):
        z0 = lower.storey.elevation.value
        z1 = upper.storey.elevation.value
        for k, pair in enumerate(lower.group.column_coordinate_pairs, start=1):
            p = Point2D.from_pair(pair)
            columns.append(
                Column(
                    name=Name.create(f"C{lower.storey.number.value}-{k}"),
                    base_storey=lower.storey.name,
                    top_storey=upper.storey.name,
                    start=p.lift(z0),
                    end=p.lift(z1),
                )
            )
    return columns
