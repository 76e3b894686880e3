"""User-authored blueprint: storey groups before validation.

Nothing here is checked beyond basic types. A blueprint may contain negative
heights, overlapping ranges and so on; the rule engine in
``blueprint_builder.validators`` reports those. JSON files use camelCase keys
(``typicalHeight``, ``storeyGroups``), Python code uses snake_case.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from blueprint_builder.models.files import load_model, save_model


class _Input(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IntegerRange(_Input):
    """Inclusive floor-number range, e.g. storeys 1-5."""

    start: int
    end: int

    def floors(self) -> range:
        """Floor numbers covered, ascending. Empty when start > end."""
        return range(self.start, self.end + 1)


class StoreyGroup(_Input):
    """N physically identical floors sharing height, slab and column layout."""

    range: IntegerRange
    typical_height: float = Field(description="Floor-to-floor height in mm")
    slab_thickness: float = Field(description="Slab thickness in mm")
    slab_vertices: list[tuple[float, float]] = Field(
        description="Slab outline in plan, mm"
    )
    column_coordinate_pairs: list[tuple[float, float]] = Field(
        default_factory=list,
        description="Column positions in plan, mm",
    )


class BuildingBlueprint(_Input):
    """Base elevation plus storey groups ordered bottom to top."""

    name: str = "Untitled Building"
    base_elevation: float = Field(default=0.0, description="Datum of the lowest storey in mm")
    storey_groups: list[StoreyGroup] = Field(default_factory=list)

    @classmethod
    def load(cls, path: str | Path) -> BuildingBlueprint:
        """Load a blueprint from a JSON file."""
        return load_model(cls, path)

    def save(self, path: str | Path) -> Path:
        """Save the blueprint to a JSON file."""
        return save_model(self, path)
