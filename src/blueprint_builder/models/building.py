"""Expanded building model: storeys, slabs and columns.

A ``Building`` is produced by ``generators.expansion.expand_blueprint`` from
a validated blueprint. Cross references between elements are by storey name,
never by nesting: a similar storey names its master, slabs and columns name
the storeys they sit on.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from blueprint_builder.models.files import load_model, save_model
from blueprint_builder.models.geometry import Point3D
from blueprint_builder.models.scalars import Elevation, Height, Name, PositiveInt, PositiveLength


class MasterStorey(BaseModel):
    """First storey of a group. Owns the group's shared geometry."""

    kind: Literal["master"] = "master"
    name: Name
    number: PositiveInt = Field(description="Floor number from the blueprint range")
    elevation: Elevation
    height: Height


class SimilarStorey(BaseModel):
    """Storey repeating a master's geometry (ETABS "similar to")."""

    kind: Literal["similar"] = "similar"
    name: Name
    number: PositiveInt = Field(description="Floor number from the blueprint range")
    elevation: Elevation
    height: Height
    similar_to: Name = Field(description="Name of the master storey")


Storey = Annotated[Union[MasterStorey, SimilarStorey], Field(discriminator="kind")]


class Slab(BaseModel):
    """Floor slab at a storey's elevation."""

    name: Name
    storey: Name = Field(description="Name of the owning storey")
    elevation: Elevation
    thickness: PositiveLength
    vertices: list[Point3D]


class Column(BaseModel):
    """Vertical line element from one storey's elevation to the next."""

    name: Name
    base_storey: Name
    top_storey: Name
    start: Point3D
    end: Point3D

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


class Building(BaseModel):
    """Top-level expanded building. Storeys are ordered bottom to top."""

    name: str = Field(default="Untitled Building", description="Building name")
    units: str = Field(
        default="millimetres",
        description="Coordinate unit system. Only 'millimetres' is supported.",
    )
    storeys: list[Storey] = Field(default_factory=list)
    slabs: list[Slab] = Field(default_factory=list)
    columns: list[Column] = Field(default_factory=list)

    @field_validator("units")
    @classmethod
    def only_millimetres(cls, v: str) -> str:
        if v != "millimetres":
            raise ValueError("Only 'millimetres' unit system is currently supported")
        return v

    @model_validator(mode="after")
    def references_resolve(self) -> Building:
        names = {s.name for s in self.storeys}
        masters = {s.name for s in self.storeys if isinstance(s, MasterStorey)}
        for storey in self.storeys:
            if isinstance(storey, SimilarStorey) and storey.similar_to not in masters:
                raise ValueError(
                    f"Storey '{storey.name}' is similar to unknown master '{storey.similar_to}'"
                )
        for slab in self.slabs:
            if slab.storey not in names:
                raise ValueError(f"Slab '{slab.name}' references unknown storey '{slab.storey}'")
        for column in self.columns:
            for ref in (column.base_storey, column.top_storey):
                if ref not in names:
                    raise ValueError(
                        f"Column '{column.name}' references unknown storey '{ref}'"
                    )
        return self

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> Building:
        """Load a building from a JSON file."""
        return load_model(cls, path)

    def save(self, path: str | Path) -> Path:
        """Save the building to a JSON file. Creates parent dirs if needed."""
        return save_model(self, path)

    # ── Lookups ───────────────────────────────────────────────────────

    def get_storey(self, name: str | Name) -> MasterStorey | SimilarStorey | None:
        """Find a storey by name."""
        name = str(name)
        return next((s for s in self.storeys if str(s.name) == name), None)

    def master_of(self, storey: MasterStorey | SimilarStorey) -> MasterStorey:
        """Master storey whose geometry the given storey uses."""
        if isinstance(storey, MasterStorey):
            return storey
        master = self.get_storey(storey.similar_to)
        if not isinstance(master, MasterStorey):
            raise ValueError(f"Storey '{storey.name}' has no master '{storey.similar_to}'")
        return master

    def similar_storeys(self, master: MasterStorey) -> list[SimilarStorey]:
        """Storeys that reference the given master, bottom to top."""
        return [
            s for s in self.storeys
            if isinstance(s, SimilarStorey) and s.similar_to == master.name
        ]

    def slabs_on(self, storey_name: str | Name) -> list[Slab]:
        storey_name = str(storey_name)
        return [s for s in self.slabs if str(s.storey) == storey_name]

    def columns_from(self, storey_name: str | Name) -> list[Column]:
        """Columns standing on the given storey."""
        storey_name = str(storey_name)
        return [c for c in self.columns if str(c.base_storey) == storey_name]

    @property
    def top_elevation(self) -> float:
        """Elevation of the top of the highest storey."""
        if not self.storeys:
            return 0.0
        top = self.storeys[-1]
        return top.elevation.value + top.height.value
