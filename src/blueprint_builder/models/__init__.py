"""Blueprint input models and expanded building models."""

from blueprint_builder.models.scalars import (
    Elevation,
    EmptyNameError,
    Height,
    Name,
    NegativeElevationError,
    NotFiniteError,
    NotPositiveError,
    PositiveInt,
    PositiveLength,
    ScalarError,
)
from blueprint_builder.models.geometry import Point2D, Point3D
from blueprint_builder.models.blueprint import BuildingBlueprint, IntegerRange, StoreyGroup
from blueprint_builder.models.building import (
    Building,
    Column,
    MasterStorey,
    SimilarStorey,
    Slab,
    Storey,
)

__all__ = [
    "Elevation",
    "EmptyNameError",
    "Height",
    "Name",
    "NegativeElevationError",
    "NotFiniteError",
    "NotPositiveError",
    "PositiveInt",
    "PositiveLength",
    "ScalarError",
    "Point2D",
    "Point3D",
    "BuildingBlueprint",
    "IntegerRange",
    "StoreyGroup",
    "Building",
    "Column",
    "MasterStorey",
    "SimilarStorey",
    "Slab",
    "Storey",
]
