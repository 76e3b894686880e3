"""Validated scalar types.

Each type wraps a primitive value and is built through its ``create``
factory, which raises a ``ScalarError`` instead of clamping. They are
pydantic root models, so they serialize as the bare number or string.
Lengths are millimetres throughout.
"""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import ConfigDict, Field, RootModel


class ScalarError(ValueError):
    """A primitive value was rejected at the boundary."""


class NotPositiveError(ScalarError):
    """Value must be strictly greater than zero."""


class NotFiniteError(ScalarError):
    """Value must be a finite number."""


class NegativeElevationError(ScalarError):
    """Elevation must be zero or above the base datum."""


class EmptyNameError(ScalarError):
    """Name must contain at least one non-blank character."""


def _require_finite(x: float) -> float:
    if not math.isfinite(x):
        raise NotFiniteError(f"Expected a finite number, got {x}")
    return float(x)


class PositiveInt(RootModel[Annotated[int, Field(gt=0)]]):
    """Integer strictly greater than zero."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(cls, x: int) -> PositiveInt:
        if x <= 0:
            raise NotPositiveError(f"Integer <= 0: {x}")
        return cls(x)

    @property
    def value(self) -> int:
        return self.root


class PositiveLength(RootModel[Annotated[float, Field(gt=0, allow_inf_nan=False)]]):
    """Length in millimetres, strictly greater than zero."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(cls, x: float) -> PositiveLength:
        x = _require_finite(x)
        if x <= 0:
            raise NotPositiveError(f"Length <= 0 mm: {x}")
        return cls(x)

    @property
    def value(self) -> float:
        return self.root


class Name(RootModel[Annotated[str, Field(min_length=1)]]):
    """Identifying string with no further meaning."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(cls, s: str) -> Name:
        if not s or not s.strip():
            raise EmptyNameError("Name must not be empty")
        return cls(s)

    @property
    def value(self) -> str:
        return self.root

    def __str__(self) -> str:
        return self.root


class Elevation(RootModel[Annotated[float, Field(ge=0, allow_inf_nan=False)]]):
    """Height above the building's base datum in millimetres."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(cls, x: float) -> Elevation:
        x = _require_finite(x)
        if x < 0:
            raise NegativeElevationError(f"Elevation below datum: {x} mm")
        return cls(x)

    @property
    def value(self) -> float:
        return self.root

    def raised_by(self, height: Height) -> Elevation:
        """Elevation one storey of the given height higher."""
        return Elevation.create(self.root + height.value)


class Height(RootModel[PositiveLength]):
    """Vertical extent of a single storey."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(cls, x: float) -> Height:
        return cls(PositiveLength.create(x))

    @property
    def value(self) -> float:
        return self.root.value
