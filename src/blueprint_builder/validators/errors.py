"""Rule failure taxonomy.

Every rule reports at most one failure kind. Kinds are grouped by what
part of the blueprint they concern; each carries a fixed human-readable
message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RangeError(str, Enum):
    """Structural defects in floor numbering."""

    NON_POSITIVE_START = "NON_POSITIVE_START"
    NON_POSITIVE_END = "NON_POSITIVE_END"
    START_GREATER_THAN_END = "START_GREATER_THAN_END"
    NON_CONSECUTIVE_RANGE = "NON_CONSECUTIVE_RANGE"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


class HeightError(str, Enum):
    """Defects in a group's typical storey height."""

    HEIGHT_LESS_THAN_ZERO = "HEIGHT_LESS_THAN_ZERO"
    HEIGHT_EQUAL_TO_ZERO = "HEIGHT_EQUAL_TO_ZERO"
    INVALID_HEIGHT = "INVALID_HEIGHT"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


class SlabError(str, Enum):
    """Defects in a group's slab definition."""

    NON_POSITIVE_THICKNESS = "NON_POSITIVE_THICKNESS"
    DEGENERATE_OUTLINE = "DEGENERATE_OUTLINE"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


class ElevationError(str, Enum):
    """Defects in the blueprint's base or top elevation."""

    NEGATIVE_BASE_ELEVATION = "NEGATIVE_BASE_ELEVATION"
    INVALID_BASE_ELEVATION = "INVALID_BASE_ELEVATION"
    INVALID_TOP_ELEVATION = "INVALID_TOP_ELEVATION"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


FailureKind = Union[RangeError, HeightError, SlabError, ElevationError]

_MESSAGES: dict[FailureKind, str] = {
    RangeError.NON_POSITIVE_START: "Non-positive start value given for storey range.",
    RangeError.NON_POSITIVE_END: "Non-positive end value given for storey range.",
    RangeError.START_GREATER_THAN_END: "Range start value is greater than end value.",
    RangeError.NON_CONSECUTIVE_RANGE: "Adjacent storey ranges are non-consecutive.",
    HeightError.HEIGHT_LESS_THAN_ZERO: "Storey height is less than zero.",
    HeightError.HEIGHT_EQUAL_TO_ZERO: "Storey height is equal to zero.",
    HeightError.INVALID_HEIGHT: "Invalid storey height.",
    SlabError.NON_POSITIVE_THICKNESS: "Slab thickness is not greater than zero.",
    SlabError.DEGENERATE_OUTLINE: "Slab outline has fewer than three vertices.",
    ElevationError.NEGATIVE_BASE_ELEVATION: "Base elevation is below zero.",
    ElevationError.INVALID_BASE_ELEVATION: "Invalid base elevation.",
    ElevationError.INVALID_TOP_ELEVATION: "Building top elevation is not a finite number.",
}

_CATEGORIES = {
    RangeError: "range",
    HeightError: "height",
    SlabError: "slab",
    ElevationError: "elevation",
}


@dataclass(frozen=True)
class ValidationError:
    """A single rule failure.

    ``group_index`` is the 0-based position of the offending storey group in
    the blueprint (the later group for pairwise rules), or None for
    blueprint-level rules.
    """

    kind: FailureKind
    group_index: int | None = None
    detail: str = ""

    @property
    def category(self) -> str:
        return _CATEGORIES[type(self.kind)]

    @property
    def message(self) -> str:
        where = "Blueprint" if self.group_index is None else f"Storey group {self.group_index + 1}"
        text = f"{where}: {self.kind.message}"
        if self.detail:
            text += f" ({self.detail})"
        return text

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "kind": self.kind.value,
            "group": None if self.group_index is None else self.group_index + 1,
            "message": self.message,
        }
