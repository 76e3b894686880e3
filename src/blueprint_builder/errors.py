"""Exceptions raised at the library boundary.

Rule failures inside the engine are plain values (see
``validators.errors``); these exceptions only carry them out to callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blueprint_builder.validators.errors import ValidationError


class BlueprintError(ValueError):
    """Base class for every error this package raises on purpose."""


class BlueprintValidationError(BlueprintError):
    """A blueprint broke one or more rules. ``errors`` holds all of them."""

    def __init__(self, errors: list[ValidationError]):
        self.errors = list(errors)
        super().__init__(
            f"Blueprint failed validation with {len(self.errors)} error(s): "
            + "; ".join(e.message for e in self.errors)
        )


class EmptyBuildingError(BlueprintError):
    """A blueprint with no storey groups cannot be expanded."""

    def __init__(self, message: str = "Blueprint contains no storey groups."):
        super().__init__(message)


class BlueprintFileError(BlueprintError):
    """A blueprint or building file could not be read."""


class PathError(BlueprintFileError):
    """File does not exist or is not a regular file."""


class FileExtensionError(BlueprintFileError):
    """File has an unsupported extension."""


class DeserializationError(BlueprintFileError):
    """File content does not match the expected schema."""
