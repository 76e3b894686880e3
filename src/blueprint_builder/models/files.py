"""JSON file reading shared by blueprint and building models."""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

import pydantic

from blueprint_builder.errors import DeserializationError, FileExtensionError, PathError

M = TypeVar("M", bound=pydantic.BaseModel)

JSON_SUFFIXES = (".json",)


def load_model(model: type[M], path: str | Path) -> M:
    """Read a JSON file into a pydantic model.

    Raises:
        PathError: path is missing or not a file.
        FileExtensionError: path does not end in ``.json``.
        DeserializationError: content is not valid JSON for ``model``.
    """
    path = Path(path)
    if not path.is_file():
        raise PathError(f"File not found: {path}")
    if path.suffix.lower() not in JSON_SUFFIXES:
        raise FileExtensionError(
            f"Unsupported file extension '{path.suffix}' for {path.name}, expected .json"
        )
    try:
        return model.model_validate_json(path.read_text())
    except pydantic.ValidationError as e:
        raise DeserializationError(
            f"{path.name} is not a valid {model.__name__}: {e.error_count()} problem(s)\n{e}"
        ) from e


def save_model(instance: pydantic.BaseModel, path: str | Path) -> Path:
    """Write a model as indented JSON. Creates parent dirs if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(instance.model_dump_json(indent=2, by_alias=True))
    return path
