"""IFC GlobalId generation.

IFC uses 22-character compressed GUIDs (base64-ish encoding of 128-bit UUIDs).
Expanded buildings carry names, not ids, so element ids are derived from the
building and element names. Re-exporting the same building gives the same
GlobalIds.
"""

from __future__ import annotations

import uuid

import ifcopenshell.guid

_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "blueprint-builder")


def generate_ifc_id() -> str:
    """Generate a new random IFC GlobalId (22 characters)."""
    return ifcopenshell.guid.compress(uuid.uuid4().hex)


def stable_ifc_id(*parts: str) -> str:
    """IFC GlobalId derived from the given name parts."""
    key = "/".join(parts)
    return ifcopenshell.guid.compress(uuid.uuid5(_NAMESPACE, key).hex)
