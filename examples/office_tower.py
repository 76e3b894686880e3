"""Twelve-storey office tower from three storey groups.

Storeys 1-2:   podium, 4.5 m, 24 x 18 m footprint
Storeys 3-10:  typical office floors, 3.6 m
Storeys 11-12: set-back plant floors, 3.2 m

Validates the blueprint, expands it, then writes building JSON, IFC and a
section image next to this file.
"""

from pathlib import Path

from blueprint_builder.errors import BlueprintValidationError
from blueprint_builder.export.ifc import IFCExporter
from blueprint_builder.export.section import render_section
from blueprint_builder.models import BuildingBlueprint, MasterStorey
from blueprint_builder.validators import validate

here = Path(__file__).parent
blueprint = BuildingBlueprint.load(here / "office_tower.json")

# --- Validate + expand ---
try:
    building = validate(blueprint)
except BlueprintValidationError as e:
    print("⚠️  Validation errors:")
    for err in e.errors:
        print(f"  [{err.category}] {err.message}")
    raise SystemExit(1)
print("✅ Validation passed")

# --- Export ---
output = here / "output"
output.mkdir(exist_ok=True)

building.save(output / "office_tower.json")
result = IFCExporter(building).export(output / "office_tower.ifc")
render_section(building, output / "office_tower_section.png")

print(f"📁 Exported to: {result}")
print(f"   Storeys: {len(building.storeys)}")
print(f"   Masters: {sum(1 for s in building.storeys if isinstance(s, MasterStorey))}")
print(f"   Slabs:   {len(building.slabs)}")
print(f"   Columns: {len(building.columns)}")
print(f"   Height:  {building.top_elevation / 1000:.1f} m")
