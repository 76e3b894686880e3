"""Blueprint Builder CLI.

Usage:
    python -m blueprint_builder <command> <blueprint.json> [options]

Every command loads a blueprint, validates it and prints JSON on stdout.
Validation failures and unreadable files exit with code 1 and
``{"ok": false, ...}``.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from blueprint_builder.errors import (
    BlueprintFileError,
    BlueprintValidationError,
    EmptyBuildingError,
)
from blueprint_builder.models.blueprint import BuildingBlueprint
from blueprint_builder.models.building import Building, SimilarStorey
from blueprint_builder.validators.engine import check_blueprint, validate

app = typer.Typer(
    name="blueprint_builder",
    help="Blueprint Builder — expand storey-group blueprints into building models.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(error: str, **extra) -> NoReturn:
    _output({"ok": False, "error": error, **extra})
    raise typer.Exit(1)


def _load_blueprint(path: Path) -> BuildingBlueprint:
    try:
        return BuildingBlueprint.load(path)
    except BlueprintFileError as e:
        _fail(f"{type(e).__name__}: {e}")


def _build(path: Path, allow_single_storey: bool) -> Building:
    """Load, validate and expand a blueprint, or exit with the errors."""
    blueprint = _load_blueprint(path)
    try:
        return validate(blueprint, allow_single_storey=allow_single_storey)
    except BlueprintValidationError as e:
        _fail("Blueprint failed validation", errors=[err.to_dict() for err in e.errors])
    except EmptyBuildingError as e:
        _fail(str(e))


def _storey_json(storey) -> dict:
    return {
        "name": str(storey.name),
        "number": storey.number.value,
        "kind": storey.kind,
        "elevation": storey.elevation.value,
        "height": storey.height.value,
        "similar_to": str(storey.similar_to) if isinstance(storey, SimilarStorey) else None,
    }


def _summary(building: Building) -> dict:
    return {
        "building": building.name,
        "storeys": len(building.storeys),
        "masters": sum(1 for s in building.storeys if s.kind == "master"),
        "slabs": len(building.slabs),
        "columns": len(building.columns),
        "top_elevation": building.top_elevation,
    }


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """Configure logging. Logs go to stderr so stdout stays JSON."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("validate")
def validate_cmd(
    blueprint: Path = typer.Argument(..., help="Blueprint JSON file"),
    allow_single_storey: bool = typer.Option(
        False, "--allow-single-storey", help="Accept groups covering a single floor"
    ),
):
    """Run all rules on a blueprint and report every failure."""
    bp = _load_blueprint(blueprint)
    errors = check_blueprint(bp, allow_single_storey=allow_single_storey)
    if errors:
        _fail(
            "Blueprint failed validation",
            errors=[e.to_dict() for e in errors],
        )
    if not bp.storey_groups:
        _fail(str(EmptyBuildingError()))
    _output({"ok": True, "groups": len(bp.storey_groups), "errors": []})


@app.command()
def expand(
    blueprint: Path = typer.Argument(..., help="Blueprint JSON file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write building JSON here"),
    allow_single_storey: bool = typer.Option(
        False, "--allow-single-storey", help="Accept groups covering a single floor"
    ),
):
    """Expand a blueprint into storeys, slabs and columns."""
    building = _build(blueprint, allow_single_storey)
    result: dict = {"ok": True, **_summary(building)}
    if output:
        result["saved"] = str(building.save(output))
    _output(result)


@app.command("list")
def list_cmd(
    blueprint: Path = typer.Argument(..., help="Blueprint JSON file"),
    what: str = typer.Argument(..., help="What to list: storeys, slabs, columns"),
    storey: Optional[str] = typer.Option(None, "--storey", "-s", help="Filter by storey"),
    allow_single_storey: bool = typer.Option(
        False, "--allow-single-storey", help="Accept groups covering a single floor"
    ),
):
    """List expanded building elements."""
    building = _build(blueprint, allow_single_storey)
    result: dict = {"ok": True}

    if what == "storeys":
        result["storeys"] = [
            _storey_json(s) for s in building.storeys
            if not storey or str(s.name) == storey
        ]
    elif what == "slabs":
        result["slabs"] = [
            {
                "name": str(s.name),
                "storey": str(s.storey),
                "elevation": s.elevation.value,
                "thickness": s.thickness.value,
                "vertices": [[v.x, v.y, v.z] for v in s.vertices],
            }
            for s in building.slabs
            if not storey or str(s.storey) == storey
        ]
    elif what == "columns":
        result["columns"] = [
            {
                "name": str(c.name),
                "base_storey": str(c.base_storey),
                "top_storey": str(c.top_storey),
                "start": [c.start.x, c.start.y, c.start.z],
                "end": [c.end.x, c.end.y, c.end.z],
            }
            for c in building.columns
            if not storey or str(c.base_storey) == storey
        ]
    else:
        _fail(f"Unknown list target: {what}. Use: storeys, slabs, columns")

    _output(result)


@app.command("export")
def export_cmd(
    blueprint: Path = typer.Argument(..., help="Blueprint JSON file"),
    output: Path = typer.Option(..., "--output", "-o", help="Output file"),
    format: str = typer.Option("ifc", "--format", "-f", help="Export format (ifc, json)"),
    allow_single_storey: bool = typer.Option(
        False, "--allow-single-storey", help="Accept groups covering a single floor"
    ),
):
    """Export the expanded building to IFC or JSON."""
    building = _build(blueprint, allow_single_storey)
    if format == "ifc":
        from blueprint_builder.export.ifc import export_ifc

        path = export_ifc(building, output)
    elif format == "json":
        path = building.save(output)
    else:
        _fail(f"Unknown format: {format}")
    _output({"ok": True, "exported": str(path), "format": format})


@app.command()
def render(
    blueprint: Path = typer.Argument(..., help="Blueprint JSON file"),
    output: Path = typer.Option(..., "--output", "-o", help="Output image"),
    dpi: int = typer.Option(150, "--dpi", help="Image resolution"),
    allow_single_storey: bool = typer.Option(
        False, "--allow-single-storey", help="Accept groups covering a single floor"
    ),
):
    """Render a section of the expanded building."""
    from blueprint_builder.export.section import render_section

    building = _build(blueprint, allow_single_storey)
    path = render_section(building, output, dpi=dpi)
    _output({"ok": True, "rendered": str(path)})


@app.command()
def version() -> None:
    """Show version."""
    from blueprint_builder import __version__

    _output({"ok": True, "version": __version__})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
