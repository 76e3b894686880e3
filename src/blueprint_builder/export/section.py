"""Building section rendering.

Draws an expanded building as a vertical section through the XZ plane:
slabs as bars at their elevation, columns as vertical lines, one label per
storey. Storeys sharing a master share its colour, so repeated floors read
as one block.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import to_hex

from blueprint_builder.models.building import Building, MasterStorey, SimilarStorey

PALETTE = "tab10"


@dataclass(frozen=True)
class StoreyRenderProps:
    """Display attributes of one storey."""

    name: str
    elevation: float
    height: float
    is_master: bool
    master_ref_name: str
    color: str  # hex, e.g. "#1f77b4"


def storey_render_props(building: Building) -> list[StoreyRenderProps]:
    """Render props for every storey, bottom to top."""
    cmap = matplotlib.colormaps[PALETTE]
    masters = [str(s.name) for s in building.storeys if isinstance(s, MasterStorey)]
    colors = {name: to_hex(cmap(i % cmap.N)) for i, name in enumerate(masters)}
    props: list[StoreyRenderProps] = []
    for storey in building.storeys:
        if isinstance(storey, SimilarStorey):
            master_name = str(storey.similar_to)
        else:
            master_name = str(storey.name)
        props.append(
            StoreyRenderProps(
                name=str(storey.name),
                elevation=storey.elevation.value,
                height=storey.height.value,
                is_master=isinstance(storey, MasterStorey),
                master_ref_name=master_name,
                color=colors[master_name],
            )
        )
    return props


def render_section(
    building: Building,
    output_path: str | Path,
    dpi: int = 150,
    title: str | None = None,
) -> Path:
    """Render the building section to an image.

    Args:
        building: Expanded building to draw.
        output_path: Output image path (PNG, SVG, PDF by suffix).
        dpi: Image resolution.
        title: Figure title; defaults to the building name.

    Returns:
        Path to the output image.
    """
    output_path = Path(output_path)
    if not building.storeys:
        raise ValueError("Building has no storeys to render")

    xs = [v.x for slab in building.slabs for v in slab.vertices]
    xs += [c.start.x for c in building.columns]
    x_min, x_max = (min(xs), max(xs)) if xs else (0.0, 1000.0)
    span = max(x_max - x_min, 1.0)

    fig, ax = plt.subplots(figsize=(8, 2 + 0.6 * len(building.storeys)))
    props = {p.name: p for p in storey_render_props(building)}

    for slab in building.slabs:
        p = props[str(slab.storey)]
        slab_xs = [v.x for v in slab.vertices] or [x_min, x_max]
        ax.add_patch(
            plt.Rectangle(
                (min(slab_xs), slab.elevation.value - slab.thickness.value),
                max(slab_xs) - min(slab_xs),
                slab.thickness.value,
                facecolor=p.color,
                edgecolor="black",
                linewidth=0.5,
                alpha=0.9 if p.is_master else 0.5,
            )
        )

    for column in building.columns:
        ax.plot(
            [column.start.x, column.end.x],
            [column.start.z, column.end.z],
            color="dimgray",
            linewidth=1.2,
        )

    for p in props.values():
        label = p.name if p.is_master else f"{p.name} (= {p.master_ref_name})"
        ax.text(
            x_max + span * 0.03,
            p.elevation + p.height / 2,
            label,
            va="center",
            fontsize=8,
            color=p.color,
            fontweight="bold" if p.is_master else "normal",
        )
        ax.axhline(p.elevation, color="lightgray", linewidth=0.5, zorder=0)

    ax.axhline(building.top_elevation, color="lightgray", linewidth=0.5, zorder=0)
    ax.set_xlim(x_min - span * 0.05, x_max + span * 0.45)
    bottom = building.storeys[0].elevation.value
    pad = 0.05 * (building.top_elevation - bottom)
    thickest = max((s.thickness.value for s in building.slabs), default=0.0)
    ax.set_ylim(bottom - pad - thickest, building.top_elevation + pad)
    ax.set_xlabel("x [mm]")
    ax.set_ylabel("elevation [mm]")
    ax.set_title(title or f"{building.name} — Section")

    try:
        plt.tight_layout()
        fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    return output_path
