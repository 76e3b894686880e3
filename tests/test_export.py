"""Tests for IFC export and section rendering."""

import ifcopenshell
import ifcopenshell.util.element
import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from blueprint_builder.export.ifc import STOREY_PSET, IFCExporter, export_ifc
from blueprint_builder.export.section import render_section, storey_render_props
from blueprint_builder.generators import expand_blueprint
from blueprint_builder.models import (
    Building,
    BuildingBlueprint,
    Elevation,
    Height,
    IntegerRange,
    MasterStorey,
    Name,
    PositiveInt,
    SimilarStorey,
    StoreyGroup,
)
from blueprint_builder.models.ifc_id import stable_ifc_id

SQUARE = [(0, 0), (6000, 0), (6000, 6000), (0, 6000)]


def _building():
    """Two groups of two storeys, two columns per storey."""
    groups = [
        StoreyGroup(
            range=IntegerRange(start=1, end=2),
            typical_height=3000,
            slab_thickness=250,
            slab_vertices=SQUARE,
            column_coordinate_pairs=[(0, 0), (6000, 6000)],
        ),
        StoreyGroup(
            range=IntegerRange(start=3, end=4),
            typical_height=3500,
            slab_thickness=200,
            slab_vertices=SQUARE,
            column_coordinate_pairs=[(0, 0), (6000, 6000)],
        ),
    ]
    return expand_blueprint(BuildingBlueprint(name="Export Test", storey_groups=groups))


class TestIFCExport:
    def test_export_creates_file(self, tmp_path):
        result = IFCExporter(_building()).export(tmp_path / "test.ifc")
        assert result.exists()
        assert result.stat().st_size > 0

    def test_hierarchy_counts(self, tmp_path):
        path = export_ifc(_building(), tmp_path / "test.ifc")
        f = ifcopenshell.open(str(path))
        assert len(f.by_type("IfcProject")) == 1
        assert len(f.by_type("IfcBuilding")) == 1
        assert len(f.by_type("IfcBuildingStorey")) == 4
        assert len(f.by_type("IfcSlab")) == 4
        assert len(f.by_type("IfcColumn")) == 6

    def test_storey_elevations(self, tmp_path):
        path = export_ifc(_building(), tmp_path / "test.ifc")
        f = ifcopenshell.open(str(path))
        elevations = sorted(s.Elevation for s in f.by_type("IfcBuildingStorey"))
        assert elevations == [0.0, 3000.0, 6000.0, 9500.0]

    def test_header_file_name(self, tmp_path):
        path = export_ifc(_building(), tmp_path / "test.ifc")
        f = ifcopenshell.open(str(path))
        assert f.header.file_name.name == "Export Test.ifc"

    def test_millimetre_units(self, tmp_path):
        path = export_ifc(_building(), tmp_path / "test.ifc")
        f = ifcopenshell.open(str(path))
        length = [u for u in f.by_type("IfcSIUnit") if u.UnitType == "LENGTHUNIT"]
        assert length[0].Prefix == "MILLI"

    def test_master_similar_pset(self, tmp_path):
        path = export_ifc(_building(), tmp_path / "test.ifc")
        f = ifcopenshell.open(str(path))
        by_name = {s.Name: s for s in f.by_type("IfcBuildingStorey")}
        pset = ifcopenshell.util.element.get_psets(by_name["Storey 4"])[STOREY_PSET]
        assert not pset["IsMaster"]
        assert pset["SimilarTo"] == "Storey 3"
        pset = ifcopenshell.util.element.get_psets(by_name["Storey 3"])[STOREY_PSET]
        assert pset["IsMaster"]

    def test_elements_contained_in_storeys(self, tmp_path):
        path = export_ifc(_building(), tmp_path / "test.ifc")
        f = ifcopenshell.open(str(path))
        for element in f.by_type("IfcSlab") + f.by_type("IfcColumn"):
            container = ifcopenshell.util.element.get_container(element)
            assert container is not None
            assert container.is_a("IfcBuildingStorey")

    def test_stable_ids(self, tmp_path):
        a = ifcopenshell.open(str(export_ifc(_building(), tmp_path / "a.ifc")))
        b = ifcopenshell.open(str(export_ifc(_building(), tmp_path / "b.ifc")))
        ids_a = sorted(s.GlobalId for s in a.by_type("IfcBuildingStorey"))
        ids_b = sorted(s.GlobalId for s in b.by_type("IfcBuildingStorey"))
        assert ids_a == ids_b


class TestIfcId:
    def test_stable_id_is_compressed_guid(self):
        assert len(stable_ifc_id("Building", "storey", "Storey 1")) == 22

    def test_stable_id_depends_on_parts(self):
        assert stable_ifc_id("a", "b") == stable_ifc_id("a", "b")
        assert stable_ifc_id("a", "b") != stable_ifc_id("a", "c")


class TestSection:
    def test_render_props(self):
        props = storey_render_props(_building())
        assert [p.is_master for p in props] == [True, False, True, False]
        assert [p.master_ref_name for p in props] == [
            "Storey 1", "Storey 1", "Storey 3", "Storey 3",
        ]
        assert props[0].color == props[1].color
        assert props[0].color != props[2].color
        assert props[3].elevation == 9500

    def test_render_section(self, tmp_path):
        result = render_section(_building(), tmp_path / "section.png", dpi=50)
        assert result.exists()
        assert result.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_render_props_similar_listed_before_master(self):
        similar = SimilarStorey(
            name=Name.create("Storey 2"),
            number=PositiveInt.create(2),
            elevation=Elevation.create(3000),
            height=Height.create(3000),
            similar_to=Name.create("Storey 1"),
        )
        master = MasterStorey(
            name=Name.create("Storey 1"),
            number=PositiveInt.create(1),
            elevation=Elevation.create(0),
            height=Height.create(3000),
        )
        props = storey_render_props(Building(storeys=[similar, master]))
        assert [p.name for p in props] == ["Storey 2", "Storey 1"]
        assert props[0].color == props[1].color

    def test_figure_closed_when_save_fails(self, tmp_path, monkeypatch):
        def broken_savefig(self, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(Figure, "savefig", broken_savefig)
        before = set(plt.get_fignums())
        with pytest.raises(OSError):
            render_section(_building(), tmp_path / "section.png", dpi=50)
        assert set(plt.get_fignums()) == before
