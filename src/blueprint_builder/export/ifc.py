"""IFC export via ifcopenshell.

Converts an expanded Building to IFC 2x3 for import into structural or
BIM applications. Lengths are written in millimetres.

Storeys become IfcBuildingStorey, slabs IfcSlab (extruded outline, top face
at the storey elevation), columns IfcColumn with an axis representation.
Master/similar relations are kept in a per-storey property set.
"""

from __future__ import annotations

import logging
from pathlib import Path

import ifcopenshell

from blueprint_builder.models.building import Building, Column, MasterStorey, SimilarStorey, Slab
from blueprint_builder.models.ifc_id import generate_ifc_id, stable_ifc_id

logger = logging.getLogger(__name__)

STOREY_PSET = "Pset_BlueprintStorey"


def _new_guid() -> str:
    """Generate a new IFC GlobalId for IFC-only entities (relationships, property sets)."""
    return generate_ifc_id()


class IFCExporter:
    """Export a Building model to IFC file."""

    def __init__(self, building: Building):
        self.building = building
        self.file = ifcopenshell.file(schema="IFC2X3")
        self._setup_header()
        self._context: ifcopenshell.entity_instance | None = None
        self._body_context: ifcopenshell.entity_instance | None = None
        self._axis_context: ifcopenshell.entity_instance | None = None

    def _setup_header(self) -> None:
        """Set IFC file header metadata."""
        file_name = self.file.header.file_name
        file_name.name = f"{self.building.name}.ifc"
        file_name.author = ("Blueprint Builder",)
        file_name.organization = ("",)

    def _id(self, *parts: str) -> str:
        return stable_ifc_id(self.building.name, *parts)

    def export(self, output_path: str | Path) -> Path:
        """Export the building to an IFC file. Returns the output path."""
        output_path = Path(output_path)

        self._create_contexts()

        # IFC hierarchy: Project → Site → Building → Storeys
        ifc_project = self._create_project()
        ifc_site = self._create_site(ifc_project)
        ifc_building = self._create_building(ifc_site)

        storeys: dict[str, ifcopenshell.entity_instance] = {}
        for storey in self.building.storeys:
            storeys[str(storey.name)] = self._create_storey(storey, ifc_building)

        contained: dict[str, list[ifcopenshell.entity_instance]] = {
            name: [] for name in storeys
        }
        for slab in self.building.slabs:
            contained[str(slab.storey)].append(self._create_slab(slab))
        for column in self.building.columns:
            contained[str(column.base_storey)].append(self._create_column(column))

        for name, products in contained.items():
            if products:
                self.file.createIfcRelContainedInSpatialStructure(
                    GlobalId=_new_guid(),
                    RelatingStructure=storeys[name],
                    RelatedElements=products,
                )

        self.file.write(str(output_path))
        logger.info(
            "Wrote %s: %d storeys, %d slabs, %d columns",
            output_path,
            len(self.building.storeys),
            len(self.building.slabs),
            len(self.building.columns),
        )
        return output_path

    def _create_contexts(self) -> None:
        """Create geometric representation contexts."""
        self._context = self.file.createIfcGeometricRepresentationContext(
            ContextIdentifier="3D",
            ContextType="Model",
            CoordinateSpaceDimension=3,
            Precision=1e-5,
            WorldCoordinateSystem=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
            TrueNorth=self.file.createIfcDirection((0.0, 1.0)),
        )
        self._body_context = self.file.createIfcGeometricRepresentationSubContext(
            ContextIdentifier="Body",
            ContextType="Model",
            ParentContext=self._context,
            TargetView="MODEL_VIEW",
        )
        self._axis_context = self.file.createIfcGeometricRepresentationSubContext(
            ContextIdentifier="Axis",
            ContextType="Model",
            ParentContext=self._context,
            TargetView="GRAPH_VIEW",
        )

    def _create_project(self) -> ifcopenshell.entity_instance:
        """Create IfcProject with millimetre length units."""
        length_unit = self.file.createIfcSIUnit(
            UnitType="LENGTHUNIT",
            Prefix="MILLI",
            Name="METRE",
        )
        area_unit = self.file.createIfcSIUnit(
            UnitType="AREAUNIT",
            Name="SQUARE_METRE",
        )
        volume_unit = self.file.createIfcSIUnit(
            UnitType="VOLUMEUNIT",
            Name="CUBIC_METRE",
        )
        angle_unit = self.file.createIfcSIUnit(
            UnitType="PLANEANGLEUNIT",
            Name="RADIAN",
        )
        unit_assignment = self.file.createIfcUnitAssignment(
            Units=[length_unit, area_unit, volume_unit, angle_unit],
        )
        return self.file.createIfcProject(
            GlobalId=self._id("project"),
            Name=self.building.name,
            UnitsInContext=unit_assignment,
            RepresentationContexts=[self._context],
        )

    def _create_site(
        self, project: ifcopenshell.entity_instance
    ) -> ifcopenshell.entity_instance:
        """Create IfcSite and attach to project."""
        site = self.file.createIfcSite(
            GlobalId=self._id("site"),
            Name="Default Site",
            CompositionType="ELEMENT",
        )
        self.file.createIfcRelAggregates(
            GlobalId=_new_guid(),
            RelatingObject=project,
            RelatedObjects=[site],
        )
        return site

    def _create_building(
        self, site: ifcopenshell.entity_instance
    ) -> ifcopenshell.entity_instance:
        """Create IfcBuilding and attach to site."""
        ifc_building = self.file.createIfcBuilding(
            GlobalId=self._id("building"),
            Name=self.building.name,
            CompositionType="ELEMENT",
        )
        self.file.createIfcRelAggregates(
            GlobalId=_new_guid(),
            RelatingObject=site,
            RelatedObjects=[ifc_building],
        )
        return ifc_building

    def _create_storey(
        self,
        storey: MasterStorey | SimilarStorey,
        ifc_building: ifcopenshell.entity_instance,
    ) -> ifcopenshell.entity_instance:
        """Create an IfcBuildingStorey with its master/similar property set."""
        elevation = storey.elevation.value
        ifc_storey = self.file.createIfcBuildingStorey(
            GlobalId=self._id("storey", str(storey.name)),
            Name=str(storey.name),
            CompositionType="ELEMENT",
            Elevation=elevation,
        )
        self.file.createIfcRelAggregates(
            GlobalId=_new_guid(),
            RelatingObject=ifc_building,
            RelatedObjects=[ifc_storey],
        )

        is_master = isinstance(storey, MasterStorey)
        master_name = str(storey.name) if is_master else str(storey.similar_to)
        props = [
            self.file.createIfcPropertySingleValue(
                Name="IsMaster",
                NominalValue=self.file.create_entity("IfcBoolean", is_master),
            ),
            self.file.createIfcPropertySingleValue(
                Name="SimilarTo",
                NominalValue=self.file.create_entity("IfcLabel", master_name),
            ),
            self.file.createIfcPropertySingleValue(
                Name="Height",
                NominalValue=self.file.create_entity(
                    "IfcPositiveLengthMeasure", storey.height.value
                ),
            ),
        ]
        pset = self.file.createIfcPropertySet(
            GlobalId=_new_guid(),
            Name=STOREY_PSET,
            HasProperties=props,
        )
        self.file.createIfcRelDefinesByProperties(
            GlobalId=_new_guid(),
            RelatedObjects=[ifc_storey],
            RelatingPropertyDefinition=pset,
        )
        return ifc_storey

    def _create_slab(self, slab: Slab) -> ifcopenshell.entity_instance:
        """Create an IfcSlab with extruded polygon geometry."""
        ifc_points = [
            self.file.createIfcCartesianPoint((v.x, v.y)) for v in slab.vertices
        ]
        # Close the loop
        ifc_points.append(ifc_points[0])

        polyline = self.file.createIfcPolyline(Points=ifc_points)
        profile = self.file.createIfcArbitraryClosedProfileDef(
            ProfileType="AREA",
            OuterCurve=polyline,
        )

        # Top face of the slab sits at the storey elevation
        z = slab.elevation.value - slab.thickness.value
        placement = self._create_local_placement(origin=(0.0, 0.0, z))

        solid = self.file.createIfcExtrudedAreaSolid(
            SweptArea=profile,
            Position=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
            ExtrudedDirection=self.file.createIfcDirection((0.0, 0.0, 1.0)),
            Depth=slab.thickness.value,
        )
        shape = self.file.createIfcShapeRepresentation(
            ContextOfItems=self._body_context,
            RepresentationIdentifier="Body",
            RepresentationType="SweptSolid",
            Items=[solid],
        )
        product_shape = self.file.createIfcProductDefinitionShape(
            Representations=[shape],
        )
        return self.file.createIfcSlab(
            GlobalId=self._id("slab", str(slab.name)),
            Name=str(slab.name),
            ObjectPlacement=placement,
            Representation=product_shape,
            PredefinedType="FLOOR",
        )

    def _create_column(self, column: Column) -> ifcopenshell.entity_instance:
        """Create an IfcColumn represented by its vertical axis."""
        placement = self._create_local_placement(
            origin=(column.start.x, column.start.y, column.start.z),
        )
        axis = self.file.createIfcPolyline(
            Points=[
                self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
                self.file.createIfcCartesianPoint((0.0, 0.0, column.length)),
            ]
        )
        shape = self.file.createIfcShapeRepresentation(
            ContextOfItems=self._axis_context,
            RepresentationIdentifier="Axis",
            RepresentationType="Curve3D",
            Items=[axis],
        )
        product_shape = self.file.createIfcProductDefinitionShape(
            Representations=[shape],
        )
        return self.file.createIfcColumn(
            GlobalId=self._id("column", str(column.name)),
            Name=str(column.name),
            Description=f"{column.base_storey} to {column.top_storey}",
            ObjectPlacement=placement,
            Representation=product_shape,
        )

    def _create_local_placement(
        self,
        origin: tuple[float, float, float] = (0.0, 0.0, 0.0),
        z_dir: tuple[float, float, float] = (0.0, 0.0, 1.0),
        x_dir: tuple[float, float, float] = (1.0, 0.0, 0.0),
    ) -> ifcopenshell.entity_instance:
        """Create an IfcLocalPlacement."""
        return self.file.createIfcLocalPlacement(
            RelativePlacement=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint(origin),
                Axis=self.file.createIfcDirection(z_dir),
                RefDirection=self.file.createIfcDirection(x_dir),
            ),
        )


def export_ifc(building: Building, output_path: str | Path) -> Path:
    """Export a building to IFC. Returns the output path."""
    return IFCExporter(building).export(output_path)
