"""
EBP Parser - Parse EBP project files (XML)

The .ebp format is an XML project description:
- <project> root with firmware/version attributes
- <units> container with one <unit> per hardware module, each holding
  <unitChannelGroup>/<channel> elements
- <schemas> container with one <schema> ("tab") per page, each holding
  <components>/<component> elements with <properties>/<property> values

Every public parse function accepts either the XML text or an already
parsed root element, so callers needing several views can parse once.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from ..models.component_decoder import ComponentType, decode_component
from ..models.ebp import (
    NOT_AVAILABLE,
    Alarm,
    Channel,
    ChannelGroup,
    ComponentRaw,
    DecodedComponent,
    EbpProject,
    MemoryAllocation,
    ProjectMetadata,
    Property,
    Schema,
    Unit,
)
from ..models.ordering import sort_alarms, sort_components, sort_memory, sort_schemas
from .conversions import parse_int
from .error_handler import EbpParseError, EbpStructureError

logger = logging.getLogger(__name__)

XmlSource = Union[str, bytes, ET.Element]

NO_MASTER_MODULE = -1

# Master module unit types
MASTER_MODULE_UNIT_TYPES = (101, 100)
# Unit types that act as master when property 2 is set to "2"
CONFIGURABLE_MASTER_UNIT_TYPES = (20, 1, 16, 4)
MASTER_PROPERTY_ID = 2
MASTER_PROPERTY_VALUE = "2"

ALARM_ID_PROPERTY = 4
ALARM_NAME_PROPERTY = 31

MEMORY_TYPE_PROPERTY = 0
MEMORY_LOCATION_PROPERTY = 1

# Memory type code -> (label, bit width)
MEMORY_TYPES = {
    0: ("Bit (1 Bit)", 1),
    1: ("UByte (8 Bit)", 8),
    2: ("UWord (16 Bit)", 16),
    3: ("UDWord (32 Bit)", 32),
}
UNKNOWN_MEMORY_TYPE = ("unknown", 1)

# Component types handled by their own extraction pass
SPECIAL_COMPONENT_TYPES = (ComponentType.ALARM, ComponentType.MEMORY_STORED_VALUE)


def parse_xml(source: XmlSource) -> ET.Element:
    """
    Parse XML text into a root element.

    Args:
        source: XML text, bytes, or an already parsed element

    Returns:
        Root element

    Raises:
        EbpParseError: If the text is not well-formed XML
    """
    if isinstance(source, ET.Element):
        return source
    try:
        return ET.fromstring(source)
    except ET.ParseError as e:
        raise EbpParseError(f"Invalid XML format: {e}") from e


def _find_first(root: ET.Element, tag: str) -> Optional[ET.Element]:
    """First element with the given tag, including the root itself."""
    if root.tag == tag:
        return root
    return root.find(f".//{tag}")


def _iter_children_of(root: ET.Element, parent_tag: str, tag: str) -> List[ET.Element]:
    """All <tag> elements whose parent is a <parent_tag> element, in document order."""
    result = []
    for parent in root.iter(parent_tag):
        result.extend(child for child in parent if child.tag == tag)
    return result


def parse_properties(element: ET.Element) -> List[Property]:
    """
    Parse <properties>/<property> entries below an element.

    Args:
        element: Owning element (unit or component)

    Returns:
        Properties in document order; unparseable ids become -1
    """
    return [
        Property(id=parse_int(prop.get("id"), -1), value=prop.get("value") or "")
        for prop in _iter_children_of(element, "properties", "property")
    ]


# ----------------------------
# Units and channels
# ----------------------------

def _parse_channel(channel_elem: ET.Element) -> Channel:
    return Channel(
        number=channel_elem.get("number") or NOT_AVAILABLE,
        name=channel_elem.get("name") or NOT_AVAILABLE,
        direction=channel_elem.get("direction") or NOT_AVAILABLE,
        in_main_channel_setting_id=channel_elem.get("inMainChannelSettingId") or "",
        in_channel_setting_id=channel_elem.get("inChannelSettingId") or "",
        out_main_channel_setting_id=channel_elem.get("outMainChannelSettingId") or "",
        out_channel_setting_id=channel_elem.get("outChannelSettingId") or "",
    )


def parse_channel_groups(unit_elem: ET.Element) -> List[ChannelGroup]:
    """Parse channel groups of a unit; channels may be nested anywhere inside a group."""
    groups = []
    for group_elem in unit_elem.iter("unitChannelGroup"):
        groups.append(ChannelGroup(
            group_id=group_elem.get("channelGroupId") or NOT_AVAILABLE,
            channels=tuple(_parse_channel(ch) for ch in group_elem.iter("channel")),
        ))
    return groups


def _parse_unit(unit_elem: ET.Element) -> Unit:
    return Unit(
        id=unit_elem.get("id") or NOT_AVAILABLE,
        serial=unit_elem.get("serial") or NOT_AVAILABLE,
        name=unit_elem.get("name") or NOT_AVAILABLE,
        unit_type_id=unit_elem.get("unitTypeId") or NOT_AVAILABLE,
        standard_unit_variant_number=unit_elem.get("standardUnitVariantNumber") or NOT_AVAILABLE,
        channel_groups=tuple(parse_channel_groups(unit_elem)),
    )


def _unit_elements(root: ET.Element) -> List[ET.Element]:
    containers = [root] if root.tag == "units" else root.findall(".//units")
    if not containers:
        raise EbpStructureError("No units container found in the EBP file")
    if len(containers) > 1:
        logger.warning(f"Found {len(containers)} units containers, using the first one")

    # Only direct children; nested unit markup elsewhere is ignored
    return [child for child in containers[0] if child.tag == "unit"]


def parse_units(source: XmlSource) -> List[Unit]:
    """
    Parse units with their channel groups.

    Args:
        source: XML text or parsed root element

    Returns:
        Units in document order

    Raises:
        EbpParseError: Malformed XML
        EbpStructureError: No units container or no units
    """
    root = parse_xml(source)
    unit_elements = _unit_elements(root)
    logger.debug(f"Found {len(unit_elements)} unit elements")

    units = [_parse_unit(elem) for elem in unit_elements]
    if not units:
        raise EbpStructureError("No units found in the EBP file")

    for unit in units:
        logger.debug(f"Unit {unit.name} ID: {unit.id} TypeID: {unit.unit_type_id}")
    logger.info(f"Parsed {len(units)} units")
    return units


def find_master_module_bus_id(source: XmlSource) -> int:
    """
    Find the bus id of the master module.

    The master is the first unit that is either a master module type
    (101, 100) or a configurable type (20, 1, 16, 4) with property 2 set
    to "2".

    Returns:
        Unit id of the master, or -1 when no unit qualifies
    """
    root = parse_xml(source)

    for unit_elem in _iter_children_of(root, "units", "unit"):
        unit_type_id = parse_int(unit_elem.get("unitTypeId"), 0)

        if unit_type_id in MASTER_MODULE_UNIT_TYPES:
            return parse_int(unit_elem.get("id"), NO_MASTER_MODULE)

        if unit_type_id in CONFIGURABLE_MASTER_UNIT_TYPES:
            for prop in parse_properties(unit_elem):
                if prop.id == MASTER_PROPERTY_ID and prop.value == MASTER_PROPERTY_VALUE:
                    return parse_int(unit_elem.get("id"), NO_MASTER_MODULE)

    return NO_MASTER_MODULE


# ----------------------------
# Schemas, alarms, components, memory
# ----------------------------

def parse_schemas(source: XmlSource) -> List[Schema]:
    """Parse <schemas>/<schema> entries sorted by sort index."""
    root = parse_xml(source)
    schemas = [
        Schema(
            id=parse_int(elem.get("id"), 0),
            name=elem.get("name") or "",
            sort_index=parse_int(elem.get("sortIndex"), 0),
        )
        for elem in _iter_children_of(root, "schemas", "schema")
    ]
    return sort_schemas(schemas)


def _parse_alarm(component_elem: ET.Element, schema_name: str) -> Optional[Alarm]:
    properties_elem = component_elem.find(".//properties")
    if properties_elem is None:
        return None

    alarm_id = NOT_AVAILABLE
    alarm_name = NOT_AVAILABLE
    for prop in properties_elem.iter("property"):
        prop_id = parse_int(prop.get("id"))
        if prop_id == ALARM_ID_PROPERTY:
            alarm_id = prop.get("value") or NOT_AVAILABLE
        elif prop_id == ALARM_NAME_PROPERTY:
            alarm_name = prop.get("value") or NOT_AVAILABLE

    if alarm_id == NOT_AVAILABLE and alarm_name == NOT_AVAILABLE:
        return None

    return Alarm(
        schema_name=schema_name,
        component_id=int(ComponentType.ALARM),
        component_revision=component_elem.get("componentRevision") or NOT_AVAILABLE,
        component_instance_id=component_elem.get("id") or NOT_AVAILABLE,
        alarm_id=alarm_id,
        alarm_name=alarm_name,
    )


def parse_alarms(source: XmlSource) -> List[Alarm]:
    """
    Parse alarm definitions (component 1292) from all schemas.

    Property 4 holds the alarm id and property 31 the alarm name; a
    component is kept if at least one of them is present.

    Returns:
        Alarms sorted by numeric alarm id
    """
    root = parse_xml(source)
    alarms = []

    for schema_elem in root.iter("schema"):
        schema_name = schema_elem.get("name") or "Unknown"

        components_elem = schema_elem.find(".//components")
        if components_elem is None:
            continue

        for component_elem in components_elem.iter("component"):
            if parse_int(component_elem.get("componentId")) != ComponentType.ALARM:
                continue
            alarm = _parse_alarm(component_elem, schema_name)
            if alarm is not None:
                alarms.append(alarm)

    logger.info(f"Found {len(alarms)} alarms across all schemas")
    return sort_alarms(alarms)


def parse_component_raw(component_elem: ET.Element) -> Optional[ComponentRaw]:
    """Read a <component> element; None when its componentId is not a number."""
    component_id = parse_int(component_elem.get("componentId"))
    if component_id is None:
        return None
    return ComponentRaw(
        component_id=component_id,
        channel_id=parse_int(component_elem.get("channelId")),
        unit_id=parse_int(component_elem.get("unitId")),
        properties=tuple(parse_properties(component_elem)),
    )


def parse_components(source: XmlSource) -> List[DecodedComponent]:
    """
    Decode NMEA 2000 components of all schemas.

    Alarm and memory components are skipped, as are component types
    without a decoder. Components that don't carry their own device get
    the master module bus id.

    Returns:
        Components ordered by PGN, device, instance and label
    """
    root = parse_xml(source)
    master_bus_id = find_master_module_bus_id(root)
    components = []

    for schema_elem in root.iter("schema"):
        tab_name = schema_elem.get("name") or ""

        for component_elem in _iter_children_of(schema_elem, "components", "component"):
            raw = parse_component_raw(component_elem)
            if raw is None or raw.component_id in SPECIAL_COMPONENT_TYPES:
                continue

            decoded = decode_component(raw.component_id, raw.properties)
            if not decoded.is_decoded:
                continue

            components.append(replace(
                decoded,
                device=decoded.device if decoded.device is not None else master_bus_id,
                tab_name=tab_name,
            ))

    logger.info(f"Decoded {len(components)} components (master module bus id {master_bus_id})")
    return sort_components(components)


def decode_memory(raw: ComponentRaw) -> MemoryAllocation:
    """Decode a memory stored value component"""
    values = {prop.id: parse_int(prop.value) for prop in raw.properties}
    type_name, bits = MEMORY_TYPES.get(values.get(MEMORY_TYPE_PROPERTY), UNKNOWN_MEMORY_TYPE)
    return MemoryAllocation(type=type_name, bits=bits, location=values.get(MEMORY_LOCATION_PROPERTY))


def parse_memory(source: XmlSource) -> List[MemoryAllocation]:
    """Parse memory stored value components (2304) anywhere in the document, ordered by location."""
    root = parse_xml(source)
    memory = []

    for component_elem in root.iter("component"):
        raw = parse_component_raw(component_elem)
        if raw is None or raw.component_id != ComponentType.MEMORY_STORED_VALUE:
            continue
        memory.append(decode_memory(raw))

    return sort_memory(memory)


def parse_project_metadata(source: XmlSource) -> Optional[ProjectMetadata]:
    """Read <project> attributes; None if the document has no project element."""
    root = parse_xml(source)
    project = _find_first(root, "project")
    if project is None:
        return None

    return ProjectMetadata(
        firmware=project.get("firmware") or NOT_AVAILABLE,
        file_format_version=project.get("fileFormatVersion") or NOT_AVAILABLE,
        saved_at_utc=project.get("savedAtUtc") or NOT_AVAILABLE,
        format_version=project.get("formatVersion") or NOT_AVAILABLE,
        studio_version=project.get("studioVersion") or NOT_AVAILABLE,
    )


def parse_project(source: XmlSource, filename: str = "") -> EbpProject:
    """
    Decode every view of a project from a single parse.

    Raises:
        EbpParseError: Malformed XML
        EbpStructureError: No units container or no units
    """
    root = parse_xml(source)
    return EbpProject(
        metadata=parse_project_metadata(root),
        units=tuple(parse_units(root)),
        schemas=tuple(parse_schemas(root)),
        alarms=tuple(parse_alarms(root)),
        components=tuple(parse_components(root)),
        memory=tuple(parse_memory(root)),
        master_module_bus_id=find_master_module_bus_id(root),
        filename=filename,
    )


class EbpParser:
    """Parser for EBP project files on disk."""

    # utf-8-sig also strips a BOM that expat would reject
    ENCODINGS = ('utf-8-sig', 'cp1252', 'latin-1')

    def read_file(self, filepath: str) -> str:
        """Read a project file, trying common encodings."""
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        for encoding in self.ENCODINGS:
            try:
                with open(path, 'r', encoding=encoding) as f:
                    return f.read()
            except UnicodeDecodeError:
                continue
        raise EbpParseError(f"Could not decode file: {filepath}")

    def parse_file(self, filepath: str) -> EbpProject:
        """Parse a project file from disk."""
        content = self.read_file(filepath)
        logger.info(f"Loaded {filepath} ({len(content)} characters)")
        return self.parse_string(content, filename=Path(filepath).stem)

    def parse_string(self, xml_content: str, filename: str = "") -> EbpProject:
        """Parse project XML content from string."""
        return parse_project(xml_content, filename=filename)
