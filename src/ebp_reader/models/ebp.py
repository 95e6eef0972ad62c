"""
EBP Records - Immutable records extracted from an EBP project file

Architecture:
- Raw attribute values are kept as strings with "N/A" defaults, the way
  they appear in the file
- Numeric setting codes and decoded settings are derived on access,
  never stored
- Every record is frozen; each parse produces a fresh set of objects
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .channel_settings import ChannelSettings, decode_channel_settings
from .enums import Direction, N2kDirection
from ..utils.conversions import parse_int

NOT_AVAILABLE = "N/A"

# Defaults for missing/unparseable setting codes. 0 is a real input code,
# -1 is the "not configured" marker for outputs.
DEFAULT_INPUT_SETTING_ID = 0
DEFAULT_OUTPUT_SETTING_ID = -1


@dataclass(frozen=True)
class Channel:
    """Single physical channel of a unit"""
    number: str = NOT_AVAILABLE
    name: str = NOT_AVAILABLE
    direction: str = NOT_AVAILABLE
    in_main_channel_setting_id: str = ""
    in_channel_setting_id: str = ""
    out_main_channel_setting_id: str = ""
    out_channel_setting_id: str = ""

    @property
    def in_main_id(self) -> int:
        return parse_int(self.in_main_channel_setting_id, DEFAULT_INPUT_SETTING_ID)

    @property
    def in_sub_id(self) -> int:
        return parse_int(self.in_channel_setting_id, DEFAULT_INPUT_SETTING_ID)

    @property
    def out_main_id(self) -> int:
        return parse_int(self.out_main_channel_setting_id, DEFAULT_OUTPUT_SETTING_ID)

    @property
    def out_sub_id(self) -> int:
        return parse_int(self.out_channel_setting_id, DEFAULT_OUTPUT_SETTING_ID)

    @property
    def direction_enum(self) -> Direction:
        return Direction.from_string(self.direction)

    @property
    def settings(self) -> ChannelSettings:
        """Decoded input/output settings"""
        return decode_channel_settings(self.in_main_id, self.in_sub_id, self.out_main_id, self.out_sub_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "name": self.name,
            "direction": self.direction,
            "in_main_channel_setting_id": self.in_main_channel_setting_id,
            "in_channel_setting_id": self.in_channel_setting_id,
            "out_main_channel_setting_id": self.out_main_channel_setting_id,
            "out_channel_setting_id": self.out_channel_setting_id,
            "settings": self.settings.to_dict(),
        }


@dataclass(frozen=True)
class ChannelGroup:
    """Channel group (unitChannelGroup) of a unit"""
    group_id: str = NOT_AVAILABLE
    channels: Tuple[Channel, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_id": self.group_id,
            "channels": [ch.to_dict() for ch in self.channels],
        }


@dataclass(frozen=True)
class Unit:
    """Hardware unit declared in the project"""
    id: str = NOT_AVAILABLE
    serial: str = NOT_AVAILABLE
    name: str = NOT_AVAILABLE
    unit_type_id: str = NOT_AVAILABLE
    standard_unit_variant_number: str = NOT_AVAILABLE
    channel_groups: Tuple[ChannelGroup, ...] = ()

    @property
    def channels(self) -> Tuple[Channel, ...]:
        """All channels of all groups, in document order"""
        return tuple(ch for group in self.channel_groups for ch in group.channels)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "serial": self.serial,
            "name": self.name,
            "unit_type_id": self.unit_type_id,
            "standard_unit_variant_number": self.standard_unit_variant_number,
            "channel_groups": [g.to_dict() for g in self.channel_groups],
        }


@dataclass(frozen=True)
class Schema:
    """Schema ("tab") grouping components and alarms"""
    id: int = 0
    name: str = ""
    sort_index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "sort_index": self.sort_index}


@dataclass(frozen=True)
class Property:
    """Component/unit property as found in the file"""
    id: int
    value: str = ""


@dataclass(frozen=True)
class ComponentRaw:
    """Component element before decoding"""
    component_id: int
    channel_id: Optional[int] = None
    unit_id: Optional[int] = None
    properties: Tuple[Property, ...] = ()


@dataclass(frozen=True)
class DecodedComponent:
    """NMEA 2000 view of a component"""
    name: str = ""
    pgn: int = 0
    instance: Optional[int] = None
    label: str = ""
    direction: N2kDirection = N2kDirection.NONE
    device: Optional[int] = None
    tab_name: str = ""

    @property
    def is_decoded(self) -> bool:
        return bool(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "pgn": self.pgn,
            "device": self.device,
            "instance": self.instance,
            "label": self.label,
            "direction": self.direction.label,
            "tab_name": self.tab_name,
        }


@dataclass(frozen=True)
class Alarm:
    """Alarm definition (component 1292) of a schema"""
    schema_name: str
    component_id: int
    component_revision: str = NOT_AVAILABLE
    component_instance_id: str = NOT_AVAILABLE
    alarm_id: str = NOT_AVAILABLE
    alarm_name: str = NOT_AVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_name": self.schema_name,
            "component_id": self.component_id,
            "component_revision": self.component_revision,
            "component_instance_id": self.component_instance_id,
            "alarm_id": self.alarm_id,
            "alarm_name": self.alarm_name,
        }


@dataclass(frozen=True)
class MemoryAllocation:
    """Stored memory value (component 2304)"""
    type: str
    bits: int
    location: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "bits": self.bits, "location": self.location}


@dataclass(frozen=True)
class ProjectMetadata:
    """Attributes of the <project> root element"""
    firmware: str = NOT_AVAILABLE
    file_format_version: str = NOT_AVAILABLE
    saved_at_utc: str = NOT_AVAILABLE
    format_version: str = NOT_AVAILABLE
    studio_version: str = NOT_AVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "firmware": self.firmware,
            "file_format_version": self.file_format_version,
            "saved_at_utc": self.saved_at_utc,
            "format_version": self.format_version,
            "studio_version": self.studio_version,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the structural pre-flight check"""
    is_valid: bool
    errors: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


@dataclass(frozen=True)
class EbpProject:
    """Everything decoded from one project file"""
    metadata: Optional[ProjectMetadata]
    units: Tuple[Unit, ...]
    schemas: Tuple[Schema, ...] = ()
    alarms: Tuple[Alarm, ...] = ()
    components: Tuple[DecodedComponent, ...] = ()
    memory: Tuple[MemoryAllocation, ...] = ()
    master_module_bus_id: int = -1
    filename: str = field(default="", compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "units": [u.to_dict() for u in self.units],
            "schemas": [s.to_dict() for s in self.schemas],
            "alarms": [a.to_dict() for a in self.alarms],
            "components": [c.to_dict() for c in self.components],
            "memory": [m.to_dict() for m in self.memory],
            "master_module_bus_id": self.master_module_bus_id,
        }
