"""
Component Decoder - NMEA 2000 information from EBP components

Each supported component type has its own decode function reading
type-specific property slots (property ids are positional per type,
not universal). Unsupported types decode to an empty record.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .ebp import DecodedComponent, Property
from .enums import N2kDirection
from ..utils.conversions import parse_int


class ComponentType(IntEnum):
    """Component type codes (componentId attribute)"""
    BINARY_SWITCH = 1281
    BINARY_INDICATOR = 1282
    FLUID_LEVEL = 1283
    TEMPERATURE = 1285
    SWITCH_CONTROL = 1291
    ALARM = 1292
    PROPRIETARY_PGN = 1361
    J1939_AC_PGN = 1376
    MEMORY_STORED_VALUE = 2304


# Fluid types for Fluid Level component (PGN 127505)
FLUID_TYPES: Tuple[str, ...] = (
    "fuel",
    "fresh water",
    "waste water",
    "live well",
    "oil",
    "black water",
)

# Temperature sources for Temperature component (PGN 130312)
TEMPERATURE_SOURCES: Tuple[str, ...] = (
    "sea",
    "outside",
    "inside",
    "engine room",
    "main cabin",
    "live well",
    "bait well",
    "refridgeration",
    "heating system",
    "dew point",
    "wind chill apparent",
    "wind chill theoretical",
    "heat index",
    "freezer",
)

# J1939 PGNs selectable on the J1939 AC PGN component
J1939_PGNS: Tuple[int, ...] = (
    65014, 65027, 65011, 65008,
    65024, 65021, 65017, 65030,
    65004, 65003, 65002, 65001,
)

UNKNOWN_LABEL = "unknown"

PropertyMap = Mapping[int, Optional[int]]
PropertyInput = Union[Property, Tuple[int, Optional[str]]]


def create_property_map(properties: Optional[Iterable[PropertyInput]]) -> PropertyMap:
    """
    Reduce a property list to id -> parsed integer.

    Values that don't parse become None (not 0). For duplicate ids the
    last occurrence wins.
    """
    result: Dict[int, Optional[int]] = {}
    for prop in properties or ():
        if isinstance(prop, Property):
            prop_id, value = prop.id, prop.value
        else:
            prop_id, value = prop
        result[prop_id] = parse_int(value)
    return result


def _lookup(table: Sequence, index: Optional[int], default):
    if index is None or index < 0 or index >= len(table):
        return default
    return table[index]


def _one_based(value: Optional[int]) -> str:
    # Switch/indicator numbers are stored zero-based and shown one-based
    return str(value + 1) if value is not None else ""


def decode_fluid_level(props: PropertyMap) -> DecodedComponent:
    return DecodedComponent(
        name="Fluid Level",
        pgn=127505,
        instance=props.get(0),
        label=_lookup(FLUID_TYPES, props.get(1), UNKNOWN_LABEL),
        direction=N2kDirection.from_id(props.get(2)),
    )


def decode_binary_switch(props: PropertyMap) -> DecodedComponent:
    return DecodedComponent(
        name="Binary Switch",
        pgn=127501,
        instance=props.get(0),
        label=_one_based(props.get(1)),
        direction=N2kDirection.from_id(props.get(5)),
    )


def decode_binary_indicator(props: PropertyMap) -> DecodedComponent:
    return DecodedComponent(
        name="Binary Indicator",
        pgn=127501,
        instance=props.get(0),
        label=_one_based(props.get(1)),
        direction=N2kDirection.from_id(props.get(2)),
    )


def decode_temperature(props: PropertyMap) -> DecodedComponent:
    return DecodedComponent(
        name="Temperature",
        pgn=130312,
        instance=props.get(0),
        label=_lookup(TEMPERATURE_SOURCES, props.get(1), UNKNOWN_LABEL),
        direction=N2kDirection.from_id(props.get(5)),
    )


def decode_switch_control(props: PropertyMap) -> DecodedComponent:
    return DecodedComponent(
        name="Switch Control",
        pgn=127502,
        instance=props.get(1),
        label=_one_based(props.get(2)),
        direction=N2kDirection.from_id(props.get(0)),
    )


def decode_j1939_ac_pgn(props: PropertyMap) -> DecodedComponent:
    """J1939 AC PGN carries its own source device and has no instance/label."""
    return DecodedComponent(
        name="J1939 AC PGN",
        pgn=_lookup(J1939_PGNS, props.get(1), 0),
        instance=None,
        label="",
        direction=N2kDirection.NONE,
        device=props.get(0),
    )


def decode_proprietary_pgn(props: PropertyMap) -> DecodedComponent:
    return DecodedComponent(
        name="Proprietary PGN",
        pgn=65280,
        instance=props.get(2),
        direction=N2kDirection.from_id(props.get(0)),
    )


COMPONENT_DECODERS: Mapping[int, Callable[[PropertyMap], DecodedComponent]] = MappingProxyType({
    ComponentType.FLUID_LEVEL: decode_fluid_level,
    ComponentType.BINARY_SWITCH: decode_binary_switch,
    ComponentType.BINARY_INDICATOR: decode_binary_indicator,
    ComponentType.TEMPERATURE: decode_temperature,
    ComponentType.SWITCH_CONTROL: decode_switch_control,
    ComponentType.J1939_AC_PGN: decode_j1939_ac_pgn,
    ComponentType.PROPRIETARY_PGN: decode_proprietary_pgn,
})


def decode_component(component_id: Optional[int],
                     properties: Optional[Iterable[PropertyInput]]) -> DecodedComponent:
    """
    Decode a component into NMEA 2000 information.

    Args:
        component_id: Component type code
        properties: Property list as Property objects or (id, value) pairs

    Returns:
        DecodedComponent; an empty record (name "") for unsupported types
    """
    decoder = COMPONENT_DECODERS.get(component_id)
    if decoder is None:
        return DecodedComponent()
    return decoder(create_property_map(properties))


def is_supported_component(component_id: Optional[int]) -> bool:
    """Check whether a component type has a registered decoder"""
    return component_id in COMPONENT_DECODERS
