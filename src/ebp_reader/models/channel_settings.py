"""
Channel Settings Decoder

Translates the four numeric setting codes of a unit channel
(in-main, in-sub, out-main, out-sub) into human-readable input and
output descriptions.

Every main setting code maps to either:
- FixedSubtype: the category always has the same subtype label
- SubtypeMap: the subtype label is looked up by the sub setting code

Unrecognized codes never raise; they produce an "unknown:<code>" sentinel.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

UNKNOWN_PREFIX = "unknown:"

# Output main code meaning "no output configuration at all"
OUTPUT_NOT_SET = -1


@dataclass(frozen=True)
class FixedSubtype:
    """Main setting with a single, fixed subtype label"""
    type: str
    subtype: str


@dataclass(frozen=True)
class SubtypeMap:
    """Main setting whose subtype is selected by the sub setting code"""
    type: str
    subtypes: Mapping[int, str]


SettingEntry = Union[FixedSubtype, SubtypeMap]


@dataclass(frozen=True)
class SettingDescription:
    """Decoded type/subtype pair for one side of a channel"""
    type: str
    subtype: str

    @property
    def is_known(self) -> bool:
        return not self.type.startswith(UNKNOWN_PREFIX)

    def to_dict(self):
        return {"type": self.type, "subtype": self.subtype}


@dataclass(frozen=True)
class ChannelSettings:
    """Decoded input and output settings of a channel"""
    input: SettingDescription
    output: SettingDescription

    def to_dict(self):
        return {"input": self.input.to_dict(), "output": self.output.to_dict()}


INPUT_MAIN_SETTINGS: Mapping[int, SettingEntry] = MappingProxyType({
    1: FixedSubtype("digital input", "standard"),
    57: SubtypeMap("digital input", MappingProxyType({
        1: "closes to minus",
        2: "closes to plus",
        4: "closes to common",
        6: "closes to plus weak pulldown",
        7: "measure input frequency",
    })),
    64: SubtypeMap("analog input", MappingProxyType({
        1: "voltage signal",
        2: "4-20 mA",
        4: "0-1500 Ohm",
        5: "multiswitch",
        6: "firealarm (constant power)",
        7: "multiswitch (68Ohm +/- 1%)",
        8: "dual fixed multiswitch",
        9: "temp sensor ohm",
    })),
    54: SubtypeMap("window wiper feedback", MappingProxyType({
        1: "closes to minus in parking",
        2: "open in parking",
    })),
})

OUTPUT_MAIN_SETTINGS: Mapping[int, SettingEntry] = MappingProxyType({
    1: FixedSubtype("digital output", "standard"),
    48: SubtypeMap("digital output +", MappingProxyType({
        1: "normal",
        2: "open load detection",
        3: "open load detection at turn on",
    })),
    49: SubtypeMap("digital output -", MappingProxyType({
        1: "normal",
    })),
    52: SubtypeMap("commonline", MappingProxyType({
        0: "normal",
    })),
    53: SubtypeMap("half bridge output +/-", MappingProxyType({
        0: "normal half bridge",
    })),
    55: SubtypeMap("window wiper", MappingProxyType({
        1: "connection #1 with diode",
        2: "connection #1 no diode",
        3: "connection #2 with diode",
        4: "connection #2 no diode",
    })),
    65: SubtypeMap("signal drive (max 50mA)", MappingProxyType({
        0: "positive drive",
        1: "negative drive",
    })),
})


def _unknown(code: Optional[int] = None) -> str:
    return UNKNOWN_PREFIX if code is None else f"{UNKNOWN_PREFIX}{code}"


def _decode_setting(table: Mapping[int, SettingEntry], main_id: int, sub_id: int) -> SettingDescription:
    entry = table.get(main_id)

    if entry is None:
        return SettingDescription(_unknown(main_id), _unknown(sub_id))

    if isinstance(entry, FixedSubtype):
        return SettingDescription(entry.type, entry.subtype)

    subtype = entry.subtypes.get(sub_id)
    return SettingDescription(entry.type, subtype if subtype is not None else _unknown(sub_id))


def decode_input_settings(main_id: int, sub_id: int) -> SettingDescription:
    """Decode the input side of a channel"""
    return _decode_setting(INPUT_MAIN_SETTINGS, main_id, sub_id)


def decode_output_settings(main_id: int, sub_id: int) -> SettingDescription:
    """Decode the output side of a channel

    An out-main code of -1 means the channel has no output configuration,
    which is reported as a bare "unknown:" pair.
    """
    if main_id == OUTPUT_NOT_SET:
        return SettingDescription(_unknown(), _unknown())
    return _decode_setting(OUTPUT_MAIN_SETTINGS, main_id, sub_id)


def decode_channel_settings(in_main: int, in_sub: int, out_main: int, out_sub: int) -> ChannelSettings:
    """
    Decode all four setting codes of a channel.

    Args:
        in_main: Input main setting code
        in_sub: Input sub setting code
        out_main: Output main setting code (-1 when not configured)
        out_sub: Output sub setting code

    Returns:
        ChannelSettings with independent input and output descriptions
    """
    return ChannelSettings(
        input=decode_input_settings(in_main, in_sub),
        output=decode_output_settings(out_main, out_sub),
    )
