"""
Project statistics and per-unit-type channel group visibility.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from .ebp import ChannelGroup, Unit


@dataclass(frozen=True)
class ProjectStatistics:
    total_units: int = 0
    total_channels: int = 0
    input_channels: int = 0
    output_channels: int = 0
    both_channels: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_units": self.total_units,
            "total_channels": self.total_channels,
            "input_channels": self.input_channels,
            "output_channels": self.output_channels,
            "both_channels": self.both_channels,
        }


# Unit types that only expose part of their channel groups
CONNECT50_UNIT_TYPES = ("16", "20")
MCU_V1_UNIT_TYPE = "101"
MCU_V2_UNIT_TYPE = "105"


def get_visible_channel_groups(unit: Unit) -> Tuple[ChannelGroup, ...]:
    """
    Channel groups that are meaningful for a unit's type.

    Connect 50 units only use their first group, MCU v1 has no user
    channels and MCU v2 uses the first two groups. Other units use all.
    """
    if unit.unit_type_id in CONNECT50_UNIT_TYPES:
        return unit.channel_groups[:1]
    if unit.unit_type_id == MCU_V1_UNIT_TYPE:
        return ()
    if unit.unit_type_id == MCU_V2_UNIT_TYPE:
        return unit.channel_groups[:2]
    return unit.channel_groups


def get_statistics(units: Iterable[Unit]) -> ProjectStatistics:
    """Count units and channels by their raw direction attribute"""
    total_units = 0
    counts = {"Input": 0, "Output": 0, "Both": 0}
    total_channels = 0

    for unit in units:
        total_units += 1
        for channel in unit.channels:
            total_channels += 1
            if channel.direction in counts:
                counts[channel.direction] += 1

    return ProjectStatistics(
        total_units=total_units,
        total_channels=total_channels,
        input_channels=counts["Input"],
        output_channels=counts["Output"],
        both_channels=counts["Both"],
    )
