"""
Models Package

Immutable EBP records, lookup tables and the decoders that use them.
"""

from .enums import Direction, N2kDirection
from .channel_settings import (
    ChannelSettings,
    SettingDescription,
    decode_channel_settings,
)
from .component_decoder import ComponentType, decode_component
from .ebp import (
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
    ValidationResult,
)

__all__ = [
    'Direction',
    'N2kDirection',
    'ChannelSettings',
    'SettingDescription',
    'decode_channel_settings',
    'ComponentType',
    'decode_component',
    'Alarm',
    'Channel',
    'ChannelGroup',
    'ComponentRaw',
    'DecodedComponent',
    'EbpProject',
    'MemoryAllocation',
    'ProjectMetadata',
    'Property',
    'Schema',
    'Unit',
    'ValidationResult',
]
