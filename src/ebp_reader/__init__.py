"""
EBP Reader

Decodes EBP marine electronics project files (XML) into immutable records:
units and channels with readable settings, NMEA 2000 components, alarms,
memory allocations, schemas and project metadata.

Main workflow:
    1. Validate the document structure (utils/validation.py)
    2. Extract and decode records (utils/ebp_parser.py)
    3. Order results deterministically (models/ordering.py)
"""

from .utils.ebp_parser import (
    EbpParser,
    find_master_module_bus_id,
    parse_alarms,
    parse_components,
    parse_memory,
    parse_project,
    parse_project_metadata,
    parse_schemas,
    parse_units,
)
from .utils.validation import validate_ebp
from .utils.error_handler import EbpError, EbpParseError, EbpStructureError

__version__ = "1.0.0"
__all__ = [
    "EbpParser",
    "find_master_module_bus_id",
    "parse_alarms",
    "parse_components",
    "parse_memory",
    "parse_project",
    "parse_project_metadata",
    "parse_schemas",
    "parse_units",
    "validate_ebp",
    "EbpError",
    "EbpParseError",
    "EbpStructureError",
]
