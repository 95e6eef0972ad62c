"""
Structural validation of EBP files

Pre-flight check that reports every structural problem of a document at
once, without raising. Extraction functions in ebp_parser fail fast on the
same problems; run this first to give users the full list.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List

from ..models.ebp import ValidationResult

logger = logging.getLogger(__name__)

ERROR_INVALID_XML = "Invalid XML format"
ERROR_MISSING_PROJECT = "Missing project root element"
ERROR_MISSING_UNITS = "Missing units element"
ERROR_NO_UNITS = "No units found in file"


def _has_element(root: ET.Element, tag: str) -> bool:
    return root.tag == tag or root.find(f".//{tag}") is not None


def validate_ebp(xml_content) -> ValidationResult:
    """
    Validate EBP file structure.

    Checks, in order:
    - XML is well-formed (stops here if not)
    - a project element exists
    - a units element exists
    - at least one unit element exists

    Args:
        xml_content: XML text (str or bytes)

    Returns:
        ValidationResult with is_valid and the list of violated checks
    """
    errors: List[str] = []

    try:
        root = ET.fromstring(xml_content)
    except ET.ParseError as e:
        logger.debug(f"XML parse error: {e}")
        return ValidationResult(is_valid=False, errors=(ERROR_INVALID_XML,))
    except (TypeError, ValueError) as e:
        return ValidationResult(is_valid=False, errors=(f"Parsing error: {e}",))

    if not _has_element(root, "project"):
        errors.append(ERROR_MISSING_PROJECT)

    if not _has_element(root, "units"):
        errors.append(ERROR_MISSING_UNITS)

    if not _has_element(root, "unit"):
        errors.append(ERROR_NO_UNITS)

    if errors:
        logger.info(f"EBP validation failed: {', '.join(errors)}")

    return ValidationResult(is_valid=not errors, errors=tuple(errors))
