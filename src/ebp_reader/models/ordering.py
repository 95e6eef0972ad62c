"""
Deterministic ordering of decoded records.

All sorts are stable (Python's sort is), so records with equal keys keep
their document order.
"""

from functools import cmp_to_key
from typing import Iterable, List

from .ebp import Alarm, DecodedComponent, MemoryAllocation, Schema
from ..utils.conversions import parse_int


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_labels(a: str, b: str) -> int:
    """Numeric comparison when both labels are integers, otherwise lexicographic."""
    a_num = parse_int(a)
    b_num = parse_int(b)
    if a_num is not None and b_num is not None:
        return _cmp(a_num, b_num)
    return _cmp(str(a), str(b))


def compare_components(a: DecodedComponent, b: DecodedComponent) -> int:
    """Compare by PGN, device, instance, then label (absent numbers count as 0)."""
    if a.pgn != b.pgn:
        return _cmp(a.pgn, b.pgn)

    a_device = a.device if a.device is not None else 0
    b_device = b.device if b.device is not None else 0
    if a_device != b_device:
        return _cmp(a_device, b_device)

    a_instance = a.instance if a.instance is not None else 0
    b_instance = b.instance if b.instance is not None else 0
    if a_instance != b_instance:
        return _cmp(a_instance, b_instance)

    return compare_labels(a.label, b.label)


def sort_components(components: Iterable[DecodedComponent]) -> List[DecodedComponent]:
    return sorted(components, key=cmp_to_key(compare_components))


def alarm_sort_key(alarm: Alarm) -> int:
    return parse_int(alarm.alarm_id, 0)


def sort_alarms(alarms: Iterable[Alarm]) -> List[Alarm]:
    """Sort alarms by numeric alarm id; unparseable ids sort as 0."""
    return sorted(alarms, key=alarm_sort_key)


def sort_memory(memory: Iterable[MemoryAllocation]) -> List[MemoryAllocation]:
    return sorted(memory, key=lambda m: m.location if m.location is not None else 0)


def sort_schemas(schemas: Iterable[Schema]) -> List[Schema]:
    return sorted(schemas, key=lambda s: s.sort_index)
