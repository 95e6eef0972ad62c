"""Tests for deterministic record ordering."""

from ebp_reader.models.ebp import Alarm, DecodedComponent, MemoryAllocation, Schema
from ebp_reader.models.ordering import (
    compare_labels,
    sort_alarms,
    sort_components,
    sort_memory,
    sort_schemas,
)


def _component(pgn, device=None, instance=None, label="", name="C"):
    return DecodedComponent(name=name, pgn=pgn, instance=instance, label=label, device=device)


def _alarm(alarm_id, name="A"):
    return Alarm(schema_name="S", component_id=1292, alarm_id=alarm_id, alarm_name=name)


class TestCompareLabels:
    """Tests for compare_labels()."""

    def test_numeric_labels(self):
        assert compare_labels("9", "10") < 0
        assert compare_labels("10", "9") > 0
        assert compare_labels("07", "7") == 0

    def test_mixed_labels_compare_as_text(self):
        assert compare_labels("10", "fresh water") < 0
        assert compare_labels("black water", "10") > 0

    def test_text_labels(self):
        assert compare_labels("fuel", "oil") < 0
        assert compare_labels("", "fuel") < 0


class TestSortComponents:
    """Tests for component ordering."""

    def test_key_priority(self):
        """PGN first, then device, instance and label."""
        components = [
            _component(127505, device=3, instance=1, label="fuel"),
            _component(127501, device=5, instance=0, label="1"),
            _component(127501, device=3, instance=2, label="1"),
            _component(127501, device=3, instance=1, label="10"),
            _component(127501, device=3, instance=1, label="9"),
        ]
        ordered = sort_components(components)
        assert [(c.pgn, c.device, c.instance, c.label) for c in ordered] == [
            (127501, 3, 1, "9"),
            (127501, 3, 1, "10"),
            (127501, 3, 2, "1"),
            (127501, 5, 0, "1"),
            (127505, 3, 1, "fuel"),
        ]

    def test_absent_numbers_sort_as_zero(self):
        components = [_component(65001, device=1), _component(65001, device=None, instance=None)]
        ordered = sort_components(components)
        assert ordered[0].device is None
        assert ordered[1].device == 1

    def test_stable_for_equal_keys(self):
        components = [_component(65280, name="first"), _component(65280, name="second")]
        assert [c.name for c in sort_components(components)] == ["first", "second"]

    def test_sorting_twice_is_noop(self):
        components = [_component(130312, label="x"), _component(127502, label="3"), _component(127502, label="2")]
        once = sort_components(components)
        assert sort_components(once) == once


class TestSortAlarms:
    """Tests for alarm ordering."""

    def test_numeric_order(self):
        alarms = [_alarm("12"), _alarm("3"), _alarm("100")]
        assert [a.alarm_id for a in sort_alarms(alarms)] == ["3", "12", "100"]

    def test_equal_ids_keep_input_order(self):
        """Test alarms with equal keys stay in document order."""
        alarms = [
            _alarm("5", name="first five"),
            _alarm("N/A", name="unnumbered"),
            _alarm("5", name="second five"),
            _alarm("0", name="zero"),
            _alarm("5", name="third five"),
            _alarm("N/A", name="unnumbered again"),
        ]
        assert [a.alarm_name for a in sort_alarms(alarms)] == [
            "unnumbered",
            "zero",
            "unnumbered again",
            "first five",
            "second five",
            "third five",
        ]

    def test_unparseable_ids_sort_as_zero(self):
        alarms = [_alarm("5"), _alarm("N/A", name="x"), _alarm("-1")]
        assert [a.alarm_id for a in sort_alarms(alarms)] == ["-1", "N/A", "5"]


class TestSortMemoryAndSchemas:
    def test_memory_by_location(self):
        memory = [
            MemoryAllocation("UWord (16 Bit)", 16, 40),
            MemoryAllocation("Bit (1 Bit)", 1, None),
            MemoryAllocation("Bit (1 Bit)", 1, 5),
        ]
        assert [m.location for m in sort_memory(memory)] == [None, 5, 40]

    def test_schemas_by_sort_index(self):
        schemas = [Schema(1, "B", 2), Schema(2, "A", 0), Schema(3, "C", 1)]
        assert [s.name for s in sort_schemas(schemas)] == ["A", "C", "B"]
