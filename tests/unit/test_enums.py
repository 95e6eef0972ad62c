"""Tests for Direction and N2kDirection."""

from ebp_reader.models.enums import Direction, N2kDirection


class TestDirection:
    """Tests for physical channel direction."""

    def test_codes(self):
        assert Direction.from_id(0) == Direction.BOTH
        assert Direction.from_id(1) == Direction.INPUT
        assert Direction.from_id(2) == Direction.OUTPUT

    def test_unknown_codes_map_to_none(self):
        assert Direction.from_id(3) == Direction.NONE
        assert Direction.from_id(None) == Direction.NONE

    def test_from_string(self):
        """Test labels as found in channel direction attributes."""
        assert Direction.from_string("Output") == Direction.OUTPUT
        assert Direction.from_string(" input ") == Direction.INPUT
        assert Direction.from_string("BOTH") == Direction.BOTH
        assert Direction.from_string("N/A") == Direction.NONE
        assert Direction.from_string(None) == Direction.NONE

    def test_labels(self):
        assert Direction.OUTPUT.label == "output"
        assert Direction.NONE.label == ""
        assert str(Direction.BOTH) == "both"


class TestN2kDirection:
    """Tests for NMEA 2000 direction."""

    def test_codes(self):
        assert N2kDirection.from_id(0) == N2kDirection.TRANSMIT
        assert N2kDirection.from_id(1) == N2kDirection.RECEIVE
        assert N2kDirection.from_id(2) == N2kDirection.NONE
        assert N2kDirection.from_id(None) == N2kDirection.NONE

    def test_labels(self):
        assert N2kDirection.TRANSMIT.label == "transmit"
        assert N2kDirection.RECEIVE.label == "receive"
        assert N2kDirection.NONE.label == ""
