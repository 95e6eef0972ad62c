"""Tests for channel setting lookup tables and decoder."""

import pytest

from ebp_reader.models.channel_settings import (
    INPUT_MAIN_SETTINGS,
    OUTPUT_MAIN_SETTINGS,
    FixedSubtype,
    SettingDescription,
    SubtypeMap,
    decode_channel_settings,
    decode_input_settings,
    decode_output_settings,
)
from ebp_reader.models.ebp import Channel


class TestDecodeInputSettings:
    """Tests for the input side."""

    def test_subtype_from_map(self):
        """inMain=57, inSub=2 is a digital input closing to plus."""
        assert decode_input_settings(57, 2) == SettingDescription("digital input", "closes to plus")

    def test_fixed_subtype_ignores_sub_code(self):
        assert decode_input_settings(1, 0) == SettingDescription("digital input", "standard")
        assert decode_input_settings(1, 42) == SettingDescription("digital input", "standard")

    @pytest.mark.parametrize("sub_id,label", [
        (1, "voltage signal"),
        (2, "4-20 mA"),
        (4, "0-1500 Ohm"),
        (9, "temp sensor ohm"),
    ])
    def test_analog_input_subtypes(self, sub_id, label):
        assert decode_input_settings(64, sub_id) == SettingDescription("analog input", label)

    def test_unknown_main_code(self):
        result = decode_input_settings(99, 3)
        assert result.type == "unknown:99"
        assert result.subtype == "unknown:3"
        assert not result.is_known

    def test_unset_input_resolves_to_unknown_zero(self):
        """Main code 0 is not in the table."""
        assert decode_input_settings(0, 0) == SettingDescription("unknown:0", "unknown:0")

    def test_unknown_sub_code_keeps_category(self):
        assert decode_input_settings(54, 5) == SettingDescription("window wiper feedback", "unknown:5")


class TestDecodeOutputSettings:
    """Tests for the output side."""

    def test_not_configured(self):
        """out-main -1 yields bare sentinels without a code."""
        assert decode_output_settings(-1, 4) == SettingDescription("unknown:", "unknown:")

    def test_not_configured_checked_before_table(self):
        assert decode_output_settings(-1, -1).type == "unknown:"

    def test_unknown_main_code(self):
        assert decode_output_settings(7, -1) == SettingDescription("unknown:7", "unknown:-1")

    def test_zero_sub_code_is_valid(self):
        assert decode_output_settings(52, 0) == SettingDescription("commonline", "normal")
        assert decode_output_settings(65, 0) == SettingDescription("signal drive (max 50mA)", "positive drive")

    def test_fixed_output(self):
        assert decode_output_settings(1, 3) == SettingDescription("digital output", "standard")

    def test_unknown_sub_code(self):
        assert decode_output_settings(49, 2) == SettingDescription("digital output -", "unknown:2")


class TestDecodeChannelSettings:
    """Tests for decoding complete channels."""

    def test_sides_are_independent(self):
        settings = decode_channel_settings(57, 7, 55, 1)
        assert settings.input == SettingDescription("digital input", "measure input frequency")
        assert settings.output == SettingDescription("window wiper", "connection #1 with diode")

    def test_channel_without_output_attributes(self):
        """Missing out-main defaults to -1 and decodes to the bare sentinel."""
        channel = Channel(number="1", name="Horn", in_main_channel_setting_id="57", in_channel_setting_id="2")
        assert channel.out_main_id == -1
        assert channel.out_sub_id == -1
        assert channel.settings.output == SettingDescription("unknown:", "unknown:")
        assert channel.settings.input == SettingDescription("digital input", "closes to plus")

    def test_channel_without_input_attributes(self):
        channel = Channel()
        assert channel.in_main_id == 0
        assert channel.in_sub_id == 0
        assert channel.settings.input.type == "unknown:0"

    def test_unparseable_codes_use_defaults(self):
        channel = Channel(in_main_channel_setting_id="abc", out_main_channel_setting_id="x")
        assert channel.in_main_id == 0
        assert channel.out_main_id == -1

    def test_to_dict(self):
        settings = decode_channel_settings(1, 0, -1, -1)
        assert settings.to_dict() == {
            "input": {"type": "digital input", "subtype": "standard"},
            "output": {"type": "unknown:", "subtype": "unknown:"},
        }


class TestSettingTables:
    """Tests for table shape and immutability."""

    def test_entries_are_tagged(self):
        for table in (INPUT_MAIN_SETTINGS, OUTPUT_MAIN_SETTINGS):
            for entry in table.values():
                assert isinstance(entry, (FixedSubtype, SubtypeMap))

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            INPUT_MAIN_SETTINGS[2] = FixedSubtype("x", "y")
        with pytest.raises(TypeError):
            OUTPUT_MAIN_SETTINGS[48].subtypes[9] = "x"
