"""
Unit tests for ToneMapper, named constants and timbre profiles.
"""
import pytest

from core.constants import NAMED_CONSTANTS, resolve_named_constant
from core.models import NumberFormat
from core.timbre_profiles import TIMBRE_PROFILES, available_profiles, get_profile, has_profile
from core.tone_mapper import ToneMapper


class TestToneMapper:
    """Tests for ToneMapper."""

    def test_defaults(self):
        mapper = ToneMapper()
        assert mapper.base_frequency == 180.0
        assert mapper.base_duration_ms == 300

    def test_value_to_frequency(self):
        mapper = ToneMapper(base_frequency=100.0, base_duration_ms=250)
        tone = mapper.tone_for("F", NumberFormat.HEX)
        assert tone.fundamental == 1500.0
        assert tone.duration_ms == 250

    def test_zero_is_silence(self):
        tone = ToneMapper().tone_for("0", NumberFormat.DEC)
        assert tone.is_silent
        assert tone.duration_ms == 300

    def test_invalid_character(self):
        assert ToneMapper().tone_for("9", NumberFormat.OCT) is None

    def test_duration_override(self):
        tone = ToneMapper().tone_for_value(2, duration_ms=900)
        assert tone.duration_ms == 900
        assert tone.fundamental == 360.0

    @pytest.mark.parametrize("frequency,duration", [(0, 300), (-5, 300), (180, 0)])
    def test_invalid_settings(self, frequency, duration):
        with pytest.raises(ValueError):
            ToneMapper(base_frequency=frequency, base_duration_ms=duration)


class TestNamedConstants:
    """Tests for named constant lookup."""

    def test_pi(self):
        assert resolve_named_constant("PI").startswith("31415926535")
        assert len(NAMED_CONSTANTS["PI"]) == 101

    def test_case_insensitive(self):
        assert resolve_named_constant(" phi ") == NAMED_CONSTANTS["PHI"]

    def test_miss_returns_input(self):
        assert resolve_named_constant("12345") == "12345"
        assert resolve_named_constant("tau") == "tau"

    def test_custom_table(self):
        assert resolve_named_constant("ANSWER", {"ANSWER": "42"}) == "42"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            NAMED_CONSTANTS["PI"] = "3"


class TestTimbreProfiles:
    """Tests for named timbre profiles."""

    def test_lookup_is_case_insensitive(self):
        assert get_profile("piano") == TIMBRE_PROFILES["Piano"]
        assert has_profile("SAWTOOTH")

    def test_unknown(self):
        assert get_profile("kazoo") is None
        assert not has_profile("kazoo")

    def test_available_profiles_sorted(self):
        names = available_profiles()
        assert names == sorted(names)
        assert "Sine" in names
        assert get_profile("Sine") == (1.0,)

    def test_coefficients_non_negative(self):
        for name, coefficients in TIMBRE_PROFILES.items():
            assert coefficients, name
            assert all(c >= 0 for c in coefficients), name
