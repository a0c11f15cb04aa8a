"""
Unit tests for digit string conversion.
"""
import random

import pytest

from core import number_converter
from core.exceptions import FormatError, MathToneError
from core.models import NumberFormat


POWER_OF_TWO = [f for f in NumberFormat if f.is_power_of_two]


class TestConvert:
    """Tests for convert()."""

    def test_binary_to_hex(self):
        assert number_converter.convert("1010", NumberFormat.BIN, NumberFormat.HEX) == "A"

    def test_hex_to_octal(self):
        assert number_converter.convert("FF", NumberFormat.HEX, NumberFormat.OCT) == "377"

    def test_decimal_to_hex(self):
        assert number_converter.convert("255", NumberFormat.DEC, NumberFormat.HEX) == "FF"

    def test_hex_to_decimal_lowercase(self):
        assert number_converter.convert("ff", NumberFormat.HEX, NumberFormat.DEC) == "255"

    def test_base32(self):
        assert number_converter.convert("31", NumberFormat.DEC, NumberFormat.BASE32) == "V"
        assert number_converter.convert("10", NumberFormat.BASE32, NumberFormat.DEC) == "32"

    def test_empty_input(self):
        assert number_converter.convert("", NumberFormat.DEC, NumberFormat.HEX) == ""

    def test_same_format_returns_input(self):
        assert number_converter.convert("00123", NumberFormat.DEC, NumberFormat.DEC) == "00123"

    def test_leading_zeros_dropped(self):
        assert number_converter.convert("000101", NumberFormat.BIN, NumberFormat.OCT) == "5"
        assert number_converter.convert("0042", NumberFormat.DEC, NumberFormat.BIN) == "101010"

    def test_zero(self):
        assert number_converter.convert("0000", NumberFormat.BIN, NumberFormat.HEX) == "0"
        assert number_converter.convert("0", NumberFormat.DEC, NumberFormat.BIN) == "0"

    def test_invalid_character(self):
        with pytest.raises(FormatError) as exc_info:
            number_converter.convert("12G4", NumberFormat.HEX, NumberFormat.DEC)
        error = exc_info.value
        assert error.character == "G"
        assert error.position == 2
        assert error.base == 16

    def test_is_valid(self):
        assert number_converter.is_valid("e", NumberFormat.HEX)
        assert not number_converter.is_valid("e", NumberFormat.DEC)
        assert number_converter.is_valid("", NumberFormat.BIN)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            number_converter.convert("2", NumberFormat.BIN, NumberFormat.DEC)
        with pytest.raises(MathToneError):
            number_converter.convert("2", NumberFormat.BIN, NumberFormat.HEX)

    def test_long_decimal_string(self):
        # Longer than the interpreter's default int/str digit limit
        digits = "9" * 6000
        hex_digits = number_converter.convert(digits, NumberFormat.DEC, NumberFormat.HEX)
        assert number_converter.convert(hex_digits, NumberFormat.HEX, NumberFormat.DEC) == digits


class TestRoundTrip:
    """Converting forth and back gives the canonical input."""

    @pytest.mark.parametrize("source", list(NumberFormat))
    @pytest.mark.parametrize("target", list(NumberFormat))
    def test_round_trip(self, source, target):
        rng = random.Random(source.base * 100 + target.base)
        digits = "".join(rng.choice(source.alphabet) for _ in range(40))
        there = number_converter.convert(digits, source, target)
        back = number_converter.convert(there, target, source)
        if source == target:
            assert back == digits
        else:
            assert back == number_converter.canonicalize(digits, source)


class TestConversionPaths:
    """The bit path and the integer path agree."""

    @pytest.mark.parametrize("source", POWER_OF_TWO)
    @pytest.mark.parametrize("target", POWER_OF_TWO)
    def test_bits_match_integer(self, source, target):
        rng = random.Random(source.base + target.base)
        digits = "".join(rng.choice(source.alphabet) for _ in range(64))
        assert (number_converter.convert_via_bits(digits, source, target) ==
                number_converter.convert_via_integer(digits, source, target))

    def test_bits_path_rejects_decimal(self):
        with pytest.raises(ValueError):
            number_converter.to_bits("12", NumberFormat.DEC)


class TestHelpers:
    """Tests for the smaller helpers."""

    def test_validate_uppercases(self):
        assert number_converter.validate("abc", NumberFormat.HEX) == "ABC"

    def test_filter_valid(self):
        assert number_converter.filter_valid("3.14-15x9", NumberFormat.DEC) == "314159"
        assert number_converter.filter_valid("1a2g", NumberFormat.HEX) == "1A2"

    def test_strip_leading_zeros(self):
        assert number_converter.strip_leading_zeros("000") == "0"
        assert number_converter.strip_leading_zeros("0012") == "12"
        assert number_converter.strip_leading_zeros("") == ""

    def test_parse_and_format_integer(self):
        assert number_converter.parse_integer("777", NumberFormat.OCT) == 511
        assert number_converter.format_integer(511, NumberFormat.BIN) == "111111111"
        assert number_converter.format_integer(0, NumberFormat.HEX) == "0"

    def test_parse_empty(self):
        with pytest.raises(FormatError):
            number_converter.parse_integer("", NumberFormat.DEC)

    def test_format_negative(self):
        with pytest.raises(ValueError):
            number_converter.format_integer(-1, NumberFormat.DEC)
