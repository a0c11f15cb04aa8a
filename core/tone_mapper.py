"""
Digit to tone mapping.

A digit value v maps to a fundamental of base_frequency * v; value 0 maps
to silence.
"""
from typing import Optional

from core.constants import DEFAULT_BASE_FREQUENCY, DEFAULT_BASE_DURATION_MS
from core.models import NumberFormat, Tone


class ToneMapper:
    """Maps digit characters of a number format to tones."""

    def __init__(self,
                 base_frequency: float = DEFAULT_BASE_FREQUENCY,
                 base_duration_ms: float = DEFAULT_BASE_DURATION_MS):
        """
        Args:
            base_frequency: Frequency of digit value 1 in Hz
            base_duration_ms: Nominal duration of one tone
        """
        if base_frequency <= 0:
            raise ValueError(f"Base frequency must be positive, got {base_frequency}")
        if base_duration_ms <= 0:
            raise ValueError(f"Base duration must be positive, got {base_duration_ms}")
        self.base_frequency = float(base_frequency)
        self.base_duration_ms = base_duration_ms

    def frequency_for(self, value: int) -> float:
        """Fundamental frequency for a digit value (0.0 means silence)."""
        return self.base_frequency * value

    def tone_for_value(self, value: int, duration_ms: Optional[float] = None) -> Tone:
        """
        Build the tone for a digit value.

        Args:
            value: Digit value
            duration_ms: Override duration (defaults to base duration)
        """
        if duration_ms is None:
            duration_ms = self.base_duration_ms
        return Tone.single(self.frequency_for(value), duration_ms)

    def tone_for(self, char: str, fmt: NumberFormat) -> Optional[Tone]:
        """
        Build the tone for a digit character.

        Returns:
            Tone, or None if the character is not a digit of fmt
        """
        value = fmt.digit_value(char)
        if value is None:
            return None
        return self.tone_for_value(value)
