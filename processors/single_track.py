"""
Single track (monophonic) processor.

One tone per digit, all of the base duration.
"""
from typing import List, Optional

from core.models import NumberFormat, Sequence, Tone
from processors.base import TonesProcessor, ProcessorMetadata


class SingleTrackProcessor(TonesProcessor):
    """
    Monophonic processor.

    Each valid digit of the converted input becomes one tone; characters
    that are not digits are skipped without a placeholder.
    """

    TITLE = "Single"

    def get_metadata(self) -> ProcessorMetadata:
        """Define processor identity."""
        return ProcessorMetadata(
            id="SINGLE",
            name="Single Track",
            version="1.0.0",
            description="One tone per digit on a single track",
        )

    def build_tones(self, digits: str, fmt: NumberFormat) -> List[Tone]:
        """
        Map already converted digits to tones.

        Args:
            digits: Digits in fmt
            fmt: Number format of the digits

        Returns:
            Tones, one per mappable character
        """
        tones = []
        for char in digits:
            tone = self.mapper.tone_for(char, fmt)
            if tone is not None:
                tones.append(tone)
        return tones

    def process(self,
                digits: str,
                output_format: NumberFormat,
                input_format: Optional[NumberFormat] = None) -> List[Sequence]:
        """
        Generate a single sequence.

        Args:
            digits: Digit string or named constant
            output_format: Base whose digits become tones
            input_format: Base of the input (defaults to output_format)

        Returns:
            List with exactly one sequence
        """
        prepared = self.prepare_digits(digits, output_format, input_format)
        tones = self.build_tones(prepared, output_format)
        return [Sequence.from_tones(tones, title=self.TITLE)]


__all__ = ['SingleTrackProcessor']
