"""
Multi track (polyphonic) processor.

Splits a '+' separated expression ("123+456") into parts and runs each
part independently through a wrapped track processor. Parts are emitted as
parallel tracks; chord merging is available as an explicit opt-in.
"""
from typing import List, Optional

from core.constants import TRACK_SEPARATOR
from core.models import NumberFormat, Sequence
from processors.base import TonesProcessor, ProcessorMetadata
from processors.harmonic_combiner import combine_harmonically, EMPTY_TITLE
from processors.single_track import SingleTrackProcessor


def parse_expression(expression: str) -> List[str]:
    """
    Split an expression on the track separator.

    Args:
        expression: Expression like "abc+def" or "123 + 456"

    Returns:
        Trimmed, non-empty parts

    Example:
        >>> parse_expression(" 12 + +34 ")
        ['12', '34']
    """
    if not expression:
        return []
    parts = (part.strip() for part in expression.split(TRACK_SEPARATOR))
    return [part for part in parts if part]


def is_polyphonic(expression: str) -> bool:
    """Check if an expression uses the track separator."""
    return bool(expression) and TRACK_SEPARATOR in expression


class MultiTrackProcessor(TonesProcessor):
    """
    Polyphonic processor built on a single-track processor.

    Each part of the expression is processed on its own, so tracks may end
    up with different lengths. Without a separator the result equals the
    wrapped processor's result.
    """

    def __init__(self,
                 track_processor: Optional[TonesProcessor] = None,
                 merge_chords: bool = False,
                 **kwargs):
        """
        Initialize processor.

        Args:
            track_processor: Processor applied to every part
                             (defaults to SingleTrackProcessor built from kwargs)
            merge_chords: Merge the parallel tracks into one chord track
            **kwargs: base_duration_ms, base_frequency, constants
        """
        super().__init__(**kwargs)
        if track_processor is None:
            track_processor = SingleTrackProcessor(**kwargs)
        self.track_processor = track_processor
        self.merge_chords = merge_chords

    def get_metadata(self) -> ProcessorMetadata:
        """Define processor identity."""
        return ProcessorMetadata(
            id="MULTI",
            name="Multi Track",
            version="1.0.0",
            description="Parallel tracks from '+' separated expressions",
            polyphonic=True,
        )

    def process(self,
                digits: str,
                output_format: NumberFormat,
                input_format: Optional[NumberFormat] = None) -> List[Sequence]:
        """
        Generate one or more parallel sequences.

        Args:
            digits: Expression, e.g. "31415+27182"
            output_format: Base whose digits become tones
            input_format: Base of the input (defaults to output_format)

        Returns:
            One sequence per part (or per part and inner sequence); a single
            empty sequence for empty input
        """
        parts = parse_expression(digits)
        if not parts:
            return [Sequence.from_tones((), title=EMPTY_TITLE)]

        if len(parts) == 1:
            return self._finish(self.track_processor.process(parts[0], output_format, input_format))

        tracks = []
        for index, part in enumerate(parts, start=1):
            part_sequences = self.track_processor.process(part, output_format, input_format)
            if len(part_sequences) == 1:
                tracks.append(part_sequences[0].with_title(f"Track_{index}"))
            else:
                tracks.extend(seq.with_title(f"Track_{index}_{seq.title}")
                              for seq in part_sequences)

        return self._finish(tracks)

    def _finish(self, sequences: List[Sequence]) -> List[Sequence]:
        if self.merge_chords:
            return [combine_harmonically(sequences)]
        return list(sequences)


__all__ = ['MultiTrackProcessor', 'parse_expression', 'is_polyphonic']
