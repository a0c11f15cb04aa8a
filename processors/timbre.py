"""
Timbre expansion.

Turns every audible frequency of a tone into a harmonic stack
(fundamental, 2x, 3x, ...) with one harmonic per timbre coefficient, so a
chord becomes one stack per note. The coefficients are not baked into the
frequencies: they travel with the sequence and the renderer applies them as
per-harmonic gains, once per stack.
"""
from typing import Iterable, List, Tuple

from core.models import Sequence, Tone


def expand_tone(tone: Tone, harmonic_count: int) -> Tone:
    """
    Build the harmonic stacks for one tone.

    Each audible frequency gets harmonic_count harmonics, stacks laid out
    one after another. Silent tones are returned unchanged.

    Example:
        >>> expand_tone(Tone(300, (180.0, 540.0)), 2).frequencies
        (180.0, 360.0, 540.0, 1080.0)
    """
    if tone.is_silent:
        return tone
    return Tone(
        duration_ms=tone.duration_ms,
        frequencies=tuple(fundamental * (k + 1)
                          for fundamental in tone.frequencies if fundamental > 0
                          for k in range(harmonic_count)),
    )


def expand(sequence: Sequence, coefficients: Iterable[float]) -> Sequence:
    """
    Apply a timbre to a sequence.

    Args:
        sequence: Source sequence
        coefficients: Gain per harmonic (index 0 = fundamental)

    Returns:
        New sequence with harmonic stacks and the timbre attached. An empty
        coefficient vector returns the sequence unchanged.
    """
    if sequence is None:
        raise ValueError("Sequence is required")
    coefficients = tuple(float(c) for c in coefficients)
    if not coefficients:
        return sequence

    tones = tuple(expand_tone(tone, len(coefficients)) for tone in sequence.tones)
    return Sequence(
        tones=tones,
        total_duration_ms=sequence.total_duration_ms,
        title=sequence.title,
        timbre=coefficients,
    )


def expand_all(sequences: Iterable[Sequence], coefficients: Iterable[float]) -> List[Sequence]:
    """Apply the same timbre to every sequence."""
    if sequences is None:
        raise ValueError("Sequences are required")
    coefficients = tuple(coefficients)
    return [expand(seq, coefficients) for seq in sequences]


class TimbreExpander:
    """Reusable timbre transform bound to one coefficient vector."""

    def __init__(self, coefficients: Iterable[float]):
        """
        Args:
            coefficients: Gain per harmonic (index 0 = fundamental)
        """
        self.coefficients: Tuple[float, ...] = tuple(float(c) for c in coefficients)

    def expand(self, sequence: Sequence) -> Sequence:
        return expand(sequence, self.coefficients)

    def expand_all(self, sequences: Iterable[Sequence]) -> List[Sequence]:
        return expand_all(sequences, self.coefficients)
