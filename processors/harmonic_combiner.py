"""
Combine parallel tracks into a single track of chords.

For example: tracks [1,2,3] and [4,5,6] become [(1,4), (2,5), (3,6)].
Different lengths: [1,2] and [3,4,5,6] become [(1,3), (2,4), (5), (6)].
"""
from typing import List, Optional

from core.models import Sequence, Tone

HARMONIC_TITLE = "Harmonic"
EMPTY_TITLE = "Empty"


def combine_harmonically(sequences: Optional[List[Sequence]]) -> Sequence:
    """
    Merge same-index tones of several sequences into chords.

    Each chord holds the audible frequencies of every tone at that index and
    lasts as long as the longest of them. Silent tones contribute no
    frequency; an index where every tone is silent stays silent.

    Args:
        sequences: Sequences to merge

    Returns:
        Single merged sequence titled "Harmonic" ("Empty" for no input)
    """
    if not sequences:
        return Sequence.from_tones((), title=EMPTY_TITLE)

    if len(sequences) == 1:
        return Sequence.from_tones(sequences[0].tones, title=HARMONIC_TITLE)

    max_length = max(len(seq.tones) for seq in sequences)
    combined = []

    for index in range(max_length):
        frequencies = []
        duration_ms = 0.0
        for seq in sequences:
            if index >= len(seq.tones):
                continue
            tone = seq.tones[index]
            if not tone.is_silent:
                frequencies.extend(f for f in tone.frequencies if f > 0)
            duration_ms = max(duration_ms, tone.duration_ms)

        if frequencies:
            combined.append(Tone(duration_ms=duration_ms, frequencies=tuple(frequencies)))
        else:
            combined.append(Tone.silence(duration_ms))

    return Sequence.from_tones(combined, title=HARMONIC_TITLE)
