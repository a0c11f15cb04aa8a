"""
Reach single track processor.

Splits the digit alphabet into octave groups and emits one track per group.
Low digit values sound rarely but sustain longer ("reach" further), high
values are short. All tracks share one time grid: slot i of every track
starts at i * base_duration_ms, and every track lasts exactly
len(digits) * base_duration_ms.
"""
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from core.models import NumberFormat, Sequence, Tone
from processors.base import TonesProcessor, ProcessorMetadata

# Group names of the octave-split formats, lowest octave first
_GROUP_NAMES = {
    NumberFormat.QAD: ("Low", "High"),
    NumberFormat.OCT: ("Low", "Mid", "High"),
    NumberFormat.HEX: ("Low", "MidLow", "MidHigh", "High"),
}

# Every other format plays on one unsplit track
SINGLE_GROUP_NAME = "Single"


@dataclass(frozen=True)
class OctaveGroup:
    """
    Digit values sharing one track.

    Attributes:
        name: Group name ("Low", "MidLow", ...)
        values: Digit values belonging to the group
        reach: Maximum sustain in time slots
    """
    name: str
    values: FrozenSet[int]
    reach: int

    def __post_init__(self):
        """Validate octave group."""
        if self.reach < 1:
            raise ValueError(f"Reach must be at least 1, got {self.reach}")

    @property
    def title(self) -> str:
        return f"Octave_{self.name}"


def octave_groups(fmt: NumberFormat) -> Tuple[OctaveGroup, ...]:
    """
    Partition a format's non-zero digit values into octave groups.

    QAD, OCT and HEX are split by octave: group k holds the values in
    [2^k, 2^(k+1)) and has a reach of 2^(G-1-k) slots, G being the number
    of groups. BIN, DEC and BASE32 get a single "Single" group holding every
    value with reach 1. Value 0 (silence) belongs to no group.

    Example (HEX):
        Low {1} x8, MidLow {2,3} x4, MidHigh {4..7} x2, High {8..15} x1
    """
    top = fmt.base - 1
    names = _GROUP_NAMES.get(fmt)
    if names is None:
        return (OctaveGroup(name=SINGLE_GROUP_NAME,
                            values=frozenset(range(1, top + 1)),
                            reach=1),)

    count = len(names)
    groups = []
    for k in range(count):
        low = 1 << k
        high = min((1 << (k + 1)) - 1, top)
        groups.append(OctaveGroup(
            name=names[k],
            values=frozenset(range(low, high + 1)),
            reach=1 << (count - 1 - k),
        ))
    return tuple(groups)


def _next_same_value(values: List[int]) -> List[int]:
    """For each slot, index of the next slot with the same value (len if none)."""
    following = [len(values)] * len(values)
    last_seen = {}
    for index in range(len(values) - 1, -1, -1):
        value = values[index]
        following[index] = last_seen.get(value, len(values))
        last_seen[value] = index
    return following


class ReachSingleTrackProcessor(TonesProcessor):
    """
    Octave-group processor with sustained notes.

    For each group and slot i:
    - digit in group: a tone sustained for
      min(reach, slots until the same value recurs, slots left) slots;
      the slots it covers are consumed by it
    - otherwise: one silent slot
    """

    def get_metadata(self) -> ProcessorMetadata:
        """Define processor identity."""
        return ProcessorMetadata(
            id="REACH",
            name="Reach Single Track",
            version="1.0.0",
            description="One sustained track per octave group",
            polyphonic=True,
        )

    def digit_values(self, digits: str, fmt: NumberFormat) -> List[int]:
        """Values of the mappable characters, in order."""
        values = []
        for char in digits:
            value = fmt.digit_value(char)
            if value is not None:
                values.append(value)
        return values

    def build_group(self,
                    group: OctaveGroup,
                    values: List[int],
                    next_same: List[int]) -> Sequence:
        """
        Build one group's track.

        Args:
            group: Octave group
            values: Digit value per slot
            next_same: Index of the next slot with the same value

        Returns:
            Sequence lasting len(values) * base_duration_ms
        """
        base = self.base_duration_ms
        slot_count = len(values)
        tones = []
        slot = 0
        while slot < slot_count:
            value = values[slot]
            if value in group.values:
                span = min(group.reach, next_same[slot] - slot, slot_count - slot)
                tones.append(self.mapper.tone_for_value(value, span * base))
                slot += span
            else:
                tones.append(Tone.silence(base))
                slot += 1

        return Sequence(
            tones=tuple(tones),
            total_duration_ms=float(slot_count * base),
            title=group.title,
        )

    def process(self,
                digits: str,
                output_format: NumberFormat,
                input_format: Optional[NumberFormat] = None) -> List[Sequence]:
        """
        Generate one sequence per octave group.

        Args:
            digits: Digit string or named constant
            output_format: Base whose digits become tones (selects the groups)
            input_format: Base of the input (defaults to output_format)

        Returns:
            One sequence per octave group, all of equal total duration
        """
        prepared = self.prepare_digits(digits, output_format, input_format)
        values = self.digit_values(prepared, output_format)
        next_same = _next_same_value(values)
        return [self.build_group(group, values, next_same)
                for group in octave_groups(output_format)]


__all__ = ['ReachSingleTrackProcessor', 'OctaveGroup', 'octave_groups']
