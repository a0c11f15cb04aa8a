"""
Immutable data models for mathtone.

All models are immutable so that:
- Processors can hand out sequences without copying them
- Transformations (timbre, chord merging) always build new instances
- Group invariants (equal total duration) can be checked structurally
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple, Optional, Dict, Any, Iterable


# Full digit alphabet; every format uses a prefix of it
DIGIT_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUV"


class NumberFormat(Enum):
    """Supported numeric bases. The value is the base itself."""
    BIN = 2
    QAD = 4
    OCT = 8
    DEC = 10
    HEX = 16
    BASE32 = 32

    @property
    def base(self) -> int:
        return self.value

    @property
    def alphabet(self) -> str:
        """Canonical uppercase digit alphabet (length == base)."""
        return DIGIT_ALPHABET[:self.value]

    @property
    def is_power_of_two(self) -> bool:
        return self.value & (self.value - 1) == 0

    @property
    def bits_per_digit(self) -> Optional[int]:
        """Number of bits one digit encodes, or None for non power-of-two bases."""
        if not self.is_power_of_two:
            return None
        return self.value.bit_length() - 1

    def digit_value(self, char: str) -> Optional[int]:
        """
        Get the value of a single digit character.

        Args:
            char: Digit character (case-insensitive)

        Returns:
            Digit value (0 to base-1), or None if not part of this alphabet
        """
        if len(char) != 1:
            return None
        index = self.alphabet.find(char.upper())
        return index if index >= 0 else None

    @classmethod
    def from_base(cls, base: int) -> "NumberFormat":
        """
        Look up a format by its numeric base.

        Raises:
            ValueError: If base is not supported
        """
        for fmt in cls:
            if fmt.value == base:
                return fmt
        supported = ", ".join(str(f.value) for f in cls)
        raise ValueError(f"Unsupported base: {base}. Expected one of {supported}")


@dataclass(frozen=True)
class Tone:
    """
    Single timed tone.

    Attributes:
        duration_ms: Duration in milliseconds (must be positive)
        frequencies: Frequencies in Hz. frequencies[0] == 0 means silence,
                     and any further entries are then ignored.
    """
    duration_ms: float
    frequencies: Tuple[float, ...] = (0.0,)

    def __post_init__(self):
        """Validate tone."""
        if self.duration_ms <= 0:
            raise ValueError(f"Tone duration must be positive, got {self.duration_ms}")
        if not isinstance(self.frequencies, tuple):
            object.__setattr__(self, "frequencies", tuple(self.frequencies))
        if not self.frequencies:
            raise ValueError("Tone requires at least one frequency")
        for freq in self.frequencies:
            if freq < 0:
                raise ValueError(f"Frequency must be non-negative, got {freq}")

    @classmethod
    def silence(cls, duration_ms: float) -> "Tone":
        """Create a silent tone."""
        return cls(duration_ms=duration_ms, frequencies=(0.0,))

    @classmethod
    def single(cls, frequency: float, duration_ms: float) -> "Tone":
        """Create a tone with one frequency (0 Hz gives silence)."""
        return cls(duration_ms=duration_ms, frequencies=(float(frequency),))

    @property
    def is_silent(self) -> bool:
        return self.frequencies[0] == 0

    @property
    def fundamental(self) -> float:
        return self.frequencies[0]

    @property
    def duration_seconds(self) -> float:
        return self.duration_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "duration_ms": self.duration_ms,
            "frequencies": list(self.frequencies),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tone":
        """Create Tone from dictionary."""
        return cls(
            duration_ms=data["duration_ms"],
            frequencies=tuple(data.get("frequencies", (0.0,))),
        )


@dataclass(frozen=True)
class Sequence:
    """
    Ordered list of tones rendered back to back.

    Attributes:
        tones: Tones in playback order
        total_duration_ms: Sum of tone durations
        title: Display name (e.g., "Single", "Track_1", "Octave_Low")
        timbre: Optional per-harmonic gain coefficients used at render time
    """
    tones: Tuple[Tone, ...] = field(default_factory=tuple)
    total_duration_ms: float = 0.0
    title: str = ""
    timbre: Optional[Tuple[float, ...]] = None

    def __post_init__(self):
        """Validate sequence."""
        if not isinstance(self.tones, tuple):
            object.__setattr__(self, "tones", tuple(self.tones))
        if self.timbre is not None and not isinstance(self.timbre, tuple):
            object.__setattr__(self, "timbre", tuple(float(c) for c in self.timbre))
        if self.total_duration_ms < 0:
            raise ValueError(f"Total duration must be non-negative, got {self.total_duration_ms}")

    @classmethod
    def from_tones(cls,
                   tones: Iterable[Tone],
                   title: str = "",
                   timbre: Optional[Iterable[float]] = None) -> "Sequence":
        """
        Build a sequence and compute its total duration from the tones.

        Args:
            tones: Tones in playback order
            title: Sequence title
            timbre: Optional timbre coefficients

        Returns:
            New Sequence
        """
        tones = tuple(tones)
        return cls(
            tones=tones,
            total_duration_ms=float(sum(t.duration_ms for t in tones)),
            title=title,
            timbre=tuple(timbre) if timbre is not None else None,
        )

    @property
    def total_duration_seconds(self) -> float:
        return self.total_duration_ms / 1000.0

    @property
    def is_empty(self) -> bool:
        return len(self.tones) == 0

    def with_title(self, title: str) -> "Sequence":
        """Return a copy of this sequence with a different title."""
        return replace(self, title=title)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "title": self.title,
            "total_duration_ms": self.total_duration_ms,
            "timbre": list(self.timbre) if self.timbre is not None else None,
            "tones": [t.to_dict() for t in self.tones],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sequence":
        """Create Sequence from dictionary."""
        tones = tuple(Tone.from_dict(t) for t in data.get("tones", []))
        timbre = data.get("timbre")
        return cls(
            tones=tones,
            total_duration_ms=data.get("total_duration_ms",
                                       sum(t.duration_ms for t in tones)),
            title=data.get("title", ""),
            timbre=tuple(timbre) if timbre is not None else None,
        )
