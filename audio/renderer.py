"""
Sequence renderer.

Synthesizes tone sequences into a stereo float buffer and serializes it as
a WAV file. One sequence is rendered centred on both channels; several are
mixed with a count-dependent gain and spread across the stereo field.
"""
from dataclasses import dataclass, asdict, fields
import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import numpy as np

from audio import dsp
from audio.wav import encode_wav
from core.constants import SAMPLE_RATE
from core.models import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderSettings:
    """
    Synthesis and mixing parameters.

    Attributes:
        sample_rate: Samples per second
        base_amplitude: Amplitude of a tone at or above reference_frequency
        sequence_scaling_exponent: p in the mix gain 1 / N^p
        minimum_scaling_factor: Lower bound of the mix gain
        normalization_threshold: Peak above which the buffer is scaled down
        normalization_target_peak: Peak after normalization
        reference_frequency: Frequency where low-end compensation starts
        amplification_factor: Frequency ratio per unit of extra gain
        max_amplification: Cap of the low-end compensation
        minimal_shift: Stereo step between adjacent sequences
        maximal_shift: Cap of the total stereo spread
    """
    sample_rate: int = SAMPLE_RATE
    base_amplitude: float = 0.3
    sequence_scaling_exponent: float = 0.7
    minimum_scaling_factor: float = 0.1
    normalization_threshold: float = 0.95
    normalization_target_peak: float = 0.9
    reference_frequency: float = 880.0
    amplification_factor: float = 2.0
    max_amplification: float = 3.0
    minimal_shift: float = 0.2
    maximal_shift: float = 0.9

    def __post_init__(self):
        """Validate settings."""
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate}")
        if self.base_amplitude <= 0:
            raise ValueError(f"Base amplitude must be positive, got {self.base_amplitude}")
        if self.reference_frequency <= 0:
            raise ValueError(f"Reference frequency must be positive, got {self.reference_frequency}")
        if self.amplification_factor <= 1:
            raise ValueError(f"Amplification factor must be > 1, got {self.amplification_factor}")
        if self.max_amplification < 1:
            raise ValueError(f"Max amplification must be >= 1, got {self.max_amplification}")
        if not 0 < self.normalization_target_peak <= 1:
            raise ValueError(f"Target peak must be in (0, 1], got {self.normalization_target_peak}")
        if self.normalization_threshold <= 0:
            raise ValueError(f"Normalization threshold must be positive, got {self.normalization_threshold}")
        if self.minimal_shift < 0 or self.maximal_shift < 0:
            raise ValueError("Stereo shifts must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderSettings":
        """Create RenderSettings from dictionary (unknown keys are ignored)."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


class AudioRenderer:
    """
    Renders sequences to stereo audio.

    Example:
        >>> from core.models import Tone
        >>> renderer = AudioRenderer()
        >>> wav = renderer.render([Sequence.from_tones([Tone.single(440.0, 1000)])])
        >>> len(wav)
        176444
    """

    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()

    def amplitude(self, frequency: float) -> float:
        """Compensated amplitude of one harmonic."""
        s = self.settings
        return dsp.amplitude_for_frequency(
            frequency,
            base_amplitude=s.base_amplitude,
            reference_frequency=s.reference_frequency,
            amplification_factor=s.amplification_factor,
            max_amplification=s.max_amplification,
        )

    def frame_count(self, sequences: Iterable[Sequence]) -> int:
        """Buffer length: the longest sequence's total duration."""
        longest = max((seq.total_duration_seconds for seq in sequences), default=0.0)
        return int(longest * self.settings.sample_rate)

    def synthesize(self, sequence: Sequence, frames: int) -> np.ndarray:
        """
        Render one sequence into a mono buffer.

        Tones are laid end to end; a tone lasts int(seconds * sample_rate)
        samples. Silent tones leave zeros. The sequence's timbre applies to
        each harmonic stack of a chord.

        Args:
            sequence: Sequence to render
            frames: Buffer length in samples

        Returns:
            Mono float64 buffer of length frames
        """
        sample_rate = self.settings.sample_rate
        coefficients: Tuple[float, ...] = sequence.timbre or ()
        buffer = np.zeros(frames, dtype=np.float64)

        position = 0
        for tone in sequence.tones:
            if position >= frames:
                break
            count = int(tone.duration_seconds * sample_rate)
            if not tone.is_silent:
                frequencies, weights = dsp.harmonic_weights(
                    tone.frequencies,
                    dsp.stack_coefficients(coefficients, len(tone.frequencies)),
                    self.amplitude)
                if len(frequencies):
                    dsp.synthesize_tone(buffer, position, count, frequencies, weights, sample_rate)
            position += count

        return buffer

    def render_samples(self, sequences: Optional[Iterable[Sequence]]) -> Optional[np.ndarray]:
        """
        Render sequences to a stereo float buffer.

        Args:
            sequences: Sequences to play simultaneously

        Returns:
            Array of shape (frames, 2), or None for None/empty input
        """
        if sequences is None:
            return None
        sequences = list(sequences)
        if not sequences:
            return None

        s = self.settings
        frames = self.frame_count(sequences)

        if len(sequences) == 1:
            stereo = dsp.stereo_from_mono(self.synthesize(sequences[0], frames))
            logger.debug("Rendered 1 sequence: %d frames, peak %.3f",
                         frames, dsp.peak_level(stereo))
            return stereo

        gain = dsp.sequence_gain(len(sequences),
                                 s.sequence_scaling_exponent,
                                 s.minimum_scaling_factor)
        pans = dsp.stereo_gains(len(sequences), s.minimal_shift, s.maximal_shift)
        stereo = np.zeros((frames, 2), dtype=np.float64)
        for sequence, (left_gain, right_gain) in zip(sequences, pans):
            mono = dsp.apply_gain(self.synthesize(sequence, frames), gain)
            stereo += dsp.pan_mono(mono, left_gain, right_gain)

        # Post-mix clip prevention
        peak = dsp.peak_level(stereo)
        stereo = dsp.normalize_peak(stereo, s.normalization_threshold, s.normalization_target_peak)
        logger.debug("Mixed %d sequences: %d frames, peak %.3f",
                     len(sequences), frames, peak)
        return stereo

    def render(self, sequences: Optional[Iterable[Sequence]]) -> Optional[bytes]:
        """
        Render sequences to WAV file bytes.

        Returns:
            Complete WAV file, or None for None/empty input
        """
        stereo = self.render_samples(sequences)
        if stereo is None:
            return None
        return encode_wav(stereo, self.settings.sample_rate)


__all__ = ['AudioRenderer', 'RenderSettings']
