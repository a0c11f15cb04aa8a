"""
DSP utilities and building blocks.

Amplitude compensation, mix gains, stereo placement, peak normalization
and the sine synthesis kernel.
"""
import math
from typing import List, Sequence as SequenceType, Tuple

import numpy as np
from numba import jit


def amplitude_for_frequency(frequency: float,
                            base_amplitude: float = 0.3,
                            reference_frequency: float = 880.0,
                            amplification_factor: float = 2.0,
                            max_amplification: float = 3.0) -> float:
    """
    Loudness compensation for low frequencies.

    Tones at or above the reference frequency play at base_amplitude; each
    factor-fold step below it adds one unit of gain, capped at
    max_amplification.

    Args:
        frequency: Frequency in Hz (must be positive)
        base_amplitude: Amplitude at and above the reference frequency
        reference_frequency: Frequency where compensation starts
        amplification_factor: Frequency ratio per unit of extra gain
        max_amplification: Gain cap

    Returns:
        Amplitude multiplier

    Example:
        >>> amplitude_for_frequency(440.0)
        0.6
        >>> amplitude_for_frequency(1760.0)
        0.3
    """
    if frequency <= 0:
        raise ValueError(f"Frequency must be positive, got {frequency}")
    multiplier = 1.0 + math.log(reference_frequency / frequency) / math.log(amplification_factor)
    multiplier = max(1.0, min(multiplier, max_amplification))
    return base_amplitude * multiplier


def sequence_gain(sequence_count: int,
                  exponent: float = 0.7,
                  minimum: float = 0.1) -> float:
    """
    Per-sequence gain when mixing several sequences.

    Args:
        sequence_count: Number of mixed sequences
        exponent: Scaling exponent p in 1 / N^p
        minimum: Lower bound of the gain

    Returns:
        1.0 for a single sequence, otherwise max(1 / N^p, minimum)
    """
    if sequence_count <= 1:
        return 1.0
    return max(1.0 / sequence_count ** exponent, minimum)


def stereo_gains(sequence_count: int,
                 minimal_shift: float = 0.2,
                 maximal_shift: float = 0.9) -> List[Tuple[float, float]]:
    """
    Spread sequences across the stereo field, left to right.

    Two sequences are panned to opposite sides. Three or more are placed
    symmetrically around the centre, adjacent sequences minimal_shift apart,
    the step shrinking so the outermost offset never exceeds maximal_shift.

    Args:
        sequence_count: Number of sequences
        minimal_shift: Step between adjacent sequences
        maximal_shift: Upper bound of step * (N - 1)

    Returns:
        (left_gain, right_gain) per sequence
    """
    if sequence_count <= 0:
        return []
    if sequence_count == 1:
        return [(1.0, 1.0)]

    shift = minimal_shift
    if shift * (sequence_count - 1) > maximal_shift:
        shift = maximal_shift / (sequence_count - 1)

    if sequence_count == 2:
        return [(1.0, 1.0 - shift), (1.0 - shift, 1.0)]

    center = (sequence_count - 1) / 2.0
    gains = []
    for index in range(sequence_count):
        offset = (index - center) * shift
        # Positive offset moves right (quieter left), negative moves left
        gains.append((1.0 - max(0.0, offset), 1.0 + min(0.0, offset)))
    return gains


@jit(nopython=True)
def synthesize_tone(buffer: np.ndarray,
                    start: int,
                    count: int,
                    frequencies: np.ndarray,
                    weights: np.ndarray,
                    sample_rate: int) -> None:
    """
    Write a sum of sines into buffer[start:start + count] (JIT-compiled).

    Time restarts at zero for every tone. Samples past the end of the
    buffer are dropped.

    Args:
        buffer: Mono float64 buffer, modified in place
        start: First sample index
        count: Number of samples
        frequencies: Harmonic frequencies in Hz
        weights: Amplitude per harmonic
        sample_rate: Audio sample rate
    """
    end = min(start + count, len(buffer))
    for i in range(start, end):
        t = (i - start) / sample_rate
        total = 0.0
        for k in range(len(frequencies)):
            total += weights[k] * np.sin(2.0 * np.pi * frequencies[k] * t)
        buffer[i] = total


def peak_level(buffer: np.ndarray) -> float:
    """
    Calculate peak level of audio buffer.

    Args:
        buffer: Audio buffer

    Returns:
        Peak level (0.0-1.0+)
    """
    if buffer.size == 0:
        return 0.0
    return float(np.max(np.abs(buffer)))


def apply_gain(buffer: np.ndarray, gain: float) -> np.ndarray:
    """Apply gain to audio buffer."""
    return buffer * gain


def normalize_peak(buffer: np.ndarray,
                   threshold: float = 0.95,
                   target_peak: float = 0.9) -> np.ndarray:
    """
    Scale a buffer down when its peak exceeds threshold.

    Quiet buffers are returned unchanged (never scaled up).

    Args:
        buffer: Audio buffer (any shape)
        threshold: Peak above which normalization applies
        target_peak: Peak after normalization

    Returns:
        Normalized buffer
    """
    peak = peak_level(buffer)
    if peak <= threshold:
        return buffer
    return apply_gain(buffer, target_peak / peak)


def stereo_from_mono(buffer_mono: np.ndarray) -> np.ndarray:
    """
    Convert mono buffer to stereo by duplicating channels.

    Args:
        buffer_mono: Mono audio buffer (1D array)

    Returns:
        Stereo audio buffer (frames x 2)
    """
    return np.stack([buffer_mono, buffer_mono], axis=-1)


def pan_mono(buffer_mono: np.ndarray, left_gain: float, right_gain: float) -> np.ndarray:
    """Place a mono buffer in the stereo field with fixed channel gains."""
    return np.stack([buffer_mono * left_gain, buffer_mono * right_gain], axis=-1)


def clip_audio(buffer: np.ndarray, threshold: float = 1.0) -> np.ndarray:
    """
    Hard clip audio to prevent overflow.

    Args:
        buffer: Audio buffer
        threshold: Clipping threshold

    Returns:
        Clipped audio
    """
    return np.clip(buffer, -threshold, threshold)


def stack_coefficients(coefficients: SequenceType[float],
                       harmonic_count: int) -> Tuple[float, ...]:
    """Repeat a timbre vector once per harmonic stack of a chord."""
    if not coefficients:
        return ()
    stacks = -(-harmonic_count // len(coefficients))
    return tuple(coefficients) * stacks


def harmonic_weights(frequencies: SequenceType[float],
                     coefficients: SequenceType[float],
                     amplitude_of) -> Tuple[np.ndarray, np.ndarray]:
    """
    Select the audible harmonics of a tone and their amplitudes.

    Harmonics with a non-positive frequency or coefficient are dropped; a
    harmonic without a coefficient gets 1.0.

    Args:
        frequencies: Harmonic frequencies
        coefficients: Per-harmonic gains (may be shorter or empty)
        amplitude_of: Callable mapping a frequency to its amplitude

    Returns:
        (frequencies, weights) as float64 arrays
    """
    kept_frequencies = []
    weights = []
    for index, frequency in enumerate(frequencies):
        if frequency <= 0:
            continue
        coefficient = coefficients[index] if index < len(coefficients) else 1.0
        if coefficient <= 0:
            continue
        kept_frequencies.append(frequency)
        weights.append(amplitude_of(frequency) * coefficient)
    return (np.array(kept_frequencies, dtype=np.float64),
            np.array(weights, dtype=np.float64))
