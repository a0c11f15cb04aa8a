"""
Unit tests for DSP helpers.
"""
import numpy as np
import pytest

from audio import dsp


class TestAmplitude:
    """Tests for low-frequency amplitude compensation."""

    def test_reference_and_above(self):
        assert dsp.amplitude_for_frequency(880.0) == pytest.approx(0.3)
        assert dsp.amplitude_for_frequency(5000.0) == pytest.approx(0.3)

    def test_one_octave_below(self):
        assert dsp.amplitude_for_frequency(440.0) == pytest.approx(0.6)

    def test_capped(self):
        assert dsp.amplitude_for_frequency(220.0) == pytest.approx(0.9)
        assert dsp.amplitude_for_frequency(20.0) == pytest.approx(0.9)

    def test_custom_parameters(self):
        amplitude = dsp.amplitude_for_frequency(
            100.0, base_amplitude=0.5, reference_frequency=400.0,
            amplification_factor=4.0, max_amplification=5.0)
        assert amplitude == pytest.approx(1.0)

    def test_non_positive_frequency(self):
        with pytest.raises(ValueError):
            dsp.amplitude_for_frequency(0.0)


class TestSequenceGain:
    """Tests for the mix attenuation."""

    def test_single(self):
        assert dsp.sequence_gain(1) == 1.0

    def test_power_law(self):
        assert dsp.sequence_gain(2) == pytest.approx(2 ** -0.7)
        assert dsp.sequence_gain(10) == pytest.approx(10 ** -0.7)

    def test_floor(self):
        assert dsp.sequence_gain(1000) == 0.1


class TestStereoGains:
    """Tests for stereo placement."""

    def test_single_centered(self):
        assert dsp.stereo_gains(1) == [(1.0, 1.0)]

    def test_two_opposite_sides(self):
        left, right = dsp.stereo_gains(2)
        assert left == pytest.approx((1.0, 0.8))
        assert right == pytest.approx((0.8, 1.0))

    def test_three_symmetric(self):
        gains = dsp.stereo_gains(3)
        assert gains[0] == pytest.approx((1.0, 0.8))
        assert gains[1] == pytest.approx((1.0, 1.0))
        assert gains[2] == pytest.approx((0.8, 1.0))

    def test_many_clamped(self):
        # 0.2 * 9 > 0.9, so the step shrinks to 0.1
        gains = dsp.stereo_gains(10)
        assert gains[0] == pytest.approx((1.0, 0.55))
        assert gains[-1] == pytest.approx((0.55, 1.0))
        assert all(0.0 <= g <= 1.0 for pair in gains for g in pair)

    def test_zero(self):
        assert dsp.stereo_gains(0) == []


class TestBufferHelpers:
    """Tests for buffer helpers and the synthesis kernel."""

    def test_peak_level(self):
        assert dsp.peak_level(np.array([0.1, -0.7, 0.3])) == pytest.approx(0.7)
        assert dsp.peak_level(np.array([])) == 0.0

    def test_normalize_noop_below_threshold(self):
        buffer = np.array([0.5, -0.95])
        assert dsp.normalize_peak(buffer) is buffer

    def test_normalize_scales_to_target(self):
        buffer = np.array([[0.5, -1.5], [1.0, 0.2]])
        result = dsp.normalize_peak(buffer)
        assert dsp.peak_level(result) == pytest.approx(0.9)
        assert result[0, 0] == pytest.approx(0.3)

    def test_clip_audio(self):
        np.testing.assert_array_equal(dsp.clip_audio(np.array([2.0, -3.0, 0.5])), [1.0, -1.0, 0.5])

    def test_stereo_from_mono(self):
        stereo = dsp.stereo_from_mono(np.array([0.1, 0.2]))
        assert stereo.shape == (2, 2)
        np.testing.assert_array_equal(stereo[:, 0], stereo[:, 1])

    def test_pan_mono(self):
        stereo = dsp.pan_mono(np.array([1.0, -1.0]), 1.0, 0.5)
        np.testing.assert_allclose(stereo, [[1.0, 0.5], [-1.0, -0.5]])

    def test_synthesize_tone(self):
        buffer = np.zeros(200)
        dsp.synthesize_tone(buffer, 100, 100, np.array([441.0]), np.array([0.5]), 44100)
        assert np.all(buffer[:100] == 0.0)
        t = np.arange(100) / 44100
        np.testing.assert_allclose(buffer[100:], 0.5 * np.sin(2 * np.pi * 441.0 * t), atol=1e-12)

    def test_synthesize_tone_truncates_at_buffer_end(self):
        buffer = np.zeros(50)
        dsp.synthesize_tone(buffer, 40, 100, np.array([1000.0, 2000.0]), np.array([0.2, 0.1]), 44100)
        assert buffer[40] == 0.0
        assert np.any(buffer[41:] != 0.0)

    def test_stack_coefficients(self):
        assert dsp.stack_coefficients((1.0, 0.5), 4) == (1.0, 0.5, 1.0, 0.5)
        assert dsp.stack_coefficients((1.0, 0.5), 2) == (1.0, 0.5)
        assert dsp.stack_coefficients((), 3) == ()

    def test_harmonic_weights_skip_rules(self):
        frequencies, weights = dsp.harmonic_weights(
            (880.0, 1760.0, 2640.0, 0.0), (1.0, 0.0), lambda f: 0.3)
        # 1760 has coefficient 0, 2640 defaults to 1.0, 0 Hz is silent
        np.testing.assert_array_equal(frequencies, [880.0, 2640.0])
        np.testing.assert_allclose(weights, [0.3, 0.3])
