import math

import numpy as np
import pytest

from xrd_sim.errors import DivisionUndefined
from xrd_sim.waveform import WavefrontMode, sample_wave, segment_count, wavefront_color

START = np.array([0.0, 0.0])
END = np.array([30.0, 40.0])  # length 50 along (0.6, 0.8)


def test_sample_count_is_sixteen_per_wavelength():
    wave = sample_wave(START, END, 8.0, amplitude=1.0).wave
    assert wave.shape == (100, 2)


def test_sample_count_rounds_half_up():
    assert segment_count(2.5, 16.0) == 3
    assert len(sample_wave([0, 0], [2.5, 0], 16.0).wave) == 3


@pytest.mark.parametrize("phase", [0.0, 1.0, -2.5, math.pi])
def test_wave_ends_stay_within_amplitude(phase):
    amp = 1.25
    wave = sample_wave(START, END, 7.3, amplitude=amp, start_phase=phase).wave
    assert np.linalg.norm(wave[0] - START) <= amp + 1e-12
    assert np.linalg.norm(wave[-1] - END) <= amp + 1e-12


def test_first_sample_is_displaced_along_normal():
    wave = sample_wave(START, END, 8.0, amplitude=2.0).wave
    # normal is the direction turned clockwise: (0.8, -0.6)
    assert np.allclose(wave[0], [1.6, -1.2])


def test_samples_follow_cosine():
    amp, wavelength, phase = 1.5, 8.0, 0.3
    wave = sample_wave(START, END, wavelength, amplitude=amp, start_phase=phase).wave
    u = np.array([0.6, 0.8])
    n = np.array([0.8, -0.6])
    along = wave @ u
    across = wave @ n
    assert np.allclose(across, amp * np.cos(2 * np.pi / wavelength * along + phase))
    assert np.allclose(along, np.linspace(0.0, 50.0, len(wave)))


def test_baseline_spans_ray():
    sampled = sample_wave(START, END, 8.0)
    assert np.allclose(sampled.baseline, [START, END])


def test_wavefronts_one_per_wavelength():
    sampled = sample_wave(START, END, 8.0, wavefront_width=2.0, wavefront_mode="hue")
    markers = sampled.wavefronts
    # phase 0: fronts at 0, 8, ..., 48
    assert [m.index for m in markers] == list(range(7))
    centres = np.array([(m.start + m.end) / 2 for m in markers])
    assert np.allclose(np.linalg.norm(centres, axis=1), 8.0 * np.arange(7))
    for m in markers:
        assert np.isclose(np.linalg.norm(m.end - m.start), 2.0)
        assert np.isclose(np.dot(m.end - m.start, [0.6, 0.8]), 0.0)


def test_wavefronts_start_after_phase_offset():
    markers = sample_wave(START, END, 8.0, start_phase=math.pi, wavefront_width=1.0).wavefronts
    assert [m.index for m in markers] == [1, 2, 3, 4, 5, 6]
    first_centre = (markers[0].start + markers[0].end) / 2
    assert np.allclose(first_centre, [0.6 * 4.0, 0.8 * 4.0])


def test_negative_phase_colours_wrap():
    markers = sample_wave(START, END, 8.0, start_phase=-3 * math.pi,
                          wavefront_width=1.0, wavefront_mode=WavefrontMode.HUE).wavefronts
    assert [m.index for m in markers] == [-1, 0, 1, 2, 3, 4]
    assert markers[0].color == "hsl(300, 100%, 50%)"
    assert markers[1].color == "hsl(0, 100%, 50%)"


def test_colour_schemes():
    assert [wavefront_color(i, "grayscale") for i in range(-1, 4)] == [
        "hsl(0, 0%, 80%)",
        "hsl(0, 0%, 0%)",
        "hsl(0, 0%, 40%)",
        "hsl(0, 0%, 80%)",
        "hsl(0, 0%, 0%)",
    ]
    assert len({wavefront_color(i, WavefrontMode.HUE) for i in range(12)}) == 6
    with pytest.raises(ValueError):
        wavefront_color(0, WavefrontMode.NONE)


def test_no_wavefronts_when_disabled():
    assert sample_wave(START, END, 8.0).wavefronts == ()
    assert sample_wave(START, END, 8.0, wavefront_width=2.0, wavefront_mode="none").wavefronts == ()


def test_zero_wavelength_is_undefined():
    with pytest.raises(DivisionUndefined):
        sample_wave(START, END, 0.0)
