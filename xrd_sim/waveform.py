"""Sampling of a light path into drawable point sequences.

A ray is drawn as a dashed baseline with a cosine wave riding on it.  The
wave is sampled at a fixed resolution per wavelength, and optional wavefront
markers (short cross-ticks one wavelength apart) are coloured by a cyclic
scheme so that individual wavefronts can be followed between rays.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np
from numba import njit

from .constants import SAMPLES_PER_WAVELENGTH, WAVE_AMPLITUDE
from .errors import DivisionUndefined
from .geometry import as_point, ray_frame

__all__ = [
    "WavefrontMode",
    "WavefrontMarker",
    "SampledWave",
    "wavefront_color",
    "segment_count",
    "sample_wave",
    "sample_ray",
]


class WavefrontMode(str, enum.Enum):
    """Colouring of wavefront markers; ``NONE`` hides them."""

    NONE = "none"
    GRAYSCALE = "grayscale"
    HUE = "hue"


def wavefront_color(index: int, mode: WavefrontMode | str) -> str:
    """CSS colour of wavefront number ``index``.

    ``GRAYSCALE`` cycles through three lightness levels (0, 40, 80 %),
    ``HUE`` through six hues 60° apart.  Negative indices wrap the same way.
    """
    mode = WavefrontMode(mode)
    if mode is WavefrontMode.GRAYSCALE:
        return f"hsl(0, 0%, {40 * (index % 3)}%)"
    if mode is WavefrontMode.HUE:
        return f"hsl({60 * index % 360}, 100%, 50%)"
    raise ValueError("wavefront markers are disabled for WavefrontMode.NONE")


@dataclass(frozen=True, eq=False)
class WavefrontMarker:
    index: int
    start: np.ndarray
    end: np.ndarray
    color: str


@dataclass(frozen=True, eq=False)
class SampledWave:
    """Drawable pieces of one ray.

    Attributes
    ----------
    baseline:
        ``(2, 2)`` dashed centre line from start to end.
    wave:
        ``(segments, 2)`` sine polyline.
    wavefronts:
        Markers in order of propagation.
    """

    baseline: np.ndarray
    wave: np.ndarray
    wavefronts: tuple[WavefrontMarker, ...] = ()


@njit
def _sine_polyline(x0, y0, ux, uy, nx, ny, length, segments, wave_number, amplitude, phase):
    out = np.empty((segments, 2))
    step = length / (segments - 1) if segments > 1 else 0.0
    for k in range(segments):
        cur = k * step
        off = amplitude * math.cos(wave_number * cur + phase)
        out[k, 0] = x0 + cur * ux + off * nx
        out[k, 1] = y0 + cur * uy + off * ny
    return out


def segment_count(length: float, wavelength: float) -> int:
    """Number of wave samples for a ray of ``length`` (rounded half away from zero)."""
    if wavelength == 0:
        raise DivisionUndefined("cannot sample a wave with zero wavelength")
    return int(math.floor(length / wavelength * SAMPLES_PER_WAVELENGTH + 0.5))


def sample_wave(
    start,
    end,
    wavelength: float,
    amplitude: float = WAVE_AMPLITUDE,
    start_phase: float = 0.0,
    wavefront_width: float = 0.0,
    wavefront_mode: WavefrontMode | str = WavefrontMode.HUE,
) -> SampledWave:
    """Sample the wave travelling from ``start`` to ``end``.

    Parameters
    ----------
    start, end:
        Ray endpoints.
    wavelength:
        Wavelength in the same units as the endpoints.
    amplitude:
        Transverse amplitude of the drawn wave.
    start_phase:
        Phase at ``start``; the wave is ``amplitude·cos(2π/λ·s + start_phase)``
        at distance ``s`` along the ray.
    wavefront_width:
        Length of the wavefront markers; ``0`` draws none.
    wavefront_mode:
        Colour scheme of the markers.

    Returns
    -------
    :class:`SampledWave`
    """

    start = as_point(start)
    end = as_point(end)
    length, u, n = ray_frame(start, end)
    segments = segment_count(length, wavelength)
    wave = _sine_polyline(start[0], start[1], u[0], u[1], n[0], n[1],
                          length, segments, 2 * math.pi / wavelength,
                          float(amplitude), float(start_phase))

    markers = []
    mode = WavefrontMode(wavefront_mode)
    if wavefront_width > 0 and mode is not WavefrontMode.NONE:
        first = start_phase / (2 * math.pi)
        half = 0.5 * wavefront_width * n
        for i in range(math.ceil(first), math.ceil(first + length / wavelength)):
            centre = start + (i - first) * wavelength * u
            markers.append(WavefrontMarker(i, centre + half, centre - half, wavefront_color(i, mode)))

    return SampledWave(baseline=np.vstack([start, end]), wave=wave, wavefronts=tuple(markers))


def sample_ray(segment) -> SampledWave:
    """:func:`sample_wave` for a :class:`~xrd_sim.rays.RaySegment`."""
    return sample_wave(
        segment.start,
        segment.end,
        segment.wavelength,
        segment.amplitude,
        segment.start_phase,
        segment.wavefront_width,
        segment.wavefront_mode,
    )
