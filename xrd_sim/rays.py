"""Geometry of the light paths drawn over the crystal.

Rays live in the *view frame*: origin at the centre of the crystal, ``x`` to
the right and ``y`` pointing down.  A lattice site ``s`` is drawn at ``s``;
the first incident ray ends on the top-centre site, which sits at
``-anchor``.  Further rays are laid out on a grid: index ``i`` steps along the
surface by ``a`` and index ``j`` steps one plane ``c`` deeper.

Each grid cell yields an incident ray, the reflected ray leaving the crystal
at the mirror angle and, optionally, the transmitted ray continuing straight
through.  The reflected ray starts with the phase accumulated along the
incident path so that interference between rays of different depth can be
read off the drawing.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .constants import (
    LABEL_OFFSET,
    TOP_RAY_LENGTH,
    VIEW_EXTENT,
    WAVE_AMPLITUDE,
    WAVEFRONT_INSET,
)
from .bragg import compute_pld, compute_pld_in_wavelengths
from .errors import DivisionUndefined
from .geometry import as_point, direction
from .lattice import LatticeConstants, LatticeSites
from .waveform import WavefrontMode

__all__ = [
    "RaySegment",
    "RayPath",
    "PathDifferenceRegion",
    "InPhaseLabel",
    "RayScene",
    "clamp_ray_counts",
    "path_difference_region",
    "in_phase_label",
    "generate_rays",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class RaySegment:
    """One straight leg of a light path and the wave drawn on it."""

    start: np.ndarray
    end: np.ndarray
    wavelength: float
    amplitude: float
    start_phase: float
    wavefront_width: float = 0.0
    wavefront_mode: WavefrontMode = WavefrontMode.NONE
    kind: str = "incident"
    grid_index: tuple[int, int] = (0, 0)

    @property
    def length(self) -> float:
        return float(np.hypot(*(self.end - self.start)))


@dataclass(frozen=True, eq=False)
class RayPath:
    incident: RaySegment
    reflected: RaySegment
    transmitted: RaySegment | None = None

    def segments(self) -> tuple[RaySegment, ...]:
        if self.transmitted is None:
            return self.incident, self.reflected
        return self.incident, self.reflected, self.transmitted


@dataclass(frozen=True, eq=False)
class PathDifferenceRegion:
    """Shaded wedges showing the extra path ``2·d·sin θ`` of the deeper ray.

    Attributes
    ----------
    edge:
        ``(3, 2)`` polyline: normal to the incident ray, the anchor point,
        normal to the reflected ray.
    wedges:
        Two ``(4, 2)`` polygons, one on the incoming and one on the outgoing
        side, each ``d·sin θ`` long.
    arrow_start, arrow_end:
        Dimension arrow spanning ``d·sin θ``.
    label_position:
        Where the ``d sin(θ)`` caption is placed.
    """

    edge: np.ndarray
    wedges: tuple[np.ndarray, np.ndarray]
    arrow_start: np.ndarray
    arrow_end: np.ndarray
    label_position: np.ndarray


@dataclass(frozen=True, eq=False)
class InPhaseLabel:
    position: np.ndarray
    rotation: float
    wavelengths: int


@dataclass(frozen=True, eq=False)
class RayScene:
    """Everything :func:`generate_rays` computes for one frame."""

    paths: tuple[RayPath, ...]
    horizontal_count: int
    vertical_count: int
    path_difference: PathDifferenceRegion | None = None
    in_phase_label: InPhaseLabel | None = None

    def segments(self) -> list[RaySegment]:
        return [seg for path in self.paths for seg in path.segments()]

    def __len__(self) -> int:
        return sum(len(path.segments()) for path in self.paths)


def clamp_ray_counts(constants: LatticeConstants, horizontal: float, vertical: float,
                     view_extent: float = VIEW_EXTENT) -> tuple[int, int]:
    """Limit the ray grid to the populated part of the lattice.

    ``H = floor(min(horizontal, extent/a))`` and
    ``V = floor(min(vertical, 1 + 2·floor(extent/c)))``; negative requests
    give zero.
    """
    h = math.floor(min(horizontal, view_extent / constants.a))
    v = math.floor(min(vertical, 1 + 2 * math.floor(view_extent / constants.c)))
    return max(int(h), 0), max(int(v), 0)


def path_difference_region(first_end: np.ndarray, c: float, angle: float,
                           amplitude: float = WAVE_AMPLITUDE) -> PathDifferenceRegion:
    """Shaded region and dimension arrow anchored at the first ray's end point."""
    sin_t, cos_t = math.sin(angle), math.cos(angle)
    d_sin = c * sin_t
    reach = amplitude + c * cos_t

    line_in = first_end + np.array([-reach * sin_t, reach * cos_t])
    line_out = first_end + np.array([reach * sin_t, reach * cos_t])

    along_in = np.array([d_sin * cos_t, d_sin * sin_t])
    along_out = np.array([-d_sin * cos_t, d_sin * sin_t])
    wedge_in = np.cumsum([
        line_in,
        along_in,
        [2 * amplitude * sin_t, -2 * amplitude * cos_t],
        -along_in,
    ], axis=0)
    wedge_out = np.cumsum([
        line_out,
        along_out,
        [-2 * amplitude * sin_t, -2 * amplitude * cos_t],
        -along_out,
    ], axis=0)

    arrow_reach = LABEL_OFFSET + reach
    arrow_start = first_end + np.array([arrow_reach * sin_t, arrow_reach * cos_t])
    arrow_end = arrow_start + along_out
    label = arrow_start + np.array([LABEL_OFFSET * sin_t - d_sin * cos_t / 2,
                                    LABEL_OFFSET * cos_t + d_sin * sin_t / 2])
    return PathDifferenceRegion(
        edge=np.vstack([line_in, first_end, line_out]),
        wedges=(wedge_in, wedge_out),
        arrow_start=arrow_start,
        arrow_end=arrow_end,
        label_position=label,
    )


def in_phase_label(first_end: np.ndarray, c: float, angle: float, wavelengths: int,
                   wavefronts_shown: bool, amplitude: float = WAVE_AMPLITUDE,
                   top_ray_length: float = TOP_RAY_LENGTH) -> InPhaseLabel:
    """Caption placed above the middle of the top reflected ray."""
    sin_t, cos_t = math.sin(angle), math.cos(angle)
    centre = first_end + 0.5 * top_ray_length * np.array([cos_t, -sin_t])
    if wavefronts_shown:
        lift = 0.5 * c * cos_t + amplitude
    else:
        lift = 2.2 * amplitude
    centre = centre - lift * np.array([sin_t, cos_t])
    return InPhaseLabel(position=centre, rotation=-angle, wavelengths=wavelengths)


def generate_rays(
    sites: LatticeSites,
    constants: LatticeConstants,
    angle: float,
    wavelength: float,
    horizontal_count: float,
    vertical_count: float,
    start_phase: float = 0.0,
    show_transmitted: bool = False,
    show_path_difference: bool = False,
    wavefront_mode: WavefrontMode | str = WavefrontMode.NONE,
    in_phase: bool = False,
    pld_in_wavelengths: float | None = None,
    amplitude: float = WAVE_AMPLITUDE,
    top_ray_length: float = TOP_RAY_LENGTH,
    view_extent: float = VIEW_EXTENT,
) -> RayScene:
    """Build the incident, reflected and transmitted rays for one frame.

    Parameters
    ----------
    sites:
        Current lattice; only the anchor is used.
    constants:
        Lattice constants ``a`` (ray spacing along the surface) and ``c``
        (plane spacing).
    angle, wavelength:
        Incident glancing angle in radians and wavelength in Å.
    horizontal_count, vertical_count:
        Requested ray grid, clamped by :func:`clamp_ray_counts`.
    start_phase:
        Phase of the incident wave at its start point.
    show_transmitted, show_path_difference:
        Add transmitted rays / the PLD region.
    wavefront_mode:
        Marker colouring; ``NONE`` sets every ``wavefront_width`` to zero.
    in_phase, pld_in_wavelengths:
        Bragg condition of the current parameters; when in phase an
        :class:`InPhaseLabel` is attached.  Without ``pld_in_wavelengths``
        the order is worked out from ``2c·sin(angle)/wavelength``.

    Returns
    -------
    :class:`RayScene`
        A new scene holding ``(2H+1)·V`` ray paths.

    Raises
    ------
    DivisionUndefined
        If ``wavelength`` is zero.
    """

    if wavelength == 0:
        raise DivisionUndefined("ray phases are undefined for a zero wavelength")
    mode = WavefrontMode(wavefront_mode)
    a, c = constants.a, constants.c
    sin_t, cos_t = math.sin(angle), math.cos(angle)
    u = direction(angle)

    h_count, v_count = clamp_ray_counts(constants, horizontal_count, vertical_count, view_extent)
    ray_separation = c * cos_t
    front_width = 0.0 if mode is WavefrontMode.NONE else max(amplitude, ray_separation - WAVEFRONT_INSET)

    first_end = -as_point(sites.anchor)
    first_start = first_end - top_ray_length * u

    paths = []
    for i in range(-h_count, h_count + 1):
        for j in range(v_count):
            shift = np.array([i * a, -j * c])
            distance = i * a * sin_t + j * c * cos_t
            start = first_start + distance * np.array([-sin_t, cos_t])
            end = first_end - shift
            incident_length = float(np.hypot(*(end - start)))
            exit_phase = incident_length / wavelength * 2 * math.pi + start_phase

            extra = 2 * cos_t * i * a
            exit_end = np.array([2 * end[0] - start[0] + extra * cos_t,
                                 start[1] - extra * sin_t])

            common = dict(wavelength=wavelength, amplitude=amplitude,
                          wavefront_width=front_width, wavefront_mode=mode,
                          grid_index=(i, j))
            incident = RaySegment(start, end, start_phase=start_phase, kind="incident", **common)
            reflected = RaySegment(end, exit_end, start_phase=exit_phase, kind="reflected", **common)
            transmitted = None
            if show_transmitted:
                # a longer incident leg leaves a shorter transmitted one
                through = end + (2 * top_ray_length - incident_length) * u
                transmitted = RaySegment(end, through, start_phase=exit_phase,
                                         kind="transmitted", **common)
            paths.append(RayPath(incident, reflected, transmitted))

    region = path_difference_region(first_end, c, angle, amplitude) if show_path_difference else None
    label = None
    if in_phase:
        if pld_in_wavelengths is None:
            pld_in_wavelengths = compute_pld_in_wavelengths(compute_pld(c, angle), wavelength)
        order = int(round(pld_in_wavelengths))
        label = in_phase_label(first_end, c, angle, order, mode is not WavefrontMode.NONE,
                               amplitude, top_ray_length)

    log.debug("built %d ray paths (H=%d, V=%d)", len(paths), h_count, v_count)
    return RayScene(tuple(paths), h_count, v_count, region, label)
