"""Orthorhombic lattice sites seen in the cross-section of the crystal.

The crystal is modelled as a rectangular grid of scattering centres with
in-plane repeat ``a`` and interplane spacing ``c``, rotated by the
orientation angle.  Only one quadrant of grid indices is visited; the other
three follow from the mirror symmetry of the rectangle.

Besides the full site set, :func:`generate_sites` reports the *anchor*: the
top-centre site that fixes where the first incident ray hits the crystal.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numba import njit

from .constants import a_ybco, b_ybco, c_ybco, VIEW_EXTENT
from .errors import InvalidLatticeConstant

__all__ = [
    "LatticeConstants",
    "LatticeSites",
    "LatticeGeometry",
    "generate_sites",
    "top_row_spacing_half",
]

log = logging.getLogger(__name__)

# Sites whose coordinates agree to this precision are treated as tied
_TIE_TOL = 1e-9

# |cos θ| above 1/√2 means the a-axis rows face the beam
_ROW_SWITCH = math.sqrt(0.5)


def _check_constant(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidLatticeConstant(f"lattice constant {name} must be positive, got {value!r}")
    return value


@dataclass(frozen=True)
class LatticeConstants:
    """Lattice constants ``(a, b, c)`` in ångström.

    ``a`` is the in-plane repeat and ``c`` the interplane spacing ``d``.  ``b``
    is carried for completeness but plays no part in the 2-D model.
    """

    a: float = a_ybco
    b: float = b_ybco
    c: float = c_ybco

    def __post_init__(self) -> None:
        for name in ("a", "b", "c"):
            object.__setattr__(self, name, _check_constant(name, getattr(self, name)))

    def with_ac(self, a: float, c: float) -> "LatticeConstants":
        """Copy with new in-plane and interplane constants."""
        return LatticeConstants(a, self.b, c)


@dataclass(frozen=True, eq=False)
class LatticeSites:
    """Result of :func:`generate_sites`.

    Attributes
    ----------
    anchor:
        ``(2,)`` top-centre site with ``y >= 0``.
    sites:
        ``(N, 2)`` array of every generated site, symmetric under ``p → -p``.
        Sites on the grid axes appear more than once.
    """

    anchor: np.ndarray
    sites: np.ndarray = field(repr=False)

    def __len__(self) -> int:
        return len(self.sites)


@njit
def _lattice_points(a, c, cos_t, sin_t, nx, ny):
    """Rotated ``(±x·a, ±y·c)`` grid points for ``0 <= x <= nx, 0 <= y <= ny``."""
    out = np.empty((4 * (nx + 1) * (ny + 1), 2))
    k = 0
    for x in range(nx + 1):
        x_cos = x * a * cos_t
        x_sin = x * a * sin_t
        for y in range(ny + 1):
            y_cos = y * c * cos_t
            y_sin = y * c * sin_t
            out[k, 0] = x_cos - y_sin
            out[k, 1] = x_sin + y_cos
            out[k + 1, 0] = -x_cos - y_sin
            out[k + 1, 1] = -x_sin + y_cos
            out[k + 2, 0] = -x_cos + y_sin
            out[k + 2, 1] = -x_sin - y_cos
            out[k + 3, 0] = x_cos + y_sin
            out[k + 3, 1] = x_sin - y_cos
            k += 4
    return out


def top_row_spacing_half(constants: LatticeConstants, orientation: float) -> float:
    """Half the spacing of sites along the row that faces the beam."""
    cos_t = math.cos(orientation)
    if abs(cos_t) > _ROW_SWITCH:
        return constants.a * abs(cos_t) / 2
    return constants.c * abs(math.sin(orientation)) / 2


def _select_anchor(points: np.ndarray, half_spacing: float) -> np.ndarray:
    mask = (np.abs(points[:, 0]) <= half_spacing) & (points[:, 1] >= 0.0)
    cand = points[mask]
    top = cand[cand[:, 1] >= cand[:, 1].max() - _TIE_TOL]
    ax = np.abs(top[:, 0])
    centred = top[ax <= ax.min() + _TIE_TOL]
    return centred[np.argmax(centred[:, 0])].copy()


def generate_sites(
    constants: LatticeConstants,
    orientation: float = 0.0,
    view_extent: float = VIEW_EXTENT,
) -> LatticeSites:
    """Return the lattice sites inside the viewing window.

    Parameters
    ----------
    constants:
        Lattice constants; ``a`` and ``c`` set the grid.
    orientation:
        Rotation of the crystal relative to the beam frame in radians.
    view_extent:
        Half-size of the window.  ``floor(view_extent / a)`` columns and
        ``floor(view_extent / c)`` rows are generated on each side of the
        origin.

    Returns
    -------
    :class:`LatticeSites`
        New site set; nothing is shared with earlier results.
    """

    a = _check_constant("a", constants.a)
    c = _check_constant("c", constants.c)
    orientation = math.fmod(float(orientation), 2 * math.pi)
    nx = int(math.floor(view_extent / a))
    ny = int(math.floor(view_extent / c))

    points = _lattice_points(a, c, math.cos(orientation), math.sin(orientation), max(nx, 0), max(ny, 0))
    anchor = _select_anchor(points, top_row_spacing_half(constants, orientation))
    log.debug("generated %d lattice sites (a=%g, c=%g, θ=%g), anchor=%s",
              len(points), a, c, orientation, anchor)
    points.setflags(write=False)
    anchor.setflags(write=False)
    return LatticeSites(anchor=anchor, sites=points)


class LatticeGeometry:
    """Crystal sample owning the current lattice constants, orientation and sites.

    Any change to the constants or the orientation regenerates the whole
    :class:`LatticeSites` object.
    """

    def __init__(self, constants: LatticeConstants | None = None, orientation: float = 0.0,
                 view_extent: float = VIEW_EXTENT) -> None:
        self._initial = (constants or LatticeConstants(), float(orientation))
        self.view_extent = view_extent
        self.constants, self.orientation = self._initial
        self._regenerate()

    def _regenerate(self) -> None:
        self._sites = generate_sites(self.constants, self.orientation, self.view_extent)

    @property
    def sites(self) -> LatticeSites:
        return self._sites

    @property
    def anchor(self) -> np.ndarray:
        return self._sites.anchor

    def set_constants(self, a: float, c: float) -> LatticeSites:
        self.constants = self.constants.with_ac(a, c)
        self._regenerate()
        return self._sites

    def set_orientation(self, orientation: float) -> LatticeSites:
        self.orientation = float(orientation)
        self._regenerate()
        return self._sites

    def reset(self) -> None:
        """Restore the constants and orientation given at construction."""
        self.constants, self.orientation = self._initial
        self._regenerate()
