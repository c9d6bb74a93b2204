"""Path length difference and the Bragg condition.

Two rays reflecting from neighbouring planes a distance ``d`` apart differ in
path length by ``2·d·sin θ``.  When that difference is a whole number of
wavelengths the reflected waves are in phase and interfere constructively.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import IN_PHASE_TOLERANCE, THETA_DEFAULT, WAVELENGTH_DEFAULT
from .errors import DivisionUndefined

__all__ = [
    "SourceParameters",
    "PLDState",
    "compute_pld",
    "compute_pld_in_wavelengths",
    "is_in_phase",
    "pld_state",
    "bragg_wavelength",
]


@dataclass(frozen=True)
class SourceParameters:
    """Incident angle (radians) and wavelength (Å) of the X-ray source."""

    angle: float = THETA_DEFAULT
    wavelength: float = WAVELENGTH_DEFAULT


@dataclass(frozen=True)
class PLDState:
    """Diagnostics derived from the lattice spacing and the source."""

    pld: float
    pld_in_wavelengths: float
    in_phase: bool

    @property
    def order(self) -> int:
        """Nearest whole number of wavelengths."""
        return int(round(self.pld_in_wavelengths))


def compute_pld(c: float, angle: float) -> float:
    """Return the path length difference ``2·c·sin(angle)``."""
    return 2 * c * math.sin(angle)


def compute_pld_in_wavelengths(pld: float, wavelength: float) -> float:
    """Return ``pld / wavelength``.

    Raises
    ------
    DivisionUndefined
        If ``wavelength`` is zero.
    """
    if wavelength == 0:
        raise DivisionUndefined("path length difference is undefined for a zero wavelength")
    return pld / wavelength


def is_in_phase(value: float, tolerance: float = IN_PHASE_TOLERANCE) -> bool:
    """True when ``value`` lies within ``tolerance`` of an integer."""
    return abs(value - round(value)) < tolerance


def pld_state(c: float, source: SourceParameters, tolerance: float = IN_PHASE_TOLERANCE) -> PLDState:
    """Bundle the PLD, PLD/λ and the in-phase flag for interplane spacing ``c``."""
    pld = compute_pld(c, source.angle)
    ratio = compute_pld_in_wavelengths(pld, source.wavelength)
    return PLDState(pld, ratio, is_in_phase(ratio, tolerance))


def bragg_wavelength(c: float, angle: float, order: int = 1) -> float:
    """Wavelength satisfying ``n·λ = 2·c·sin(angle)`` for ``n = order``."""
    if order < 1:
        raise ValueError(f"diffraction order must be >= 1, got {order}")
    return compute_pld(c, angle) / order
