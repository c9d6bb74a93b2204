"""Physical constants and drawing defaults for the Bragg diffraction model.

All lengths are in ångström.  The defaults reproduce a YBCO-like
orthorhombic cell and the geometry of the classroom demonstration, which was
laid out at 8 pixels per ångström.
"""
import math

# Orthorhombic lattice constants for YBCO (high-Tc superconductor) in Å
a_ybco = 3.82
b_ybco = 3.89
c_ybco = 7.8

# Default incident beam
THETA_DEFAULT = math.pi / 3
WAVELENGTH_DEFAULT = 8.0

# Default ray grid: two vertical rays show the path length difference well
HORIZONTAL_RAYS_DEFAULT = 0
VERTICAL_RAYS_DEFAULT = 2

# Half-size of the square window populated with lattice sites
VIEW_EXTENT = 20.0

# Pixels per ångström used by the original layout
SCALE_FACTOR = 8.0

# Length of the top incident ray (400 px)
TOP_RAY_LENGTH = 400 / SCALE_FACTOR

# Transverse amplitude of the drawn waves (10 px)
WAVE_AMPLITUDE = 10 / SCALE_FACTOR

# Gap kept between neighbouring wavefront markers (2 px)
WAVEFRONT_INSET = 2 / SCALE_FACTOR

# Offset of the d·sin(θ) dimension arrow from the shaded region (5 px)
LABEL_OFFSET = 5 / SCALE_FACTOR

# Sine polyline resolution
SAMPLES_PER_WAVELENGTH = 16

# Dash length of the ray baseline, in pixels
BASELINE_DASH = 8

# |PLD/λ - n| below this counts as constructive interference
IN_PHASE_TOLERANCE = 0.014

# Phase speed of the animation: ω = 2π·v/λ with v = 3 Å/s gives 18.85/λ
PROPAGATION_CONSTANT = 19.0

# Time advanced by a single press of the step button
MANUAL_STEP_DT = 0.04


def reciprocal_basis(a: float = a_ybco, b: float = b_ybco, c: float = c_ybco) -> tuple[float, float, float]:
    """Return the reciprocal lattice lengths ``(2π/a, 2π/b, 2π/c)``."""
    return 2 * math.pi / a, 2 * math.pi / b, 2 * math.pi / c


__all__ = [
    "a_ybco",
    "b_ybco",
    "c_ybco",
    "THETA_DEFAULT",
    "WAVELENGTH_DEFAULT",
    "HORIZONTAL_RAYS_DEFAULT",
    "VERTICAL_RAYS_DEFAULT",
    "VIEW_EXTENT",
    "SCALE_FACTOR",
    "TOP_RAY_LENGTH",
    "WAVE_AMPLITUDE",
    "WAVEFRONT_INSET",
    "LABEL_OFFSET",
    "SAMPLES_PER_WAVELENGTH",
    "BASELINE_DASH",
    "IN_PHASE_TOLERANCE",
    "PROPAGATION_CONSTANT",
    "MANUAL_STEP_DT",
    "reciprocal_basis",
]
