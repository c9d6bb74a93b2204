"""Basic 2-D geometry helpers shared by the lattice and ray builders.

Points are stored as ``numpy`` arrays of shape ``(2,)`` or ``(N, 2)``.  The
helpers build unit vectors along a ray and the transverse normal used to
displace waves and wavefront markers from the ray axis.
"""
import math
import numpy as np

__all__ = [
    "direction",
    "ray_frame",
    "as_point",
]


def as_point(p) -> np.ndarray:
    """Return ``p`` as a float array of shape ``(2,)``."""
    return np.asarray(p, dtype=float).reshape(2)


def direction(ang: float) -> np.ndarray:
    """Unit vector ``(cos ang, sin ang)``."""
    return np.array([math.cos(ang), math.sin(ang)])


def ray_frame(start: np.ndarray, end: np.ndarray) -> tuple[float, np.ndarray, np.ndarray]:
    """Length, unit direction and transverse normal of the ray ``start → end``.

    Parameters
    ----------
    start, end:
        Ray endpoints.

    Returns
    -------
    tuple
        ``(length, u, n)`` where ``u`` points from ``start`` to ``end`` and
        ``n = (u_y, -u_x)`` is ``u`` turned a quarter turn clockwise.  A
        zero-length ray gets ``u = (1, 0)``.
    """

    delta = as_point(end) - as_point(start)
    theta = math.atan2(delta[1], delta[0])
    u = direction(theta)
    n = np.array([u[1], -u[0]])
    return float(math.hypot(delta[0], delta[1])), u, n
