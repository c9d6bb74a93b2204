import math

import numpy as np
import pytest

from xrd_sim.constants import reciprocal_basis
from xrd_sim.errors import InvalidLatticeConstant
from xrd_sim.lattice import LatticeConstants, LatticeGeometry, generate_sites, top_row_spacing_half

CASES = [
    (3.82, 7.8, 0.0),
    (3.82, 7.8, 0.3),
    (5.0, 5.0, math.pi / 4),
    (2.0, 9.5, 1.2),
    (7.0, 3.0, math.pi / 2),
    (4.0, 6.0, -0.7),
]


def _nearest(points, targets):
    """Distance from each of ``points`` to the closest of ``targets``."""
    return np.linalg.norm(points[:, None, :] - targets[None, :, :], axis=2).min(axis=1)


@pytest.mark.parametrize("a, c, theta", CASES)
def test_sites_symmetric_under_inversion(a, c, theta):
    sites = generate_sites(LatticeConstants(a=a, c=c), theta).sites
    assert np.all(_nearest(sites, -sites) < 1e-9)


@pytest.mark.parametrize("a, c, theta", CASES)
def test_anchor_is_top_centre_site(a, c, theta):
    constants = LatticeConstants(a=a, c=c)
    result = generate_sites(constants, theta)
    anchor = result.anchor
    half = top_row_spacing_half(constants, theta)

    assert _nearest(anchor[None, :], result.sites)[0] < 1e-12
    assert anchor[1] >= 0.0
    assert abs(anchor[0]) <= half
    near_centre = result.sites[np.abs(result.sites[:, 0]) <= half]
    assert np.all(near_centre[:, 1] <= anchor[1] + 1e-9)


def test_site_count_follows_view_extent():
    result = generate_sites(LatticeConstants(a=3.82, c=7.8), 0.0)
    # floor(20/3.82) = 5 columns and floor(20/7.8) = 2 rows per quadrant
    assert len(result) == 4 * 6 * 3
    assert result.sites.shape == (72, 2)


def test_small_window_still_has_four_sites():
    result = generate_sites(LatticeConstants(a=15.0, c=15.0), 0.3, view_extent=10.0)
    assert len(result) == 4
    assert np.allclose(result.anchor, 0.0)


def test_zero_orientation_uses_a_spacing():
    constants = LatticeConstants(a=3.82, c=7.8)
    assert top_row_spacing_half(constants, 0.0) == pytest.approx(3.82 / 2)
    result = generate_sites(constants, 0.0)
    assert np.allclose(result.anchor, [0.0, 15.6])


def test_quarter_turn_uses_c_spacing():
    constants = LatticeConstants(a=3.82, c=7.8)
    assert top_row_spacing_half(constants, math.pi / 2) == pytest.approx(7.8 / 2)
    result = generate_sites(constants, math.pi / 2)
    assert np.allclose(result.anchor, [0.0, 5 * 3.82])


def test_row_spacing_switches_at_45_degrees():
    constants = LatticeConstants(a=2.0, c=6.0)
    below, above = math.pi / 4 - 1e-6, math.pi / 4 + 1e-6
    assert top_row_spacing_half(constants, below) == pytest.approx(2.0 * math.cos(below) / 2)
    assert top_row_spacing_half(constants, above) == pytest.approx(6.0 * math.sin(above) / 2)
    assert top_row_spacing_half(constants, math.pi - below) == pytest.approx(2.0 * math.cos(below) / 2)


def test_anchor_does_not_depend_on_mirror_orientation():
    constants = LatticeConstants(a=4.0, c=4.0)
    plus = generate_sites(constants, math.pi / 4).anchor
    minus = generate_sites(constants, -math.pi / 4).anchor
    expected = [0.0, 4.0 * 5 * math.sqrt(2)]
    assert np.allclose(plus, expected)
    assert np.allclose(minus, expected)


def test_orientation_is_periodic():
    constants = LatticeConstants(a=3.0, c=5.0)
    first = generate_sites(constants, 0.4)
    second = generate_sites(constants, 0.4 + 2 * math.pi)
    assert np.allclose(first.sites, second.sites)
    assert np.allclose(first.anchor, second.anchor)


@pytest.mark.parametrize("a, c", [(0.0, 7.8), (-1.0, 7.8), (3.82, 0.0), (3.82, float("nan"))])
def test_invalid_constants_rejected(a, c):
    with pytest.raises(InvalidLatticeConstant):
        LatticeConstants(a=a, c=c)


def test_geometry_regenerates_whole_site_set():
    geometry = LatticeGeometry()
    before = geometry.sites
    before_anchor = before.anchor.copy()

    after = geometry.set_constants(5.0, 5.0)
    assert after is not before
    assert np.allclose(before.anchor, before_anchor)
    assert np.allclose(after.anchor, [0.0, 20.0])
    assert geometry.constants.b == pytest.approx(3.89)

    geometry.set_orientation(math.pi / 2)
    assert np.allclose(geometry.anchor, [0.0, 20.0])

    geometry.reset()
    assert geometry.constants == LatticeConstants()
    assert np.allclose(geometry.anchor, before_anchor)


def test_sites_are_read_only():
    result = generate_sites(LatticeConstants(), 0.0)
    with pytest.raises(ValueError):
        result.sites[0, 0] = 1.0


def test_reciprocal_basis():
    assert np.allclose(reciprocal_basis(1.0, 2.0, 4.0), [2 * math.pi, math.pi, math.pi / 2])
