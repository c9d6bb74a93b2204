import math

import numpy as np
import pytest

from xrd_sim.bragg import (
    PLDState,
    SourceParameters,
    bragg_wavelength,
    compute_pld,
    compute_pld_in_wavelengths,
    is_in_phase,
    pld_state,
)
from xrd_sim.errors import DivisionUndefined


def test_ybco_at_sixty_degrees_is_out_of_phase():
    pld = compute_pld(7.8, math.pi / 3)
    assert np.isclose(pld, 13.51, atol=1e-2)
    ratio = compute_pld_in_wavelengths(pld, 8.0)
    assert np.isclose(ratio, 1.689, atol=1e-3)
    assert not is_in_phase(ratio)


def test_matching_wavelength_is_in_phase():
    pld = compute_pld(7.8, math.pi / 3)
    ratio = compute_pld_in_wavelengths(pld, 13.51)
    assert np.isclose(ratio, 1.0, atol=1e-3)
    assert is_in_phase(ratio)


def test_pld_non_decreasing_up_to_normal_incidence():
    theta = np.linspace(0.0, math.pi / 2, 200)
    pld = np.array([compute_pld(3.0, t) for t in theta])
    assert np.all(np.diff(pld) >= 0.0)
    assert pld[0] == 0.0
    assert np.isclose(pld[-1], 6.0)


@pytest.mark.parametrize("n", [0, 1, 2, 5])
@pytest.mark.parametrize("wavelength", [0.5, 3.0, 13.51])
def test_whole_wavelengths_are_in_phase(n, wavelength):
    assert is_in_phase(compute_pld_in_wavelengths(n * wavelength, wavelength))


@pytest.mark.parametrize("value, expected", [
    (1.0139, True),
    (0.987, True),
    (2.99, True),
    (1.015, False),
    (1.5, False),
    (-0.01, True),
])
def test_in_phase_tolerance(value, expected):
    assert is_in_phase(value) is expected


def test_custom_tolerance():
    assert is_in_phase(1.05, tolerance=0.1)
    assert not is_in_phase(1.05, tolerance=0.01)


def test_zero_wavelength_is_undefined():
    with pytest.raises(DivisionUndefined):
        compute_pld_in_wavelengths(13.5, 0.0)
    with pytest.raises(ZeroDivisionError):
        compute_pld_in_wavelengths(13.5, 0)


def test_pld_state_bundles_diagnostics():
    state = pld_state(7.8, SourceParameters(math.pi / 3, 8.0))
    assert isinstance(state, PLDState)
    assert np.isclose(state.pld, 2 * 7.8 * math.sin(math.pi / 3))
    assert np.isclose(state.pld_in_wavelengths, state.pld / 8.0)
    assert state.in_phase is False
    assert state.order == 2


@pytest.mark.parametrize("order", [1, 2, 3])
def test_bragg_wavelength_satisfies_condition(order):
    wavelength = bragg_wavelength(7.8, 0.4, order)
    state = pld_state(7.8, SourceParameters(0.4, wavelength))
    assert state.in_phase
    assert state.order == order


def test_bragg_wavelength_needs_positive_order():
    with pytest.raises(ValueError):
        bragg_wavelength(7.8, 0.4, 0)
