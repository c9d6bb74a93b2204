"""Public API for :mod:`xrd_sim`.

Importing from this package exposes the lattice, Bragg-condition, ray and
waveform kernels, the stateful model that ties them together and the Plotly
figure builders used by the ``simulate_bragg.py`` script.
"""
from .constants import a_ybco, b_ybco, c_ybco, IN_PHASE_TOLERANCE, reciprocal_basis
from .errors import XrayDiffractionError, DivisionUndefined, InvalidLatticeConstant, InvalidWavelength
from .lattice import LatticeConstants, LatticeSites, LatticeGeometry, generate_sites
from .bragg import SourceParameters, PLDState, compute_pld, compute_pld_in_wavelengths, is_in_phase, pld_state
from .waveform import WavefrontMode, SampledWave, sample_wave, sample_ray
from .rays import RaySegment, RayPath, RayScene, generate_rays
from .model import XrayDiffractionModel
from .figure import build_scene_figure, build_animation

__all__ = [
    "a_ybco", "b_ybco", "c_ybco", "IN_PHASE_TOLERANCE", "reciprocal_basis",
    "XrayDiffractionError", "DivisionUndefined", "InvalidLatticeConstant", "InvalidWavelength",
    "LatticeConstants", "LatticeSites", "LatticeGeometry", "generate_sites",
    "SourceParameters", "PLDState", "compute_pld", "compute_pld_in_wavelengths", "is_in_phase", "pld_state",
    "WavefrontMode", "SampledWave", "sample_wave", "sample_ray",
    "RaySegment", "RayPath", "RayScene", "generate_rays",
    "XrayDiffractionModel",
    "build_scene_figure", "build_animation",
]
