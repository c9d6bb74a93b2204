"""Simulation state driven by the controls of the diffraction demo.

:class:`XrayDiffractionModel` keeps the handful of user-controlled
parameters and recomputes everything downstream on request: lattice sites
when the crystal changes, the path length difference and the full ray scene
whenever it is asked for.  Nothing is cached between scenes.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Callable

from .bragg import PLDState, SourceParameters, pld_state
from .constants import (
    HORIZONTAL_RAYS_DEFAULT,
    IN_PHASE_TOLERANCE,
    MANUAL_STEP_DT,
    PROPAGATION_CONSTANT,
    THETA_DEFAULT,
    VERTICAL_RAYS_DEFAULT,
    VIEW_EXTENT,
    WAVELENGTH_DEFAULT,
)
from .errors import InvalidWavelength
from .lattice import LatticeConstants, LatticeGeometry
from .rays import RayScene, generate_rays
from .waveform import WavefrontMode

__all__ = ["XrayDiffractionModel"]

log = logging.getLogger(__name__)


class XrayDiffractionModel:
    """Controlled parameters of the simulation and the derived scene.

    Parameters
    ----------
    constants:
        Initial lattice constants, YBCO by default.
    orientation:
        Initial crystal orientation in radians.
    tolerance:
        Width of the in-phase window around whole wavelengths.
    """

    def __init__(self, constants: LatticeConstants | None = None, orientation: float = 0.0,
                 tolerance: float = IN_PHASE_TOLERANCE, view_extent: float = VIEW_EXTENT) -> None:
        self.lattice = LatticeGeometry(constants, orientation, view_extent)
        self.tolerance = tolerance
        self._step_listeners: list[Callable[[float], None]] = []
        self._set_defaults()

    def _set_defaults(self) -> None:
        self.source = SourceParameters(THETA_DEFAULT, WAVELENGTH_DEFAULT)
        self.horizontal_rays: float = HORIZONTAL_RAYS_DEFAULT
        self.vertical_rays: float = VERTICAL_RAYS_DEFAULT
        self.animate = False
        self.show_path_difference = False
        self.show_transmitted = False
        self.wavefront_mode = WavefrontMode.NONE
        self.start_phase = 0.0

    def reset(self) -> None:
        """Restore every parameter and the crystal to its initial value."""
        self._set_defaults()
        self.lattice.reset()

    # ------------------------------------------------------------ setters
    def set_lattice_constants(self, a: float, c: float) -> None:
        self.lattice.set_constants(a, c)

    def set_orientation(self, orientation: float) -> None:
        self.lattice.set_orientation(orientation)

    def set_source_angle(self, angle: float) -> None:
        self.source = SourceParameters(float(angle), self.source.wavelength)

    def set_wavelength(self, wavelength: float) -> None:
        if not math.isfinite(wavelength) or wavelength <= 0:
            raise InvalidWavelength(f"wavelength must be positive, got {wavelength!r}")
        self.source = SourceParameters(self.source.angle, float(wavelength))

    def set_ray_counts(self, horizontal: float, vertical: float) -> None:
        self.horizontal_rays = horizontal
        self.vertical_rays = vertical

    def set_show_transmitted(self, show: bool) -> None:
        self.show_transmitted = bool(show)

    def set_show_path_difference(self, show: bool) -> None:
        self.show_path_difference = bool(show)

    def set_wavefront_mode(self, mode: WavefrontMode | str) -> None:
        self.wavefront_mode = WavefrontMode(mode)

    def set_animate(self, animate: bool) -> None:
        self.animate = bool(animate)

    # ------------------------------------------------------------ derived
    @property
    def constants(self) -> LatticeConstants:
        return self.lattice.constants

    @property
    def pld_state(self) -> PLDState:
        return pld_state(self.constants.c, self.source, self.tolerance)

    def scene(self) -> RayScene:
        """Recompute the ray scene from the current parameters."""
        pld = self.pld_state
        return generate_rays(
            self.lattice.sites,
            self.constants,
            self.source.angle,
            self.source.wavelength,
            self.horizontal_rays,
            self.vertical_rays,
            start_phase=self.start_phase,
            show_transmitted=self.show_transmitted,
            show_path_difference=self.show_path_difference,
            wavefront_mode=self.wavefront_mode,
            in_phase=pld.in_phase,
            pld_in_wavelengths=pld.pld_in_wavelengths,
            view_extent=self.lattice.view_extent,
        )

    # ------------------------------------------------------------ time
    def add_step_listener(self, listener: Callable[[float], None]) -> None:
        """Call ``listener(dt)`` after every step that advances the phase."""
        self._step_listeners.append(listener)

    def _advance(self, dt: float) -> RayScene:
        self.start_phase -= PROPAGATION_CONSTANT / self.source.wavelength * dt
        log.debug("advanced phase by dt=%g to %g", dt, self.start_phase)
        for listener in self._step_listeners:
            listener(dt)
        return self.scene()

    def step(self, dt: float) -> RayScene | None:
        """Advance the wave phase by ``dt`` seconds while animating.

        Returns the new scene, or ``None`` when the animation is paused.
        """
        if not self.animate:
            return None
        return self._advance(dt)

    def manual_step(self, dt: float = MANUAL_STEP_DT) -> RayScene:
        """Advance one step whether or not the animation is running."""
        return self._advance(dt)
