#!/usr/bin/env python3
"""Command-line entry for the Bragg diffraction figure.

Angles are given in degrees and lengths in ångström.  With ``--frames`` the
figure is animated so the waves travel through the crystal.
"""
import argparse
import logging
import math

from xrd_sim.constants import (
    HORIZONTAL_RAYS_DEFAULT,
    THETA_DEFAULT,
    VERTICAL_RAYS_DEFAULT,
    WAVELENGTH_DEFAULT,
    a_ybco,
    c_ybco,
)
from xrd_sim.figure import main
from xrd_sim.lattice import LatticeConstants
from xrd_sim.model import XrayDiffractionModel
from xrd_sim.waveform import WavefrontMode


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bragg diffraction from a 2-D lattice")
    parser.add_argument("--theta", type=float, default=math.degrees(THETA_DEFAULT),
                        help="Incident angle θ in degrees (default: 60)")
    parser.add_argument("--wavelength", type=float, default=WAVELENGTH_DEFAULT,
                        help=f"Wavelength λ in Å (default: {WAVELENGTH_DEFAULT})")
    parser.add_argument("-a", type=float, default=a_ybco,
                        help=f"In-plane lattice constant a in Å (default: {a_ybco})")
    parser.add_argument("-c", type=float, default=c_ybco,
                        help=f"Interplane spacing d in Å (default: {c_ybco})")
    parser.add_argument("--orientation", type=float, default=0.0,
                        help="Crystal orientation in degrees (default: 0)")
    parser.add_argument("--horizontal", type=float, default=HORIZONTAL_RAYS_DEFAULT,
                        help=f"Horizontal ray count (default: {HORIZONTAL_RAYS_DEFAULT})")
    parser.add_argument("--vertical", type=float, default=VERTICAL_RAYS_DEFAULT,
                        help=f"Vertical ray count (default: {VERTICAL_RAYS_DEFAULT})")
    parser.add_argument("--wavefronts", choices=[m.value for m in WavefrontMode],
                        default=WavefrontMode.NONE.value,
                        help="Wavefront marker colouring (default: none)")
    parser.add_argument("--path-difference", action="store_true",
                        help="Shade the path length difference region")
    parser.add_argument("--transmitted", action="store_true",
                        help="Also draw the transmitted rays")
    parser.add_argument("--frames", type=int, default=0,
                        help="Number of animation frames (default: 0, static)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log kernel recomputations")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    model = XrayDiffractionModel(LatticeConstants(a=args.a, c=args.c),
                                 math.radians(args.orientation))
    model.set_source_angle(math.radians(args.theta))
    model.set_wavelength(args.wavelength)
    model.set_ray_counts(args.horizontal, args.vertical)
    model.set_wavefront_mode(args.wavefronts)
    model.set_show_path_difference(args.path_difference)
    model.set_show_transmitted(args.transmitted)
    main(model, args.frames)
