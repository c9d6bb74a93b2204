"""Exceptions raised for degenerate simulation parameters."""

__all__ = [
    "XrayDiffractionError",
    "DivisionUndefined",
    "InvalidLatticeConstant",
    "InvalidWavelength",
]


class XrayDiffractionError(ValueError):
    """Base class for invalid inputs to the diffraction kernel."""


class DivisionUndefined(XrayDiffractionError, ZeroDivisionError):
    """A quantity had to be divided by a zero wavelength."""


class InvalidLatticeConstant(XrayDiffractionError):
    """A lattice constant was zero, negative or not finite."""


class InvalidWavelength(XrayDiffractionError):
    """The source wavelength was set to a non-positive value."""
