"""Metric unit selection for scale bar labels."""

from __future__ import annotations

from typing import Tuple

__all__ = ["format_with_unit", "unit_for"]

# The nanometer branch historically scaled by 1e8; ``strict_nanometers``
# switches to the dimensionally correct 1e9.
LEGACY_NANOMETER_MULTIPLIER = 1e8
NANOMETER_MULTIPLIER = 1e9


def unit_for(meters: float, strict_nanometers: bool = False) -> Tuple[float, str]:
    """Return ``(value, symbol)`` with ``meters`` rescaled to the chosen unit.

    Parameters
    ----------
    meters : float
        Length in meters, usually already rounded by the scale solver.
    strict_nanometers : bool
        Use ``1e9`` instead of the legacy ``1e8`` for the nanometer branch.
    """
    if meters < 1e-6:
        multiplier = NANOMETER_MULTIPLIER if strict_nanometers else LEGACY_NANOMETER_MULTIPLIER
        return meters * multiplier, "nm"
    if meters < 1e-3:
        return meters * 1e6, "μm"
    if meters < 1:
        return meters * 1e3, "mm"
    if meters >= 1000:
        return meters / 1000, "km"
    return meters, "m"


def format_with_unit(meters: float, strict_nanometers: bool = False, separator: str = " ") -> str:
    """Format a length in meters as a label such as ``"500 μm"`` or ``"1.5 km"``."""
    value, symbol = unit_for(meters, strict_nanometers=strict_nanometers)
    return f"{value:g}{separator}{symbol}"
