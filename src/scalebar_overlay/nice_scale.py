"""Nice-number selection for scale bar lengths.

A scale bar should read "5 m" or "200 μm", never "37 m". Given the current
density in screen pixels per meter and a minimum bar width in pixels, the
solver picks the bar width whose real-world length has a leading digit of
1, 2, 2.5 or 5 and whose pixel length lies in ``[min_size, 2 * min_size)``.

Notes
-----
``significand`` maps any positive value into ``[1, 10)``. The ratio of the
two significands is pulled down by a fixed cascade of divisions by 5, 4 and 2.
Every divisor keeps the recombined real-world value on the 1/2/2.5/5 grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

__all__ = [
    "NiceScale",
    "significand",
    "round_significand",
    "normalize",
    "solve",
    "sanity_check",
]

SIGNIFICANT_DIGITS = 3


@dataclass(frozen=True)
class NiceScale:
    """Solver output.

    Parameters
    ----------
    factor : float
        Real-world length represented by the bar, in the denominator unit of
        the density (meters), rounded on a fixed digit grid.
    scale_multiplier : float
        Multiplier applied to the target size to obtain the bar length.
    """

    factor: float
    scale_multiplier: float


def significand(x: float) -> float:
    """Strip the order of magnitude from a positive value."""
    return x * 10 ** math.ceil(-math.log10(x))


def round_significand(x: float, digits: int) -> float:
    """Round a positive value, keeping ``digits`` digits after the leading one."""
    exponent = -math.ceil(-math.log10(x))
    power = digits - exponent
    scaled = x * 10 ** power
    # Round half up on integers to avoid noise near digit boundaries.
    if power < 0:
        return float(math.floor(scaled + 0.5) * 10 ** -power)
    return math.floor(scaled + 0.5) / 10 ** power


def normalize(value: float, min_size: float) -> float:
    """Return the multiplier turning ``min_size`` into a nice bar length."""
    result = significand(significand(value) / significand(min_size))
    if result >= 5:
        result /= 5
    if result >= 4:
        result /= 4
    if result >= 2:
        result /= 2
    return result


def solve(current_pixels_per_unit: float, target_pixel_size: float) -> NiceScale:
    """Solve for a nice bar length.

    Both inputs must be positive; callers validate density and zoom first.

    Parameters
    ----------
    current_pixels_per_unit : float
        Screen pixels per real-world unit at the current zoom.
    target_pixel_size : float
        Minimum bar width in screen pixels.

    Returns
    -------
    NiceScale
        ``factor`` is the rounded real-world length and
        ``scale_multiplier * target_pixel_size`` the bar length in pixels.
    """
    multiplier = normalize(current_pixels_per_unit, target_pixel_size)
    size = multiplier * target_pixel_size
    factor = round_significand(size / current_pixels_per_unit, SIGNIFICANT_DIGITS)
    return NiceScale(factor=factor, scale_multiplier=multiplier)


def sanity_check(
    current_pixels_per_unit: float,
    bar_size: float,
    factor: float,
    min_size: float,
    max_size: float,
    tolerance: float = 1e-4,
) -> List[str]:
    """Cross-check a solved bar against its inputs.

    Returns a list of human readable violations, empty when the bar is
    consistent. The density recomputed from the bar is compared with a
    relative tolerance because ``factor`` is rounded to a few
    digits.
    """
    problems: List[str] = []
    ppu = bar_size / factor
    if abs(ppu - current_pixels_per_unit) > tolerance * current_pixels_per_unit:
        problems.append(f"PPU difference: expected {current_pixels_per_unit}, got {ppu}")
    if bar_size > max_size:
        problems.append(f"Bar size above limit: {bar_size}")
    if bar_size < min_size:
        problems.append(f"Bar size under limit: {bar_size}")
    return problems
