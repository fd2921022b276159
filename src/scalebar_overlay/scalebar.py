"""Scale bar length and label computation for the current zoom."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from scalebar_overlay.coordinate_transforms import current_pixels_per_meter
from scalebar_overlay.nice_scale import sanity_check, solve
from scalebar_overlay.units import format_with_unit

# The bar never grows past twice the minimum width.
MAX_SIZE_RATIO = 2.0


@dataclass(frozen=True)
class ScaleResult:
    """Resolved scale bar for one refresh."""

    bar_pixel_length: float
    rounded_real_value: float
    label: str
    current_pixels_per_meter: float
    min_pixel_size: float

    def problems(self) -> List[str]:
        """Return sanity-check violations for this result."""
        return sanity_check(
            self.current_pixels_per_meter,
            self.bar_pixel_length,
            self.rounded_real_value,
            self.min_pixel_size,
            self.min_pixel_size * MAX_SIZE_RATIO,
        )


def compute_scale(
    pixels_per_meter: Optional[float],
    image_relative_zoom: float,
    min_pixel_size: float,
    strict_nanometers: bool = False,
    separator: str = " ",
) -> Optional[ScaleResult]:
    """Compute the bar length and label, or ``None`` when nothing can be shown.

    Parameters
    ----------
    pixels_per_meter : float or None
        Density of the image at native resolution.
    image_relative_zoom : float
        Screen pixels per native image pixel.
    min_pixel_size : float
        Minimum bar width in screen pixels.
    """
    if not pixels_per_meter or pixels_per_meter <= 0:
        return None
    if image_relative_zoom <= 0 or min_pixel_size <= 0:
        return None
    ppm = current_pixels_per_meter(pixels_per_meter, image_relative_zoom)
    nice = solve(ppm, min_pixel_size)
    size = nice.scale_multiplier * min_pixel_size
    label = format_with_unit(nice.factor, strict_nanometers=strict_nanometers, separator=separator)
    return ScaleResult(
        bar_pixel_length=size,
        rounded_real_value=nice.factor,
        label=label,
        current_pixels_per_meter=ppm,
        min_pixel_size=min_pixel_size,
    )
