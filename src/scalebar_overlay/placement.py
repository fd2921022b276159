"""Corner-anchored placement of the scale bar inside the viewer container."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from scalebar_overlay.config import ScalebarLocation
from scalebar_overlay.coordinate_transforms import Point, image_corner_point

__all__ = ["Placement", "compute_location"]

Placement = Point

ProjectFn = Callable[[Point], Point]

_LEFT = (ScalebarLocation.TOP_LEFT, ScalebarLocation.BOTTOM_LEFT)
_TOP = (ScalebarLocation.TOP_LEFT, ScalebarLocation.TOP_RIGHT)


def compute_location(
    location: ScalebarLocation,
    overlay_size: Tuple[float, float],
    offset: Tuple[float, float],
    stay_inside_image: bool,
    container_size: Tuple[float, float],
    aspect_ratio: float,
    wrap_horizontal: bool,
    wrap_vertical: bool,
    project: ProjectFn,
) -> Optional[Placement]:
    """Compute the top-left position of the overlay in container pixels.

    Parameters
    ----------
    location : ScalebarLocation
        Anchor corner. ``ScalebarLocation.NONE`` returns ``None``.
    overlay_size : tuple[float, float]
        Rendered (width, height) of the overlay.
    offset : tuple[float, float]
        (x_offset, y_offset) pushing the overlay inward from the corner.
    stay_inside_image : bool
        Clamp to the projected image corner on axes that do not wrap.
    container_size : tuple[float, float]
        (width, height) of the viewer container.
    aspect_ratio : float
        Image width divided by height.
    wrap_horizontal, wrap_vertical : bool
        Wrapping axes have no finite bound and are never clamped.
    project : callable
        Maps a viewport-space point to container pixels at the current view.
        Only called when clamping.
    """
    if location == ScalebarLocation.NONE:
        return None
    bar_width, bar_height = overlay_size
    container_width, container_height = container_size
    x_offset, y_offset = offset
    left = location in _LEFT
    top = location in _TOP

    x = 0.0 if left else container_width - bar_width
    y = 0.0 if top else container_height - bar_height

    if stay_inside_image:
        pixel = project(image_corner_point(location.value, aspect_ratio))
        if not wrap_horizontal:
            x = max(x, pixel.x) if left else min(x, pixel.x - bar_width)
        if not wrap_vertical:
            y = max(y, pixel.y) if top else min(y, pixel.y - bar_height)

    x = x + x_offset if left else x - x_offset
    y = y + y_offset if top else y - y_offset
    return Placement(x, y)
