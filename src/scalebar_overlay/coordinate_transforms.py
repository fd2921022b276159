"""Zoom and coordinate conversions between image, viewport and screen space.

Conventions
-----------
- Viewport coords: the image spans ``x`` in ``[0, 1]`` and ``y`` in
  ``[0, 1 / aspect_ratio]`` with the origin at the image top-left.
- Container coords: screen pixels with the origin at the top-left of the
  viewer container.
- Viewport zoom: container width divided by the visible viewport width, so a
  zoom of 1 fits the image width to the container.
- Image-relative zoom: screen pixels per native image pixel.
"""

from __future__ import annotations

from typing import NamedTuple

__all__ = [
    "Point",
    "to_image_relative_zoom",
    "current_pixels_per_meter",
    "image_corner_point",
]


class Point(NamedTuple):
    """A 2D point or size."""

    x: float
    y: float


def to_image_relative_zoom(
    viewport_zoom: float, container_width_px: float, native_image_width_px: float
) -> float:
    """Convert a container-relative zoom into screen pixels per image pixel.

    Parameters
    ----------
    viewport_zoom : float
        Zoom reported by the viewport (container width / visible width).
    container_width_px : float
        Width of the viewer container in screen pixels.
    native_image_width_px : float
        Width of the source image at native resolution.

    Returns
    -------
    float
        Ratio between the image size at the current zoom and the image size
        at native resolution.
    """
    return viewport_zoom * container_width_px / native_image_width_px


def current_pixels_per_meter(pixels_per_meter: float, image_relative_zoom: float) -> float:
    """Screen pixels per meter at the given image-relative zoom."""
    return image_relative_zoom * pixels_per_meter


def image_corner_point(corner: str, aspect_ratio: float) -> Point:
    """Return the viewport-space point of an image corner.

    Parameters
    ----------
    corner : str
        One of ``"top_left"``, ``"top_right"``, ``"bottom_right"``,
        ``"bottom_left"``.
    aspect_ratio : float
        Image width divided by height.
    """
    bottom = 1 / aspect_ratio
    corners = {
        "top_left": Point(0.0, 0.0),
        "top_right": Point(1.0, 0.0),
        "bottom_right": Point(1.0, bottom),
        "bottom_left": Point(0.0, bottom),
    }
    try:
        return corners[corner]
    except KeyError:
        raise ValueError(f"Unknown image corner: {corner!r}") from None
