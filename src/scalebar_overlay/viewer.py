"""Interfaces the scale bar controller expects from its collaborators."""

from __future__ import annotations

from typing import Callable, Protocol, Tuple, Union

from scalebar_overlay.config import ScalebarConfig, ScalebarType
from scalebar_overlay.coordinate_transforms import Point

Handler = Callable[[], None]

OPEN_EVENT = "open"
ANIMATION_EVENT = "animation"


class Viewport(Protocol):
    """Pannable, zoomable view of a single image.

    Viewport coordinates put the image at ``[0, 1] x [0, 1 / aspect_ratio]``.
    """

    wrap_horizontal: bool
    wrap_vertical: bool

    @property
    def source_width(self) -> float:
        """Width of the source image in native pixels."""

    @property
    def aspect_ratio(self) -> float:
        """Source image width divided by height."""

    def is_open(self) -> bool:
        ...

    def get_zoom(self, current: bool = True) -> float:
        """Container width divided by the visible viewport width."""

    def get_container_size(self) -> Point:
        ...

    def pixel_from_point(self, point: Point, current: bool = True) -> Point:
        """Project a viewport point to container pixels (top-left origin)."""

    def add_handler(self, event: str, handler: Handler) -> None:
        ...

    def remove_handler(self, event: str, handler: Handler) -> None:
        ...


class Surface(Protocol):
    """Element that draws the scale bar and reports its rendered size."""

    def resolve_length(self, length: Union[str, float]) -> float:
        """Resolve a CSS-like length (``"150px"``, ``"10%"``, ``"2em"``) to pixels."""

    def render(self, size: float, label: str, style: ScalebarType, config: ScalebarConfig) -> None:
        ...

    def get_size(self) -> Tuple[float, float]:
        """Rendered (width, height) in pixels."""

    def set_position(self, x: float, y: float) -> None:
        ...

    def set_visible(self, visible: bool) -> None:
        ...
