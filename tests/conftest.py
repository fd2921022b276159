import os
from typing import Callable, Dict, List, Optional, Tuple

import matplotlib
import pytest

from scalebar_overlay.coordinate_transforms import Point

# Headless backend for the matplotlib surface tests
os.environ.setdefault("MPLBACKEND", "Agg")
matplotlib.use(os.environ.get("MPLBACKEND", "Agg"), force=True)


class FakeViewport:
    """Viewport with a linear projection and settable pan/zoom."""

    def __init__(
        self,
        container: Tuple[float, float] = (1000.0, 800.0),
        image_width: float = 2000.0,
        aspect_ratio: float = 2.0,
        zoom: float = 1.0,
        center: Optional[Tuple[float, float]] = None,
        is_open: bool = True,
    ) -> None:
        self.container = Point(*container)
        self.image_width = image_width
        self._aspect = aspect_ratio
        self.zoom = zoom
        self.center = Point(*(center or (0.5, 0.5 / aspect_ratio)))
        self.open = is_open
        self.wrap_horizontal = False
        self.wrap_vertical = False
        self.handlers: Dict[str, List[Callable[[], None]]] = {}
        self.projected: List[Point] = []

    @property
    def source_width(self) -> float:
        return self.image_width

    @property
    def aspect_ratio(self) -> float:
        return self._aspect

    def is_open(self) -> bool:
        return self.open

    def get_zoom(self, current: bool = True) -> float:
        return self.zoom

    def get_container_size(self) -> Point:
        return self.container

    def pixel_from_point(self, point, current: bool = True) -> Point:
        self.projected.append(Point(*point))
        scale = self.zoom * self.container.x
        return Point(
            (point[0] - self.center.x) * scale + self.container.x / 2.0,
            (point[1] - self.center.y) * scale + self.container.y / 2.0,
        )

    def add_handler(self, event: str, handler: Callable[[], None]) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def remove_handler(self, event: str, handler: Callable[[], None]) -> None:
        if handler in self.handlers.get(event, []):
            self.handlers[event].remove(handler)

    def fire(self, event: str) -> None:
        for handler in list(self.handlers.get(event, [])):
            handler()


class FakeSurface:
    """Surface recording render calls; its box is the bar length by a fixed height."""

    def __init__(self, height: float = 20.0) -> None:
        self.height = height
        self.renders: List[tuple] = []
        self.position: Optional[Tuple[float, float]] = None
        self.visible: Optional[bool] = None
        self._size = 0.0

    def resolve_length(self, length) -> float:
        if isinstance(length, str):
            return float(length.replace("px", ""))
        return float(length)

    def render(self, size, label, style, config) -> None:
        self._size = size
        self.renders.append((size, label, style))

    def get_size(self) -> Tuple[float, float]:
        return (self._size, self.height)

    def set_position(self, x: float, y: float) -> None:
        self.position = (x, y)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible


@pytest.fixture
def viewport() -> FakeViewport:
    return FakeViewport()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def make_viewport() -> Callable[..., FakeViewport]:
    return FakeViewport
