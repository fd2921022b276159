"""Matplotlib viewport and surface for the scale bar controller.

``MplViewport`` turns an ``Axes`` showing an image into a pannable, zoomable
viewport. The image is drawn with ``extent=(0, 1, 1 / aspect, 0)`` so data
coordinates are viewport coordinates. The container is the axes bounding box
in display pixels, with the origin moved to its top-left corner.

``MplSurface`` draws the bar with figure-level artists placed in display
pixels, so it stays put while the image is panned underneath.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple, Union

import matplotlib
import numpy as np
from matplotlib.lines import Line2D
from matplotlib.patches import Rectangle
from matplotlib.transforms import IdentityTransform

from scalebar_overlay.config import ConfigurationError, ScalebarConfig, ScalebarType
from scalebar_overlay.coordinate_transforms import Point
from scalebar_overlay.logger import get_logger
from scalebar_overlay.viewer import ANIMATION_EVENT, OPEN_EVENT, Handler

LOGGER = get_logger(__name__)

__all__ = ["MplViewport", "MplSurface", "resolve_css_length", "mpl_surface_factory"]

_LENGTH_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px|%|em)?\s*$")

# Label baseline height above the bottom of the LINE style area.
_LINE_BASELINE = 8.0


def resolve_css_length(length: Union[str, float], container_width: float, font_px: float) -> float:
    """Resolve ``"150px"``, ``"10%"``, ``"2em"`` or a bare number to pixels.

    Percentages are relative to ``container_width`` and ``em`` to ``font_px``.
    """
    if isinstance(length, bool):
        raise ConfigurationError(f"Invalid length: {length!r}")
    if isinstance(length, (int, float)):
        return float(length)
    match = _LENGTH_RE.match(str(length))
    if match is None:
        raise ConfigurationError(f"Invalid length: {length!r}")
    value = float(match.group(1))
    unit = match.group(2) or "px"
    if unit == "%":
        return value / 100.0 * container_width
    if unit == "em":
        return value * font_px
    return value


class MplViewport:
    """Viewport over a single image in a matplotlib ``Axes``.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Axes that will host the image.
    """

    def __init__(self, ax: matplotlib.axes.Axes) -> None:
        self.ax = ax
        self.figure = ax.figure
        self.wrap_horizontal = False
        self.wrap_vertical = False
        self._shape: Optional[Tuple[int, int]] = None
        self._artist = None
        self._handlers: Dict[str, List[Handler]] = {OPEN_EVENT: [], ANIMATION_EVENT: []}
        self._batching = False
        ax.callbacks.connect("xlim_changed", self._on_limits_changed)
        ax.callbacks.connect("ylim_changed", self._on_limits_changed)

    # ---- image lifecycle -------------------------------------------------
    def open(self, image: np.ndarray, **imshow_kwargs) -> None:
        """Show ``image`` fitted to the axes and notify ``"open"`` handlers."""
        arr = np.asarray(image)
        if arr.ndim < 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError(f"Expected a 2D image, got shape {arr.shape}")
        height, width = arr.shape[:2]
        if self._artist is not None:
            self._artist.remove()
        self._shape = (int(height), int(width))
        self._artist = self.ax.imshow(
            arr, extent=(0.0, 1.0, 1.0 / self.aspect_ratio, 0.0), origin="upper", **imshow_kwargs
        )
        self.ax.set_aspect("auto")
        LOGGER.debug("Opened %dx%d image", width, height)
        self.go_home()
        self._fire(OPEN_EVENT)

    def is_open(self) -> bool:
        return self._shape is not None

    @property
    def source_width(self) -> float:
        if self._shape is None:
            raise RuntimeError("No image is open.")
        return float(self._shape[1])

    @property
    def aspect_ratio(self) -> float:
        if self._shape is None:
            raise RuntimeError("No image is open.")
        height, width = self._shape
        return width / height

    # ---- view geometry ---------------------------------------------------
    def get_container_size(self) -> Point:
        bbox = self.ax.bbox
        return Point(float(bbox.width), float(bbox.height))

    def get_zoom(self, current: bool = True) -> float:
        """Container width over visible width; ``current`` has no effect without animation."""
        x0, x1 = self.ax.get_xlim()
        return 1.0 / abs(x1 - x0)

    def get_center(self) -> Point:
        x0, x1 = self.ax.get_xlim()
        y0, y1 = self.ax.get_ylim()
        return Point((x0 + x1) / 2.0, (y0 + y1) / 2.0)

    def home_zoom(self) -> float:
        """Zoom at which the whole image fits the container."""
        width, height = self.get_container_size()
        return 1.0 / max(1.0, width / (height * self.aspect_ratio))

    def go_home(self) -> None:
        self.set_view(Point(0.5, 0.5 / self.aspect_ratio), self.home_zoom())

    def set_view(self, center: Tuple[float, float], zoom: float) -> None:
        """Pan and zoom so ``center`` sits mid-container at ``zoom``.

        Square screen pixels are kept by deriving the visible height from the
        container shape.
        """
        if zoom <= 0:
            raise ValueError("zoom must be > 0")
        width, height = self.get_container_size()
        visible_w = 1.0 / zoom
        visible_h = visible_w * height / width
        cx, cy = center
        self._batching = True
        try:
            self.ax.set_xlim(cx - visible_w / 2.0, cx + visible_w / 2.0)
            self.ax.set_ylim(cy + visible_h / 2.0, cy - visible_h / 2.0)
        finally:
            self._batching = False
        self._fire(ANIMATION_EVENT)

    def pixel_from_point(self, point: Tuple[float, float], current: bool = True) -> Point:
        disp_x, disp_y = self.ax.transData.transform((point[0], point[1]))
        bbox = self.ax.bbox
        return Point(float(disp_x - bbox.x0), float(bbox.y1 - disp_y))

    def container_to_display(self, x: float, y: float) -> Point:
        """Convert top-left container pixels to matplotlib display pixels."""
        bbox = self.ax.bbox
        return Point(bbox.x0 + x, bbox.y1 - y)

    # ---- notifications ---------------------------------------------------
    def add_handler(self, event: str, handler: Handler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def remove_handler(self, event: str, handler: Handler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def _on_limits_changed(self, _ax) -> None:
        if self._batching or self._shape is None:
            return
        self._fire(ANIMATION_EVENT)

    def _fire(self, event: str) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler()


class MplSurface:
    """Draw the scale bar as figure artists on top of a viewport's axes.

    The overlay box holds the label on top and the bar along its bottom edge.
    ``MICROSCOPY`` draws only the bottom border; ``MAP`` adds left and right
    ticks, which widens the box by the bar thickness on each side.
    ``LINE`` draws a plain left-aligned line with the label centered above it,
    in an area sized by the ``width`` and ``height`` options.
    """

    def __init__(self, viewport: MplViewport) -> None:
        self.viewport = viewport
        self.figure = viewport.figure
        self._size = 0.0
        self._style = ScalebarType.MICROSCOPY
        self._thickness = 2.0
        self._box = (0.0, 0.0)
        self._position = (0.0, 0.0)
        self._has_background = False
        self.background = Rectangle(
            (0.0, 0.0), 0.0, 0.0, transform=IdentityTransform(), linewidth=0, visible=False
        )
        self.line = Line2D([], [], transform=IdentityTransform(), solid_capstyle="butt", visible=False)
        self.text = self.figure.text(
            0.0, 0.0, "", transform=IdentityTransform(), ha="center", va="top", visible=False
        )
        self.figure.add_artist(self.background)
        self.figure.add_artist(self.line)
        for artist in (self.background, self.line, self.text):
            artist.set_gid("scalebar")
            artist.set_zorder(10)

    def _font_px(self, font_size: Optional[float] = None) -> float:
        points = font_size if font_size is not None else matplotlib.rcParams["font.size"]
        return float(points) * self.figure.dpi / 72.0

    def resolve_length(self, length: Union[str, float]) -> float:
        return resolve_css_length(length, self.viewport.get_container_size().x, self._font_px())

    def render(self, size: float, label: str, style: ScalebarType, config: ScalebarConfig) -> None:
        self._size = float(size)
        self._style = style
        self._thickness = float(config.bar_thickness)
        font_size = config.font_size
        canvas_w = canvas_h = None
        if style == ScalebarType.LINE:
            if config.width is not None:
                canvas_w = self.resolve_length(config.width)
            if config.height is not None:
                canvas_h = self.resolve_length(config.height)
                if font_size is None:
                    # Label text fills the area above the line.
                    font_size = max(canvas_h - 10.0, 1.0) * 72.0 / self.figure.dpi
        self.text.set_text(label)
        self.text.set_color(config.font_color)
        self.text.set_fontsize(font_size if font_size is not None else matplotlib.rcParams["font.size"])
        self.text.set_verticalalignment("baseline" if style == ScalebarType.LINE else "top")
        self.line.set_color(config.color)
        self.line.set_linewidth(self._thickness * 72.0 / self.figure.dpi)
        self._has_background = bool(config.background_color) and config.background_color != "none"
        if self._has_background:
            self.background.set_facecolor(config.background_color)
        self.background.set_visible(self._has_background and self.text.get_visible())
        text_w, text_h = self._measure_text(font_size)
        if style == ScalebarType.LINE:
            self._box = (
                canvas_w if canvas_w is not None else max(self._size, text_w),
                canvas_h if canvas_h is not None else text_h + _LINE_BASELINE,
            )
        else:
            bar_width = self._size + (2 * self._thickness if style == ScalebarType.MAP else 0.0)
            self._box = (max(bar_width, text_w), text_h + self._thickness)
        self._layout()

    def _measure_text(self, font_size: Optional[float]) -> Tuple[float, float]:
        get_renderer = getattr(self.figure.canvas, "get_renderer", None)
        if get_renderer is not None:
            extent = self.text.get_window_extent(renderer=get_renderer())
            return float(extent.width), float(extent.height)
        font_px = self._font_px(font_size)
        return 0.6 * font_px * len(self.text.get_text()), 1.2 * font_px

    def get_size(self) -> Tuple[float, float]:
        return self._box

    def set_position(self, x: float, y: float) -> None:
        self._position = (float(x), float(y))
        self._layout()
        self.figure.canvas.draw_idle()

    def set_visible(self, visible: bool) -> None:
        self.line.set_visible(visible)
        self.text.set_visible(visible)
        self.background.set_visible(visible and self._has_background)

    def _layout(self) -> None:
        """Place the artists for the current box, style and position."""
        x, y = self._position
        box_w, box_h = self._box
        if self._style == ScalebarType.LINE:
            self._layout_line(x, y, box_w, box_h)
            return
        to_display = self.viewport.container_to_display
        half = self._thickness / 2.0
        bar_w = self._size + (2 * self._thickness if self._style == ScalebarType.MAP else 0.0)
        left = x + (box_w - bar_w) / 2.0
        bottom_y = y + box_h - half
        if self._style == ScalebarType.MAP:
            points = [
                (left + half, y),
                (left + half, bottom_y),
                (left + bar_w - half, bottom_y),
                (left + bar_w - half, y),
            ]
        else:
            points = [(left, bottom_y), (left + bar_w, bottom_y)]
        disp = np.array([to_display(px, py) for px, py in points])
        self.line.set_data(disp[:, 0], disp[:, 1])
        self.text.set_position(to_display(x + box_w / 2.0, y))
        bx, by = to_display(x, y + box_h)
        self.background.set_xy((bx, by))
        self.background.set_width(box_w)
        self.background.set_height(box_h)

    def _layout_line(self, x: float, y: float, box_w: float, box_h: float) -> None:
        """Left-aligned line near the bottom of the area, label centered above it."""
        to_display = self.viewport.container_to_display
        line_y = y + box_h - 2.0
        start = to_display(x, line_y)
        end = to_display(x + self._size, line_y)
        self.line.set_data([start.x, end.x], [start.y, end.y])
        self.text.set_position(to_display(x + self._size / 2.0, y + box_h - _LINE_BASELINE))
        bx, by = to_display(x, y + box_h)
        self.background.set_xy((bx, by))
        self.background.set_width(box_w)
        self.background.set_height(box_h)


def mpl_surface_factory(viewport: MplViewport) -> MplSurface:
    """Surface factory for :class:`~scalebar_overlay.controller.ScalebarManager`."""
    return MplSurface(viewport)
