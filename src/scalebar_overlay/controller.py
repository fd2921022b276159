"""Scale bar controller: pulls viewport state, renders and places the bar."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional

from scalebar_overlay.config import (
    DEFAULT_CONFIG,
    ConfigurationError,
    ScalebarConfig,
    ScalebarLocation,
    ScalebarType,
    update_config,
)
from scalebar_overlay.coordinate_transforms import to_image_relative_zoom
from scalebar_overlay.logger import get_logger
from scalebar_overlay.placement import Placement, compute_location
from scalebar_overlay.scalebar import ScaleResult, compute_scale
from scalebar_overlay.viewer import ANIMATION_EVENT, OPEN_EVENT, Surface, Viewport

LOGGER = get_logger(__name__)

__all__ = ["ScalebarState", "ScalebarController", "ScalebarManager"]

# Options that change how the minimum bar width is resolved.
_SIZING_OPTIONS = frozenset({"min_width", "width", "type"})


class ScalebarState(Enum):
    """Visibility state after the latest refresh."""

    HIDDEN = "hidden"
    VISIBLE = "visible"


class ScalebarController:
    """Keep a scale bar in sync with a viewport.

    Every ``"open"`` and ``"animation"`` notification, and every call to
    :meth:`refresh`, recomputes the bar from the current viewport state.
    Nothing is carried over between refreshes except the configuration.

    Parameters
    ----------
    viewport : Viewport
        The image view to measure. Required.
    surface : Surface
        The element that draws the bar. Required.
    config : ScalebarConfig, optional
        Starting configuration; keyword options are applied on top of it.
    debug_checks : bool
        Log sanity-check violations of each computed bar at DEBUG level.
    """

    def __init__(
        self,
        viewport: Optional[Viewport],
        surface: Optional[Surface],
        config: Optional[ScalebarConfig] = None,
        debug_checks: bool = False,
        **options: Any,
    ) -> None:
        if viewport is None:
            raise ConfigurationError("A viewport must be specified.")
        if surface is None:
            raise ConfigurationError("A surface must be specified.")
        self.viewport = viewport
        self.surface = surface
        self.debug_checks = debug_checks
        self._config = update_config(config or DEFAULT_CONFIG, options)
        self._min_pixel_size = self._resolve_min_pixel_size(self._config)
        self._state = ScalebarState.HIDDEN
        self._scale: Optional[ScaleResult] = None
        self._placement: Optional[Placement] = None
        self._handler: Callable[[], None] = self._on_viewport_event
        self.viewport.add_handler(OPEN_EVENT, self._handler)
        self.viewport.add_handler(ANIMATION_EVENT, self._handler)

    @property
    def config(self) -> ScalebarConfig:
        return self._config

    @property
    def state(self) -> ScalebarState:
        return self._state

    @property
    def min_pixel_size(self) -> float:
        """Minimum bar width in pixels, resolved from ``config.min_width``."""
        return self._min_pixel_size

    @property
    def scale(self) -> Optional[ScaleResult]:
        """Scale computed by the latest visible refresh."""
        return self._scale

    @property
    def placement(self) -> Optional[Placement]:
        """Position applied by the latest visible refresh."""
        return self._placement

    def update_options(self, **options: Any) -> None:
        """Apply options without refreshing.

        Nothing is changed when an option or length is rejected.
        """
        config = update_config(self._config, options)
        min_pixel_size = self._min_pixel_size
        if _SIZING_OPTIONS.intersection(options):
            min_pixel_size = self._resolve_min_pixel_size(config)
        self._config = config
        self._min_pixel_size = min_pixel_size

    def refresh(self, **options: Any) -> ScalebarState:
        """Apply options, then recompute, redraw and reposition the bar."""
        self.update_options(**options)
        cfg = self._config
        viewport = self.viewport
        if (
            not viewport.is_open()
            or cfg.type == ScalebarType.NONE
            or not cfg.has_density
            or cfg.location == ScalebarLocation.NONE
        ):
            return self._hide()

        container = viewport.get_container_size()
        zoom = to_image_relative_zoom(viewport.get_zoom(True), container.x, viewport.source_width)
        scale = compute_scale(
            cfg.pixels_per_meter,
            zoom,
            self._min_pixel_size,
            strict_nanometers=cfg.strict_nanometers,
            separator=cfg.label_separator,
        )
        if scale is None:
            return self._hide()
        if self.debug_checks:
            for problem in scale.problems():
                LOGGER.debug("Scale bar sanity check: %s", problem)

        self.surface.set_visible(True)
        self.surface.render(scale.bar_pixel_length, scale.label, cfg.type, cfg)
        placement = compute_location(
            cfg.location,
            self.surface.get_size(),
            (cfg.x_offset, cfg.y_offset),
            cfg.stay_inside_image,
            container,
            viewport.aspect_ratio,
            viewport.wrap_horizontal,
            viewport.wrap_vertical,
            lambda point: viewport.pixel_from_point(point, True),
        )
        self.surface.set_position(placement.x, placement.y)
        self._scale = scale
        self._placement = placement
        self._set_state(ScalebarState.VISIBLE)
        return self._state

    def detach(self) -> None:
        """Stop listening to viewport notifications and hide the bar."""
        self.viewport.remove_handler(OPEN_EVENT, self._handler)
        self.viewport.remove_handler(ANIMATION_EVENT, self._handler)
        self._hide()

    def _resolve_min_pixel_size(self, config: ScalebarConfig) -> float:
        if config.type == ScalebarType.LINE and config.width is not None:
            return self.surface.resolve_length(config.width) / 2.0
        return self.surface.resolve_length(config.min_width)

    def _on_viewport_event(self) -> None:
        self.refresh()

    def _hide(self) -> ScalebarState:
        self.surface.set_visible(False)
        self._scale = None
        self._placement = None
        self._set_state(ScalebarState.HIDDEN)
        return self._state

    def _set_state(self, state: ScalebarState) -> None:
        if state != self._state:
            LOGGER.debug("Scale bar %s -> %s", self._state.value, state.value)
        self._state = state


class ScalebarManager:
    """Own one scale bar per viewport.

    ``scalebar`` creates the controller on first use and reconfigures it
    afterwards. ``surface_factory`` builds a surface for a viewport when the
    caller does not pass one.
    """

    def __init__(self, surface_factory: Optional[Callable[[Viewport], Surface]] = None) -> None:
        self._surface_factory = surface_factory
        self._controllers: Dict[int, ScalebarController] = {}

    def scalebar(
        self, viewport: Optional[Viewport], surface: Optional[Surface] = None, **options: Any
    ) -> ScalebarController:
        """Get or create the scale bar of ``viewport`` and apply ``options``."""
        if viewport is None:
            raise ConfigurationError("A viewport must be specified.")
        controller = self._controllers.get(id(viewport))
        if controller is not None:
            controller.refresh(**options)
            return controller
        # Reject bad options before the factory creates any artists.
        update_config(
            DEFAULT_CONFIG,
            {k: v for k, v in options.items() if k not in ("config", "debug_checks")},
        )
        if surface is None and self._surface_factory is not None:
            surface = self._surface_factory(viewport)
        controller = ScalebarController(viewport, surface, **options)
        self._controllers[id(viewport)] = controller
        controller.refresh()
        return controller

    def get(self, viewport: Viewport) -> Optional[ScalebarController]:
        return self._controllers.get(id(viewport))

    def remove(self, viewport: Viewport) -> None:
        """Detach and forget the scale bar of ``viewport``."""
        controller = self._controllers.pop(id(viewport), None)
        if controller is not None:
            controller.detach()

    def __len__(self) -> int:
        return len(self._controllers)
