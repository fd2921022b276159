"""Scale bar overlay for pannable, zoomable image viewers."""

from scalebar_overlay.config import (
    DEFAULT_CONFIG,
    ConfigurationError,
    ScalebarConfig,
    ScalebarLocation,
    ScalebarType,
)
from scalebar_overlay.controller import ScalebarController, ScalebarManager, ScalebarState
from scalebar_overlay.nice_scale import NiceScale, solve
from scalebar_overlay.placement import Placement, compute_location
from scalebar_overlay.scalebar import ScaleResult, compute_scale
from scalebar_overlay.units import format_with_unit

__all__ = [
    "__version__",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "NiceScale",
    "Placement",
    "ScaleResult",
    "ScalebarConfig",
    "ScalebarController",
    "ScalebarLocation",
    "ScalebarManager",
    "ScalebarState",
    "ScalebarType",
    "compute_location",
    "compute_scale",
    "format_with_unit",
    "solve",
]

__version__ = "1.0.0"
