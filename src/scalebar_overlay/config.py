"""Configuration dataclasses and enums for the scale bar overlay."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional, Union

__all__ = [
    "ConfigurationError",
    "ScalebarType",
    "ScalebarLocation",
    "ScalebarConfig",
    "DEFAULT_CONFIG",
    "update_config",
]


class ConfigurationError(ValueError):
    """Raised for programmer errors in scale bar setup."""


class ScalebarType(Enum):
    """Rendering style of the scale bar."""

    NONE = "none"
    MICROSCOPY = "microscopy"
    MAP = "map"
    LINE = "line"


class ScalebarLocation(Enum):
    """Corner of the viewer the scale bar is anchored to."""

    NONE = "none"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"


@dataclass(frozen=True)
class ScalebarConfig:
    """Scale bar options.

    Notes
    -----
    ``pixels_per_meter`` is the density at native image resolution. ``None``
    or a non-positive value keeps the scale bar hidden. ``min_width`` is a
    CSS-like length resolved to pixels by the rendering surface.

    ``width`` and ``height`` size the drawing area of the ``LINE`` style.
    When ``width`` is set, the minimum bar width of that style is half of it
    and ``min_width`` is ignored.
    """

    pixels_per_meter: Optional[float] = None
    min_width: Union[str, float] = "150px"
    type: ScalebarType = ScalebarType.MICROSCOPY
    location: ScalebarLocation = ScalebarLocation.BOTTOM_LEFT
    x_offset: float = 5.0
    y_offset: float = 5.0
    stay_inside_image: bool = True
    color: str = "black"
    font_color: str = "black"
    background_color: str = "none"
    font_size: Optional[float] = None
    bar_thickness: float = 2.0
    strict_nanometers: bool = False
    width: Optional[Union[str, float]] = None
    height: Optional[Union[str, float]] = None

    @property
    def has_density(self) -> bool:
        """True when a positive pixels-per-meter density is configured."""
        return self.pixels_per_meter is not None and self.pixels_per_meter > 0

    @property
    def label_separator(self) -> str:
        """Text between value and unit; the ``LINE`` style prints them joined."""
        return "" if self.type == ScalebarType.LINE else " "


DEFAULT_CONFIG = ScalebarConfig()

_FIELD_NAMES = {f.name for f in fields(ScalebarConfig)}


def _coerce_enum(enum_cls, value: Any):
    if value is None:
        return enum_cls.NONE
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.lower())
        except ValueError:
            pass
        try:
            return enum_cls[value.upper()]
        except KeyError:
            pass
    raise ConfigurationError(f"Invalid {enum_cls.__name__}: {value!r}")


def _coerce_number(name: str, value: Any, allow_none: bool = False) -> Optional[float]:
    if value is None and allow_none:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Option {name!r} must be a number, got {value!r}")
    return float(value)


def update_config(config: ScalebarConfig, options: Optional[Mapping[str, Any]]) -> ScalebarConfig:
    """Return ``config`` with the given options applied.

    Only keys present in ``options`` are changed. Unknown option names and
    values of the wrong kind raise ``ConfigurationError``.
    """
    if not options:
        return config
    unknown = sorted(set(options) - _FIELD_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown scale bar option(s): {', '.join(unknown)}")
    changes = {}
    for name, value in options.items():
        if name == "type":
            value = _coerce_enum(ScalebarType, value)
        elif name == "location":
            value = _coerce_enum(ScalebarLocation, value)
        elif name in ("pixels_per_meter", "font_size"):
            value = _coerce_number(name, value, allow_none=True)
        elif name in ("x_offset", "y_offset", "bar_thickness"):
            value = _coerce_number(name, value)
        elif name in ("stay_inside_image", "strict_nanometers"):
            value = bool(value)
        elif name in ("min_width", "width", "height"):
            if value is None and name != "min_width":
                pass
            elif isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise ConfigurationError(f"Option {name!r} must be a length, got {value!r}")
        changes[name] = value
    return replace(config, **changes)
