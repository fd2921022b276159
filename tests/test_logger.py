"""Unit tests for the package logger helper."""

import logging

from scalebar_overlay.logger import get_logger, set_level


def test_children_share_package_root():
    """Test module loggers hang off the package logger."""
    assert get_logger("demo").name == "scalebar_overlay.demo"
    assert get_logger("scalebar_overlay.controller").name == "scalebar_overlay.controller"


def test_single_console_handler():
    """Test repeated calls do not stack handlers."""
    get_logger("a")
    get_logger("b")
    # Subclasses such as pytest's capture handlers are not ours.
    console = [
        h for h in logging.getLogger("scalebar_overlay").handlers
        if type(h) is logging.StreamHandler
    ]
    assert len(console) == 1


def test_set_level_updates_handlers():
    """Test set_level reaches the base logger and its handlers."""
    get_logger("c")
    base = logging.getLogger("scalebar_overlay")
    previous = base.level
    try:
        set_level(logging.DEBUG)
        assert base.level == logging.DEBUG
        assert all(
            h.level == logging.DEBUG for h in base.handlers if type(h) is logging.StreamHandler
        )
    finally:
        set_level(previous)
