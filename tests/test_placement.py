"""Unit tests for corner placement and clamping."""

import numpy as np
import pytest

from scalebar_overlay.config import ScalebarLocation
from scalebar_overlay.coordinate_transforms import Point, image_corner_point
from scalebar_overlay.placement import compute_location

CONTAINER = (800.0, 600.0)
OVERLAY = (150.0, 30.0)
OFFSET = (5.0, 5.0)
ASPECT = 2.0


def _projector(zoom: float, center: Point):
    """Linear projection with the image width spanning ``zoom * 800`` px."""
    scale = zoom * CONTAINER[0]

    def project(point):
        return Point(
            (point[0] - center.x) * scale + CONTAINER[0] / 2.0,
            (point[1] - center.y) * scale + CONTAINER[1] / 2.0,
        )

    return project


def _no_projection(point):
    raise AssertionError("project must not be called")


def _place(location, project, stay_inside=True, wrap_h=False, wrap_v=False):
    return compute_location(
        location, OVERLAY, OFFSET, stay_inside, CONTAINER, ASPECT, wrap_h, wrap_v, project
    )


class TestUnclampedPlacement:
    """Test container-corner placement without clamping."""

    @pytest.mark.parametrize("location,expected", [
        (ScalebarLocation.TOP_LEFT, (5.0, 5.0)),
        (ScalebarLocation.TOP_RIGHT, (645.0, 5.0)),
        (ScalebarLocation.BOTTOM_RIGHT, (645.0, 565.0)),
        (ScalebarLocation.BOTTOM_LEFT, (5.0, 565.0)),
    ])
    def test_container_corners(self, location, expected):
        """Test base positions with inward offsets."""
        assert _place(location, _no_projection, stay_inside=False) == expected

    def test_none_location(self):
        """Test the NONE location yields no placement."""
        assert _place(ScalebarLocation.NONE, _no_projection) is None


class TestClampedPlacement:
    """Test clamping to the projected image corner."""

    def test_zoomed_out_image_pulls_bar_inward(self):
        """Test a small image keeps the bar on the image."""
        # Image spans x in [200, 600] and y in [200, 400].
        project = _projector(0.5, Point(0.5, 0.25))
        assert _place(ScalebarLocation.TOP_LEFT, project) == (205.0, 205.0)
        assert _place(ScalebarLocation.TOP_RIGHT, project) == (445.0, 205.0)
        assert _place(ScalebarLocation.BOTTOM_RIGHT, project) == (445.0, 365.0)
        assert _place(ScalebarLocation.BOTTOM_LEFT, project) == (205.0, 365.0)

    def test_zoomed_in_image_keeps_container_corner(self):
        """Test an image larger than the container leaves the base position."""
        project = _projector(4.0, Point(0.5, 0.25))
        assert _place(ScalebarLocation.BOTTOM_LEFT, project) == (5.0, 565.0)
        assert _place(ScalebarLocation.TOP_RIGHT, project) == (645.0, 5.0)

    def test_projects_the_matching_image_corner(self):
        """Test only the corner of the chosen location is projected."""
        seen = []

        def project(point):
            seen.append(tuple(point))
            return Point(0.0, 0.0)

        _place(ScalebarLocation.BOTTOM_RIGHT, project)
        assert seen == [(1.0, 0.5)]

    def test_horizontal_wrap_bypasses_x_clamp(self):
        """Test x stays at the container base when wrapping horizontally."""
        project = _projector(0.5, Point(0.5, 0.25))
        x, y = _place(ScalebarLocation.TOP_LEFT, project, wrap_h=True)
        assert x == 5.0
        assert y == 205.0
        x, y = _place(ScalebarLocation.BOTTOM_RIGHT, project, wrap_h=True)
        assert x == 645.0
        assert y == 365.0

    def test_vertical_wrap_bypasses_y_clamp(self):
        """Test y stays at the container base when wrapping vertically."""
        project = _projector(0.5, Point(0.5, 0.25))
        assert _place(ScalebarLocation.BOTTOM_LEFT, project, wrap_v=True) == (205.0, 565.0)

    @pytest.mark.parametrize("location", [
        ScalebarLocation.TOP_LEFT,
        ScalebarLocation.TOP_RIGHT,
        ScalebarLocation.BOTTOM_RIGHT,
        ScalebarLocation.BOTTOM_LEFT,
    ])
    def test_random_views_never_overshoot_image(self, location):
        """Test the overlay never passes the image edge in the outward direction."""
        rng = np.random.default_rng(7)
        left = location in (ScalebarLocation.TOP_LEFT, ScalebarLocation.BOTTOM_LEFT)
        top = location in (ScalebarLocation.TOP_LEFT, ScalebarLocation.TOP_RIGHT)
        for _ in range(200):
            zoom = float(10.0 ** rng.uniform(-1.5, 1.5))
            center = Point(float(rng.uniform(-1.0, 2.0)), float(rng.uniform(-0.5, 1.0)))
            project = _projector(zoom, center)
            corner = project(image_corner_point(location.value, ASPECT))
            x, y = _place(location, project)
            width, height = OVERLAY
            if left:
                assert x - OFFSET[0] >= corner.x - 1e-9
                assert x - OFFSET[0] >= 0.0
            else:
                assert x + OFFSET[0] + width <= corner.x + 1e-9
                assert x + OFFSET[0] + width <= CONTAINER[0] + 1e-9
            if top:
                assert y - OFFSET[1] >= corner.y - 1e-9
                assert y - OFFSET[1] >= 0.0
            else:
                assert y + OFFSET[1] + height <= corner.y + 1e-9
                assert y + OFFSET[1] + height <= CONTAINER[1] + 1e-9
