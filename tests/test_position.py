"""Tests for anchor positioning."""

import pytest

from certbatch.models import Position
from certbatch.position import (
    clamp_position,
    default_position,
    move_position,
    preview_scale,
)
from certbatch.template import decode_template

from .conftest import make_image_bytes

pytestmark = pytest.mark.unit


@pytest.fixture
def template():
    return decode_template(make_image_bytes(800, 600))


class TestDefaultPosition:
    def test_is_template_center(self, template):
        assert default_position(template) == Position(400, 300)

    def test_odd_dimensions_are_not_rounded(self):
        template = decode_template(make_image_bytes(801, 601))

        assert default_position(template) == Position(400.5, 300.5)


class TestClampPosition:
    """Tests for clamp_position."""

    def test_inside_is_unchanged(self, template):
        """Test a position inside the margins is kept."""
        assert clamp_position(Position(123.5, 456), template) == Position(123.5, 456)

    def test_clamps_to_margins(self, template):
        """Test positions outside are pulled back to the editable area."""
        assert clamp_position(Position(-10, -10), template) == Position(50, 20)
        assert clamp_position(Position(5000, 5000), template) == Position(750, 580)


class TestMovePosition:
    """Tests for move_position."""

    def test_delta_is_scaled_to_template_pixels(self, template):
        """Test a screen drag is divided by the preview scale."""
        moved = move_position(Position(400, 300), 40, -20, template, scale=0.5)

        assert moved == Position(480, 260)

    def test_result_is_clamped(self, template):
        """Test dragging past the edge stops at the margin."""
        moved = move_position(Position(400, 300), 10_000, 10_000, template)

        assert moved == Position(750, 580)

    def test_non_positive_scale_raises(self, template):
        """Test a zero scale is rejected."""
        with pytest.raises(ValueError):
            move_position(Position(0, 0), 1, 1, template, scale=0)


class TestPreviewScale:
    def test_fits_container(self, template):
        assert preview_scale(400, 600, template) == pytest.approx(0.5)

    def test_never_exceeds_cap(self, template):
        assert preview_scale(4000, 3000, template) == 0.8
