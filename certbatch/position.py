"""Name anchor positioning in template pixel space."""

from .models import Position, TemplateImage

# Margins the interactive editor keeps between the anchor and the template edge
MARGIN_X = 50
MARGIN_Y = 20

MAX_PREVIEW_SCALE = 0.8


def default_position(template: TemplateImage) -> Position:
    """Center of the template; used whenever a new template is loaded."""
    return Position(template.width / 2, template.height / 2)


def clamp_position(position: Position, template: TemplateImage) -> Position:
    x = max(MARGIN_X, min(position.x, template.width - MARGIN_X))
    y = max(MARGIN_Y, min(position.y, template.height - MARGIN_Y))
    return Position(x, y)


def preview_scale(container_width: float, container_height: float, template: TemplateImage) -> float:
    """Scale at which a template is shown inside a preview container."""
    return min(
        container_width / template.width,
        container_height / template.height,
        MAX_PREVIEW_SCALE,
    )


def move_position(
    position: Position,
    dx: float,
    dy: float,
    template: TemplateImage,
    scale: float = 1.0,
) -> Position:
    """
    Apply a drag of (dx, dy) screen pixels to position.

    The delta is converted to template pixels using the preview scale and the
    result is clamped to the editable area.
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    moved = Position(position.x + dx / scale, position.y + dy / scale)
    return clamp_position(moved, template)
