"""Scroll geometry helpers."""


def is_reached_bottom(content_offset: float, content_size: float, viewport_size: float) -> bool:
    """Whether a scrolled viewport shows the last line of its content.

    Content shorter than the viewport counts as scrolled to the bottom.
    """
    max_scroll_distance = max(0.0, content_size - viewport_size)
    return max_scroll_distance <= content_offset
