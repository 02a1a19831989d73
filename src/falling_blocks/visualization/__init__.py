"""Terminal presentation for the engine: text renderer, RGB frames, autoplay demo."""

from .renderer import TextRenderer, TextScoreReporter, format_grid, grid_to_rgb

__all__ = ["TextRenderer", "TextScoreReporter", "format_grid", "grid_to_rgb"]
