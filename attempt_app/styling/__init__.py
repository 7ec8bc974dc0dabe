"""Styling module for AttemptQt application."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
