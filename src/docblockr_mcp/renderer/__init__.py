"""Renders symbol records as documentation comment templates."""

from .docblock import Placeholders, escape, render_block

__all__ = ["Placeholders", "escape", "render_block"]
