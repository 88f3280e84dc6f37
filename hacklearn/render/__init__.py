"""Markup rendering."""

from .markup import RULES, MarkupRule, render

__all__ = ["MarkupRule", "RULES", "render"]
