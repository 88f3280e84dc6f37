"""Ethical Hacking Learning site: content, markup rendering and keyword search."""

__version__ = "0.1.0"
