"""
Terminal user interface: canvas rasterizer, curses renderer and main loop.
"""

from .app import action_for_key, run
from .canvas import Canvas, chart_layout

__all__ = ["Canvas", "chart_layout", "action_for_key", "run"]
