"""Presentation adapters for evaluated trees."""

from ._graph import to_graph_data
from .html import render_html

__all__ = [
    "render_html",
    "to_graph_data",
]
