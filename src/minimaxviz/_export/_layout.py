"""Shared page layout for minimaxviz HTML export."""

from __future__ import annotations

from htpy import Element, Node, body, div, h1, head, header, html, meta, p, style, title
from markupsafe import Markup

from ._css import CSS


def base_page(
    *,
    page_title: str,
    subtitle: str,
    sidebar: Node = None,
    content: Node,
) -> str:
    """Render a full HTML page as a string.

    Args:
        page_title: Title shown in the header and the browser tab.
        subtitle: Line shown under the title.
        sidebar: Optional sidebar element.
        content: The main content node.

    Returns:
        Complete HTML document as a string.

    """
    page = html(lang="en")[
        _render_head(page_title),
        body[
            _render_header(page_title, subtitle),
            div(".container")[
                sidebar,
                content,
            ],
        ],
    ]
    return f"<!DOCTYPE html>\n{page}"


def _render_head(page_title: str) -> Element:
    """Render HTML <head> with inline styles."""
    return head[
        meta(charset="UTF-8"),
        meta(name="viewport", content="width=device-width, initial-scale=1.0"),
        title[page_title],
        style[Markup(CSS)],  # noqa: S704
    ]


def _render_header(page_title: str, subtitle: str) -> Element:
    return header[
        h1[page_title],
        p(".subtitle")[subtitle],
    ]
