"""Docview - a small documentation viewer with a restricted markdown renderer."""

from docview.core.markdown import extract_title, render_markdown

__all__ = ["extract_title", "render_markdown"]
