"""Live reload support for development mode."""

from docview.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
