"""Locate the viewer page shipped inside the docview package."""

from importlib.resources import files
from pathlib import Path

VIEWER_FILES = ("index.html", "app.js", "style.css")


def get_static_dir() -> Path:
    """Return the directory holding the viewer page.

    Returns:
        Path to the packaged static directory

    Raises:
        FileNotFoundError: If the directory or any viewer file is missing
    """
    static = files("docview").joinpath("static")
    missing = [name for name in VIEWER_FILES if not static.joinpath(name).is_file()]
    if missing:
        msg = f"Viewer files missing from docview package: {', '.join(missing)}"
        raise FileNotFoundError(msg)
    return Path(str(static))
