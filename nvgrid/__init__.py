"""Grid, window, cursor and draw-command model for a Neovim-style editor front end."""

__version__ = "0.1.0"

__all__ = [
    "anchors",
    "animation",
    "batcher",
    "cursor",
    "editor",
    "frame",
    "grid",
    "style",
    "window",
]