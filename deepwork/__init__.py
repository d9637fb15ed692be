"""Deep Work Terminal - a focus-session timer with a terminal-style console."""

__version__ = "1.0.0"
