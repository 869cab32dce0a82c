"""tasktrack: in-process task/epic/subtask tracker with optional file persistence."""

__version__ = "0.1.0"
