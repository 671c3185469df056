"""In-memory student roster with course filtering and enrollment analytics."""

__version__ = "1.0.0"
