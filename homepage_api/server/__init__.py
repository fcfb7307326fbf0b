"""FastAPI server for the homepage backend API."""

__version__ = "1.0.0"
