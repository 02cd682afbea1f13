"""create-viant -- scaffold Vite web projects from a framework, styling and feature selection."""

__version__ = "1.0.0"
