"""jsonera: track when each property of a JSON document last changed."""

__version__ = "0.1.0"
