"""Creative Commons license management for repository items."""

__version__ = "0.1.0"
