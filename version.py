"""
Version information for YardPaperwork.

This is the single source of truth for the application version.
Used by: CLI and pyproject.toml.
"""

__version__ = "1.0.0"
APP_NAME = "YardPaperwork"
