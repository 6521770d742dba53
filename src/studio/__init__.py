"""Studio content store: projects and Markdown posts for the Studio site."""

__version__ = "0.1.0"
