"""Post management commands."""
