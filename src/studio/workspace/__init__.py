"""First-run workspace bootstrap."""
