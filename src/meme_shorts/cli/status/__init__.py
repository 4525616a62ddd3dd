"""Status command."""
