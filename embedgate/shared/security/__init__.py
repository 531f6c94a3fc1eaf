"""Header policies applied to every response."""
