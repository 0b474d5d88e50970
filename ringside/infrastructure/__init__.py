"""Infrastructure adapters for the roster lifecycle."""
