"""Draw mechanics."""
