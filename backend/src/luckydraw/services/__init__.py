"""Draw session state services."""
