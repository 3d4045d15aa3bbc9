"""Request-scoped domain entities."""
