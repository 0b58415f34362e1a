"""Role catalog, error taxonomy, interfaces and logging setup."""
