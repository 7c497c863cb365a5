"""Server core: configuration, constants and database access."""
