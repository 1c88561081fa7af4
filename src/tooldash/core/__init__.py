"""Core infrastructure: auth, permissions, errors, logging and database."""
