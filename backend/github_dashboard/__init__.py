"""GitHub activity dashboard backend."""
