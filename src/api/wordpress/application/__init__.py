"""Application layer for the WordPress bounded context."""
