"""Database engines and session providers."""
