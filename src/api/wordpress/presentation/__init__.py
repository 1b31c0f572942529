"""Presentation layer for the WordPress bounded context."""

from wordpress.presentation.routes import router

__all__ = ["router"]
