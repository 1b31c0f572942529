"""Ports (interfaces) for the WordPress bounded context."""

from wordpress.ports.repositories import IActionQueueRepository

__all__ = ["IActionQueueRepository"]
