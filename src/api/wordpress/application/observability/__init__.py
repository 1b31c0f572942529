"""Domain-Oriented Observability for the WordPress application layer."""

from wordpress.application.observability.action_queue_probe import (
    ActionQueueProbe,
    DefaultActionQueueProbe,
)

__all__ = [
    "ActionQueueProbe",
    "DefaultActionQueueProbe",
]
