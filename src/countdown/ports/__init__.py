"""Ports - interfaces/protocols for external dependencies."""

from .task_gateway import TaskGateway

__all__ = [
    "TaskGateway",
]
