"""
Application layer containing the service container and bootstrap logic.

This layer wires the module lifecycle to configuration and services and
drives the application bootstrap.
"""

from .container import Container, IContainer
from .bootstrap import ApplicationBootstrap

__all__ = [
    "Container",
    "IContainer",
    "ApplicationBootstrap",
]
