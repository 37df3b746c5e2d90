"""Graph model for local import relationships."""

from .model import ImportGraph

__all__ = ["ImportGraph"]
