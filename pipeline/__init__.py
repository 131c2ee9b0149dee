"""
Pipeline execution layer.

High-level executor that wires together all components.
"""

from .executor import FlattenExecutor

__all__ = ["FlattenExecutor"]
