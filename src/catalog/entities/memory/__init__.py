"""Entity package: in-memory Book."""

from .entity import MemoryBook

__all__ = ["MemoryBook"]
