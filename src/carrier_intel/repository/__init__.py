"""
Pattern storage for the Carrier Intelligence Engine.
"""

from .base import PatternRepository, PatternUpdate
from .memory import InMemoryPatternRepository

__all__ = [
    "InMemoryPatternRepository",
    "PatternRepository",
    "PatternUpdate",
]
