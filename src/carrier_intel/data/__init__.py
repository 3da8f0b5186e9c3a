"""
Static data shipped with the Carrier Intelligence Engine.
"""

from .seed import CARRIER_TRENDS_DATA, load_seed_patterns

__all__ = [
    "CARRIER_TRENDS_DATA",
    "load_seed_patterns",
]
