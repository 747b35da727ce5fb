"""
Shared infrastructure utilities.
"""

from ._registry import Registry

__all__ = [
    Registry.__name__,
]
