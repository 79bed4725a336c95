"""
Models package for the Hanzi knowledge base.
"""

from hanzi_backend.database import Base
from .character import Character

__all__ = [
    'Base',
    'Character',
]
