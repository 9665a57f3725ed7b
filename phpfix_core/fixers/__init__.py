"""
Fixers package - token-level code transformations.
"""

from .base_fixer import BaseFixer
from .constructor_multiline import ConstructorMultilineFixer
from .fixer_factory import FixerFactory

__all__ = [
    'BaseFixer',
    'ConstructorMultilineFixer',
    'FixerFactory'
]
