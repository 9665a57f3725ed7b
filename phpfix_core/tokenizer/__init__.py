"""
Tokenizer package - PHP tokens, the token buffer and token-level analyzers.
"""

from .token import Token, TokenKind
from .tokens import Tokens
from .arguments_analyzer import ArgumentsAnalyzer

__all__ = [
    'Token',
    'TokenKind',
    'Tokens',
    'ArgumentsAnalyzer'
]
