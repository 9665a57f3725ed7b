"""
Abstract base class for fixers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..tokenizer.tokens import Tokens
from ..whitespaces_config import WhitespacesConfig
from .fixer_definition import FixerDefinition


class BaseFixer(ABC):
    """
    Abstract base class for fixers.

    Fixers are token-level transformations that:
    1. Decide from a quick scan whether a file can need them (is_candidate)
    2. Rewrite the token buffer in place (apply_fix)

    Fixers never read or write files; FixProcessor owns all I/O.
    """

    def __init__(self, whitespaces: Optional[WhitespacesConfig] = None):
        self.whitespaces = whitespaces or WhitespacesConfig()

    @staticmethod
    @abstractmethod
    def get_id() -> str:
        """IMPORTANT: Stable identifier used in APIs and phpfix.json. Do not change once set."""
        pass

    @staticmethod
    @abstractmethod
    def get_name() -> str:
        """Human-readable name for UI."""
        pass

    @abstractmethod
    def get_definition(self) -> FixerDefinition:
        pass

    @abstractmethod
    def is_candidate(self, tokens: Tokens) -> bool:
        """Cheap check whether apply_fix can change anything in tokens."""
        pass

    def is_risky(self) -> bool:
        """Risky fixers may change the behaviour of the code, not only its layout."""
        return False

    def supports(self, file_path: Path) -> bool:
        return Path(file_path).suffix.lower() == '.php'

    def fix(self, file_path: Path, tokens: Tokens) -> Tokens:
        if self.is_candidate(tokens):
            self.apply_fix(file_path, tokens)
        return tokens

    @abstractmethod
    def apply_fix(self, file_path: Path, tokens: Tokens) -> None:
        pass

    def get_metadata(self) -> Dict[str, Any]:
        return {
            'id': self.get_id(),
            'name': self.get_name(),
            'risky': self.is_risky(),
            'definition': self.get_definition().to_dict()
        }
