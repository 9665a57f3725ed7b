from enum import Enum
from typing import Any, Dict, List, Optional

from .base_fixer import BaseFixer
from .constructor_multiline import ConstructorMultilineFixer
from ..whitespaces_config import WhitespacesConfig


class FixerType(Enum):
    CONSTRUCTOR_MULTILINE = ConstructorMultilineFixer


class FixerFactory:
    @staticmethod
    def from_id(fixer_id: str, whitespaces: Optional[WhitespacesConfig] = None) -> BaseFixer:
        for fixer_type in FixerType:
            if fixer_type.value.get_id() == fixer_id:
                return fixer_type.value(whitespaces)
        raise ValueError(f"Unsupported fixer: {fixer_id}")

    @staticmethod
    def create_all(whitespaces: Optional[WhitespacesConfig] = None) -> List[BaseFixer]:
        return [fixer_type.value(whitespaces) for fixer_type in FixerType]

    @staticmethod
    def get_available_fixers() -> List[Dict[str, Any]]:
        return [
            {
                'id': fixer_type.value.get_id(),
                'name': fixer_type.value.get_name()
            }
            for fixer_type in FixerType
        ]
