import json
from pathlib import Path
from typing import Any, Dict, List, Optional


ALLOWED_INDENTS = ('  ', '    ', '\t')
ALLOWED_LINE_ENDINGS = ('\n', '\r\n')

CONFIG_FILENAME = "phpfix.json"


class WhitespacesConfig:
    """
    Indentation unit and line ending used when fixers emit new layout.

    A line_ending of None means "whatever the file already uses": fixers
    take it from the line break nearest to the code they rewrite.
    """

    def __init__(self, indent: str = '    ', line_ending: Optional[str] = None):
        if indent not in ALLOWED_INDENTS:
            raise ValueError(f"Invalid indent {indent!r}. Valid options: {list(ALLOWED_INDENTS)}")
        if line_ending is not None and line_ending not in ALLOWED_LINE_ENDINGS:
            raise ValueError(
                f"Invalid line ending {line_ending!r}. Valid options: {list(ALLOWED_LINE_ENDINGS)}"
            )
        self.indent = indent
        self.line_ending = line_ending

    def __eq__(self, other) -> bool:
        if not isinstance(other, WhitespacesConfig):
            return NotImplemented
        return self.indent == other.indent and self.line_ending == other.line_ending

    def __repr__(self) -> str:
        return f"WhitespacesConfig(indent={self.indent!r}, line_ending={self.line_ending!r})"


class ConfigStore:
    """
    Project configuration loaded once from phpfix.json.

    The file is looked up in the current working directory unless a path is
    given with reset(). It is optional, and every key falls back to its default:
        {"indent": "    ", "line_ending": null, "fixers": null}
    A null line_ending keeps each file's own line ending; null fixers runs
    every registered fixer.
    """
    _instance = None
    _config: Dict[str, Any] = {}
    _config_path: Optional[Path] = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._load_config()
            cls._instance = instance
        return cls._instance

    @classmethod
    def reset(cls, config_path: Optional[Path] = None):
        """Drop the cached instance and read config_path (default: ./phpfix.json) on next use."""
        cls._instance = None
        cls._config_path = Path(config_path) if config_path is not None else None

    def _load_config(self):
        config_path = self._config_path or Path.cwd() / CONFIG_FILENAME
        self._config = {}
        if not config_path.exists():
            return

        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Malformed {config_path.name}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"{config_path.name} must contain a JSON object")
        self._config = data

    @property
    def whitespaces(self) -> WhitespacesConfig:
        return WhitespacesConfig(
            indent=self._config.get('indent', '    '),
            line_ending=self._config.get('line_ending')
        )

    @property
    def fixer_ids(self) -> Optional[List[str]]:
        """Fixer ids enabled by the config file, or None for all registered fixers."""
        return self._config.get('fixers')
