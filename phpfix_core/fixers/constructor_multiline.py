"""
ConstructorMultilineFixer - puts constructor parameters on separate lines.
"""

from pathlib import Path
from typing import Optional

from .base_fixer import BaseFixer
from .fixer_definition import CodeSample, FixerDefinition
from .argument_segmenter import ArgumentSegmenter
from .layout_emitter import LayoutEmitter
from ..tokenizer.token import TokenKind
from ..tokenizer.tokens import Tokens
from ..tokenizer.arguments_analyzer import ArgumentsAnalyzer
from ..whitespaces_config import WhitespacesConfig
from .. import logger


CONSTRUCTOR_NAME = '__construct'


class ConstructorMultilineFixer(BaseFixer):
    """
    Rewrites every constructor with two or more parameters to one parameter
    per line. Constructors with zero or one parameter are left as they are.
    """

    def __init__(self, whitespaces: Optional[WhitespacesConfig] = None):
        super().__init__(whitespaces)
        self.segmenter = ArgumentSegmenter()
        self.emitter = LayoutEmitter(self.whitespaces)

    @staticmethod
    def get_id() -> str:
        """IMPORTANT: Stable identifier used in APIs and phpfix.json. Do not change once set."""
        return 'constructor_multiline'

    @staticmethod
    def get_name() -> str:
        return 'Constructor Multiline'

    def get_definition(self) -> FixerDefinition:
        return FixerDefinition(
            'Constructor arguments should be on separate lines if there are multiple arguments.',
            [
                CodeSample(
                    '<?php\n'
                    'class Test {\n'
                    '    public function __construct($arg1, $arg2, $arg3) {\n'
                    '        // ...\n'
                    '    }\n'
                    '}\n'
                ),
                CodeSample(
                    '<?php\n'
                    'class Test {\n'
                    '    public function __construct(\n'
                    '        $arg1,\n'
                    '        $arg2,\n'
                    '        $arg3\n'
                    '    ) {\n'
                    '        // ...\n'
                    '    }\n'
                    '}\n'
                ),
            ]
        )

    def is_candidate(self, tokens: Tokens) -> bool:
        return tokens.is_token_kind_found(TokenKind.KEYWORD, 'function')

    def apply(self, tokens: Tokens) -> Tokens:
        """Fix a token buffer that does not come from a file."""
        self.apply_fix(None, tokens)
        return tokens

    def apply_fix(self, file_path: Optional[Path], tokens: Tokens) -> None:
        # Walk backwards: a rewrite only shifts tokens after its own
        # parenthesis, so every index still to be visited stays valid.
        for index in range(len(tokens) - 1, -1, -1):
            if not tokens[index].is_keyword('function'):
                continue

            name_index = tokens.get_next_meaningful_token(index)
            if name_index is None or tokens[name_index].content.lower() != CONSTRUCTOR_NAME:
                continue

            open_index = tokens.get_next_token_of_kind(name_index, ['('])
            if open_index is None:
                logger.debug(f"{file_path}: constructor without parameter list at token {index}")
                continue

            close_index = tokens.find_block_end(open_index)
            if close_index is None:
                logger.debug(f"{file_path}: unclosed constructor parameter list at token {open_index}")
                continue

            arguments = ArgumentsAnalyzer.get_arguments(tokens, open_index, close_index)
            if len(arguments) <= 1:
                continue

            fragments = self.segmenter.segment(tokens, arguments)
            if fragments is None:
                continue

            self.emitter.emit(tokens, open_index, close_index, fragments)
            logger.debug(f"{file_path}: reflowed constructor with {len(fragments)} parameters")
