"""
LayoutEmitter - writes a parameter list back one parameter per line.
"""

from typing import List

from ..tokenizer.token import Token, TokenKind
from ..tokenizer.tokens import Tokens
from ..whitespaces_config import WhitespacesConfig
from .argument_segmenter import SEPARATOR
from .. import logger


class LayoutEmitter:
    def __init__(self, whitespaces: WhitespacesConfig):
        self.whitespaces = whitespaces

    def emit(self, tokens: Tokens, open_index: int, close_index: int, fragments: List[str]) -> int:
        """
        Replace everything between the parentheses with the fragments, one per line.

            (                  <- nothing follows the opening parenthesis
                $a,
                $b, // note    <- no separator is added after a line comment
                $c             <- no separator before the closing line
            )

        Parameter lines are indented one unit deeper than the line holding the
        opening parenthesis; the closing parenthesis goes back to that line's
        indentation. Line breaks use the configured line ending, or the one
        nearest to the opening parenthesis when none is configured. Returns
        the new index of the closing parenthesis.
        """
        base_indent = tokens.get_line_indent(open_index)
        line_ending = self.whitespaces.line_ending or tokens.get_line_ending(open_index)
        parameter_break = line_ending + base_indent + self.whitespaces.indent
        closing_break = line_ending + base_indent

        new_tokens = [Token(TokenKind.WHITESPACE, parameter_break)]
        previous = None
        for fragment in fragments:
            fragment_tokens = self._tokenize_fragment(fragment)
            if previous is not None:
                if not previous[-1].is_line_comment():
                    new_tokens.append(Token(TokenKind.PUNCTUATION, SEPARATOR))
                new_tokens.append(Token(TokenKind.WHITESPACE, parameter_break))
            new_tokens.extend(fragment_tokens)
            previous = fragment_tokens
        new_tokens.append(Token(TokenKind.WHITESPACE, closing_break))

        tokens.clear_range(open_index + 1, close_index - 1)
        inserted = tokens.insert_at(open_index + 1, new_tokens)
        return open_index + 1 + inserted

    @staticmethod
    def _tokenize_fragment(fragment: str) -> List[Token]:
        fragment_tokens = list(Tokens.from_fragment(fragment))

        # A fragment that does not survive re-tokenizing is a segmenter defect
        logger.assert_true(
            fragment_tokens and ''.join(token.content for token in fragment_tokens) == fragment,
            f"Parameter fragment did not re-tokenize losslessly: {fragment!r}"
        )
        logger.assert_true(
            not any(token.is_line_comment() for token in fragment_tokens[:-1]),
            f"Parameter fragment has a line comment before its end: {fragment!r}"
        )
        return fragment_tokens
