"""
ArgumentSegmenter - renders each parameter of a parameter list as one
normalized line of text.
"""

from typing import List, Optional, Tuple

from ..tokenizer.token import Token
from ..tokenizer.tokens import Tokens
from .. import logger


SEPARATOR = ','


class ArgumentSegmenter:
    """
    Decides which tokens belong to which parameter and renders them.

    The argument splitter cuts strictly at separators, so a line comment
    written after "$a," lands at the start of the next parameter. Such a
    comment is moved back to the parameter it follows:

        __construct($a, // note        ->   "$a, // note"
                    $b)                     "$b"
    """

    def segment(self, tokens: Tokens, arguments: List[Tuple[int, int]]) -> Optional[List[str]]:
        """
        Return one fragment per parameter, or None when the list must be left alone.

        None means either fewer than two parameters, or a line comment that
        cannot be kept at the end of a line (it would comment out the code
        joined after it).
        """
        if len(arguments) <= 1:
            return None

        bounds = [list(pair) for pair in arguments]
        last = len(bounds) - 1
        fragments = []
        for i in range(len(bounds)):
            if i < last:
                self._attach_leading_comment(tokens, bounds[i], bounds[i + 1])
            fragment = self._render(tokens, bounds[i][0], bounds[i][1], is_last=(i == last))
            if fragment is None:
                return None
            fragments.append(fragment)

        return fragments

    @staticmethod
    def _attach_leading_comment(tokens: Tokens, current: List[int], following: List[int]):
        """If the following parameter opens with a line comment, end the current one at it."""
        start, end = following
        index = start
        while index <= end and tokens[index].is_whitespace():
            index += 1
        if index > end or not tokens[index].is_line_comment():
            return

        current[1] = index

        index += 1
        while index <= end and tokens[index].is_whitespace():
            index += 1
        if index <= end and tokens[index].equals(SEPARATOR):
            index += 1
        following[0] = index

    def _render(self, tokens: Tokens, start: int, end: int, is_last: bool) -> Optional[str]:
        body = [tokens[i] for i in range(start, end + 1)]

        comment = None
        self._strip_trailing_whitespace(body)
        if body and body[-1].is_line_comment():
            comment = body.pop().content
            self._strip_trailing_whitespace(body)

        if body and body[-1].equals(SEPARATOR):
            body.pop()
            self._strip_trailing_whitespace(body)
        while body and body[0].is_whitespace():
            body.pop(0)

        if not body:
            logger.debug(f"Empty parameter at tokens {start}..{end}, leaving list untouched")
            return None
        if any(token.is_line_comment() for token in body):
            logger.debug(f"Line comment inside parameter at tokens {start}..{end}, leaving list untouched")
            return None

        code = self._normalize(body)
        if comment is None:
            return code
        separator = '' if is_last else SEPARATOR
        return f"{code}{separator} {comment}"

    @staticmethod
    def _normalize(body: List[Token]) -> str:
        """Collapse each whitespace run to one space. Other token text is kept verbatim."""
        parts = []
        for token in body:
            if token.is_whitespace():
                if parts and parts[-1] == ' ':
                    continue
                parts.append(' ')
            else:
                parts.append(token.content)
        return ''.join(parts)

    @staticmethod
    def _strip_trailing_whitespace(body: List[Token]):
        while body and body[-1].is_whitespace():
            body.pop()
