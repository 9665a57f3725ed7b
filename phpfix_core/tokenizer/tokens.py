"""
Tokens - mutable, index-addressed token buffer for one source file.

Indices are positions in the buffer: insert_at() and clear_range() shift
every token after the edit point, so callers that edit while walking the
buffer walk it from the end toward the start.
"""

from typing import Iterable, Iterator, List, Optional, Sequence

from .token import Token, TokenKind
from .php_lexer import get_lexer


BLOCK_PAIRS = {
    '(': ')',
    '[': ']',
    '{': '}',
    '#[': ']',
}


class Tokens:
    def __init__(self, tokens: Optional[Iterable[Token]] = None):
        self._tokens: List[Token] = list(tokens or [])

    @classmethod
    def from_code(cls, code: str) -> 'Tokens':
        """Tokenize a whole PHP file."""
        return cls(get_lexer().tokenize(code))

    @classmethod
    def from_fragment(cls, code: str) -> 'Tokens':
        """Tokenize bare PHP code that is not wrapped in <?php tags."""
        return cls(get_lexer().tokenize_fragment(code))

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def count(self) -> int:
        return len(self._tokens)

    def generate_code(self) -> str:
        return ''.join(token.content for token in self._tokens)

    def generate_partial_code(self, start: int, end: int) -> str:
        """Source text of tokens start..end, both inclusive."""
        return ''.join(token.content for token in self._tokens[start:end + 1])

    def is_token_kind_found(self, kind: TokenKind, content: Optional[str] = None) -> bool:
        for token in self._tokens:
            if token.kind != kind:
                continue
            if content is None or token.content.lower() == content:
                return True
        return False

    def get_next_meaningful_token(self, index: int) -> Optional[int]:
        """Index of the first token after index that is neither whitespace nor a comment."""
        for i in range(index + 1, len(self._tokens)):
            if self._tokens[i].is_meaningful():
                return i
        return None

    def get_prev_meaningful_token(self, index: int) -> Optional[int]:
        for i in range(index - 1, -1, -1):
            if self._tokens[i].is_meaningful():
                return i
        return None

    def get_line_ending(self, index: int) -> str:
        """
        Line ending of the nearest line break to the token at index.

        The closest break before index wins, then the closest one after it.
        Code without any line break is taken to use \\n.
        """
        candidates = list(range(index - 1, -1, -1)) + list(range(index + 1, len(self._tokens)))
        for i in candidates:
            content = self._tokens[i].content
            newline = content.rfind('\n') if i < index else content.find('\n')
            if newline == -1:
                continue
            if newline > 0 and content[newline - 1] == '\r':
                return '\r\n'
            if newline == 0 and i > 0 and self._tokens[i - 1].content.endswith('\r'):
                return '\r\n'
            return '\n'
        return '\n'

    def get_next_token_of_kind(self, index: int, contents: Sequence[str]) -> Optional[int]:
        """Index of the first punctuation token after index whose text is one of contents."""
        for i in range(index + 1, len(self._tokens)):
            token = self._tokens[i]
            if token.kind == TokenKind.PUNCTUATION and token.content in contents:
                return i
        return None

    def find_block_end(self, start: int) -> Optional[int]:
        """
        Index of the delimiter closing the block opened at start, or None.

        Only same-kind delimiters change the depth. Strings and comments are
        single tokens, so delimiters inside them are never counted.
        """
        opener = self._tokens[start].content
        closer = BLOCK_PAIRS.get(opener)
        if closer is None or self._tokens[start].kind != TokenKind.PUNCTUATION:
            return None

        # #[ and [ both close with ]
        openers = {key for key, value in BLOCK_PAIRS.items() if value == closer}
        depth = 0
        for i in range(start, len(self._tokens)):
            token = self._tokens[i]
            if token.kind != TokenKind.PUNCTUATION:
                continue
            if token.content in openers:
                depth += 1
            elif token.content == closer:
                depth -= 1
                if depth == 0:
                    return i
        return None

    def get_line_indent(self, index: int) -> str:
        """Leading whitespace of the physical line holding the token at index."""
        parts = []
        for i in range(index - 1, -1, -1):
            content = self._tokens[i].content
            newline = content.rfind('\n')
            if newline != -1:
                parts.append(content[newline + 1:])
                break
            parts.append(content)

        line = ''.join(reversed(parts))
        return line[:len(line) - len(line.lstrip(' \t'))]

    def clear_range(self, start: int, end: int):
        """Remove tokens start..end, both inclusive. An empty range (end < start) is a no-op."""
        if end < start:
            return
        del self._tokens[start:end + 1]

    def insert_at(self, index: int, tokens) -> int:
        """Insert one token or a sequence of tokens before index. Returns the number inserted."""
        if isinstance(tokens, Token):
            tokens = [tokens]
        tokens = list(tokens)
        self._tokens[index:index] = tokens
        return len(tokens)

    def __repr__(self) -> str:
        return f"Tokens({len(self._tokens)} tokens)"
