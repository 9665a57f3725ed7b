"""
Token - atomic lexical unit of a PHP source file.
"""

from enum import Enum


class TokenKind(Enum):
    OPEN_TAG = "open_tag"
    CLOSE_TAG = "close_tag"
    INLINE_HTML = "inline_html"
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    VARIABLE = "variable"
    STRING = "string"
    NUMBER = "number"
    PUNCTUATION = "punctuation"


class Token:
    """A kind-tagged piece of source text. Tokens compare by kind and content."""

    __slots__ = ('kind', 'content')

    def __init__(self, kind: TokenKind, content: str):
        if not isinstance(kind, TokenKind):
            raise TypeError(f"kind must be TokenKind enum, got {type(kind)}")
        self.kind = kind
        self.content = content

    def is_whitespace(self) -> bool:
        return self.kind == TokenKind.WHITESPACE

    def is_comment(self) -> bool:
        return self.kind == TokenKind.COMMENT

    def is_line_comment(self) -> bool:
        """True for // and # comments, which run to the end of the line."""
        return self.kind == TokenKind.COMMENT and self.content.startswith(('//', '#'))

    def is_meaningful(self) -> bool:
        return self.kind not in (TokenKind.WHITESPACE, TokenKind.COMMENT)

    def is_keyword(self, keyword: str) -> bool:
        # PHP keywords are case-insensitive
        return self.kind == TokenKind.KEYWORD and self.content.lower() == keyword

    def equals(self, content: str) -> bool:
        """True for a punctuation token with exactly this text."""
        return self.kind == TokenKind.PUNCTUATION and self.content == content

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.content == other.content

    def __hash__(self) -> int:
        return hash((self.kind, self.content))

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.content!r})"
