"""
PHP tokenizer built on tree-sitter-php.

tree-sitter produces a concrete syntax tree; the lexer flattens its leaves
into a lossless, kind-tagged token list. Bytes not covered by any leaf
(whitespace between tokens) become WHITESPACE tokens, so concatenating the
token contents always reproduces the input exactly.
"""

import re
import threading
from typing import Iterator, List, Optional, Tuple

import tree_sitter_php as ts_php
from tree_sitter import Language, Node, Parser

from .token import Token, TokenKind


# Node types emitted as a single token without descending into children
ATOMIC_NODE_TYPES = {
    'comment': TokenKind.COMMENT,
    'string': TokenKind.STRING,
    'encapsed_string': TokenKind.STRING,
    'heredoc': TokenKind.STRING,
    'nowdoc': TokenKind.STRING,
    'shell_command_expression': TokenKind.STRING,
    'variable_name': TokenKind.VARIABLE,
    'integer': TokenKind.NUMBER,
    'float': TokenKind.NUMBER,
    'php_tag': TokenKind.OPEN_TAG,
    'text': TokenKind.INLINE_HTML,
}

_WORD_RE = re.compile(r"[A-Za-z_\x80-\uffff][A-Za-z0-9_\x80-\uffff]*")


class PhpLexer:
    """
    Tokenizes PHP source.

    tokenize() expects a whole file (text outside <?php ... ?> is inline
    HTML); tokenize_fragment() expects bare PHP code such as a single
    parameter declaration.
    """

    def __init__(self):
        self._file_parser = Parser(Language(ts_php.language_php()))
        self._fragment_parser = Parser(Language(ts_php.language_php_only()))

    def tokenize(self, code: str) -> List[Token]:
        return self._tokenize(self._file_parser, code)

    def tokenize_fragment(self, code: str) -> List[Token]:
        return self._tokenize(self._fragment_parser, code)

    def _tokenize(self, parser: Parser, code: str) -> List[Token]:
        source = code.encode('utf-8')
        tree = parser.parse(source)

        tokens: List[Token] = []
        position = 0
        for node, kind in self._leaves(tree.root_node):
            start = max(node.start_byte, position)
            end = node.end_byte
            if end <= start:
                continue
            if start > position:
                self._append_text(tokens, source[position:start].decode('utf-8'), None)
            self._append_text(tokens, source[start:end].decode('utf-8'), kind, node)
            position = end

        if position < len(source):
            self._append_text(tokens, source[position:].decode('utf-8'), None)

        return tokens

    @staticmethod
    def _leaves(root: Node) -> Iterator[Tuple[Node, Optional[TokenKind]]]:
        """Yield leaf nodes in document order. Atomic node types count as leaves."""
        stack = [root]
        while stack:
            node = stack.pop()
            kind = ATOMIC_NODE_TYPES.get(node.type)
            if kind is not None or node.child_count == 0:
                yield node, kind
            else:
                stack.extend(reversed(node.children))

    def _append_text(self, tokens: List[Token], text: str, kind: Optional[TokenKind],
                     node: Optional[Node] = None):
        if kind is None:
            kind = self._classify(text, node)

        if kind == TokenKind.COMMENT and text.startswith(('//', '#')):
            # Line comments never own their line break
            comment = text.rstrip(' \t\r\n')
            self._append(tokens, Token(TokenKind.COMMENT, comment))
            self._append(tokens, Token(TokenKind.WHITESPACE, text[len(comment):]))
            return

        self._append(tokens, Token(kind, text))

    @staticmethod
    def _classify(text: str, node: Optional[Node]) -> TokenKind:
        if text.isspace():
            return TokenKind.WHITESPACE
        if text == '?>':
            return TokenKind.CLOSE_TAG
        if node is not None and node.is_named and node.type != 'ERROR':
            return TokenKind.IDENTIFIER
        if _WORD_RE.fullmatch(text):
            # Anonymous word leaves are grammar keywords (function, public, new, ...)
            return TokenKind.KEYWORD if node is not None else TokenKind.IDENTIFIER
        return TokenKind.PUNCTUATION

    @staticmethod
    def _append(tokens: List[Token], token: Token):
        if not token.content:
            return
        if token.is_whitespace() and tokens and tokens[-1].is_whitespace():
            tokens[-1] = Token(TokenKind.WHITESPACE, tokens[-1].content + token.content)
            return
        tokens.append(token)


_local = threading.local()


def get_lexer() -> PhpLexer:
    """Get the lexer for the current thread. tree-sitter parsers are not shared between threads."""
    lexer = getattr(_local, 'lexer', None)
    if lexer is None:
        lexer = PhpLexer()
        _local.lexer = lexer
    return lexer
