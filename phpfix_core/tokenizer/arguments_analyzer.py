from typing import List, Tuple

from .tokens import Tokens, BLOCK_PAIRS


class ArgumentsAnalyzer:
    """Splits the content of a parenthesised list into its top-level arguments."""

    @staticmethod
    def get_arguments(tokens: Tokens, open_index: int, close_index: int) -> List[Tuple[int, int]]:
        """
        Return (start, end) index pairs, both inclusive, one per top-level argument.

        Separators nested inside (), [], {} or #[] do not split. The separator
        itself belongs to neither neighbour. A trailing separator right before
        the closing parenthesis does not start a new argument, so the last
        argument then runs up to close_index - 1. An empty list, or one holding
        only whitespace and comments, has no arguments.
        """
        if tokens.get_next_meaningful_token(open_index) == close_index:
            return []

        arguments = []
        argument_start = open_index + 1
        index = open_index + 1
        while index < close_index:
            token = tokens[index]

            if token.content in BLOCK_PAIRS and token.is_meaningful():
                block_end = tokens.find_block_end(index)
                if block_end is not None and block_end < close_index:
                    index = block_end + 1
                    continue

            if token.equals(','):
                if tokens.get_next_meaningful_token(index) == close_index:
                    # trailing separator
                    break
                arguments.append((argument_start, index - 1))
                argument_start = index + 1

            index += 1

        arguments.append((argument_start, close_index - 1))
        return arguments

    @staticmethod
    def count_arguments(tokens: Tokens, open_index: int, close_index: int) -> int:
        return len(ArgumentsAnalyzer.get_arguments(tokens, open_index, close_index))
