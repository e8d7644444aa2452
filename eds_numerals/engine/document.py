from typing import Iterator

import regex

ADJACENT_SEPARATORS = frozenset(" \t-")

PatternError = regex.error

REGEX_FLAGS = regex.IGNORECASE | regex.UNICODE


def compile_pattern(pattern: str) -> "regex.Pattern":
    return regex.compile(pattern, REGEX_FLAGS)


def _char_class(c: str) -> str:
    # caseless letters (Arabic) are their own class: "و" attached to a word is
    # a boundary, as are any two different punctuation marks
    if c.isdigit():
        return "digit"
    if c.islower() or c.isupper():
        return "cased"
    return c


class Document:
    """
    Read-only view over the text being parsed.

    The document answers the two positional questions the matcher asks: whether
    two positions are adjacent (only separators between them), and whether a
    range can be a match (it does not cut through a word or a number). It is
    also the regex provider of the engine.

    Parameters
    ----------
    text: str
        The raw input text
    """

    def __init__(self, text: str):
        self.text = text
        # first position at or after each index that is not a separator
        self._next_non_separator = [len(text)] * (len(text) + 1)
        for i in range(len(text) - 1, -1, -1):
            if text[i] in ADJACENT_SEPARATORS:
                self._next_non_separator[i] = self._next_non_separator[i + 1]
            else:
                self._next_non_separator[i] = i

    def __len__(self):
        return len(self.text)

    def skip_separators(self, position: int) -> int:
        if position >= len(self.text):
            return len(self.text)
        return self._next_non_separator[position]

    def is_adjacent(self, position: int, start: int) -> bool:
        return start >= position and self.skip_separators(position) >= start

    def is_range_valid(self, start: int, end: int) -> bool:
        text = self.text
        if start > 0:
            if _char_class(text[start - 1]) == _char_class(text[start]):
                return False
        if end < len(text):
            if _char_class(text[end]) == _char_class(text[end - 1]):
                return False
        return True

    def find_all(self, compiled: "regex.Pattern") -> Iterator["regex.Match"]:
        """
        Yield the non-empty matches of `compiled` anywhere in the text, left to
        right, keeping only those whose range is valid.
        """
        for match in compiled.finditer(self.text):
            if match.end() > match.start() and self.is_range_valid(*match.span()):
                yield match

    def lookup(
        self, compiled: "regex.Pattern", position: int
    ) -> Iterator["regex.Match"]:
        """
        Yield the matches of `compiled` that start adjacent to `position`.
        Separators may themselves be matched, e.g. a `-` pattern.
        """
        last = min(self.skip_separators(position), len(self.text) - 1)
        for start in range(position, last + 1):
            match = compiled.match(self.text, start)
            if match is None or match.end() == match.start():
                continue
            if self.is_range_valid(*match.span()):
                yield match
