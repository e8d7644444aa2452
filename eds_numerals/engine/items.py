from typing import (
    Any,
    Callable,
    FrozenSet,
    Iterable,
    List,
    NamedTuple,
    Sequence,
    Union,
)

from .document import Document, PatternError, compile_pattern
from .tokens import Dimension, GroupMatch, Token


class Regex(NamedTuple):
    """Matches the raw text."""

    pattern: str
    compiled: Any


class Predicate(NamedTuple):
    """Matches a previously produced token of kind `dim` satisfying `fn`."""

    dim: Dimension
    fn: Callable[[Any], bool]
    description: str = ""


class OneOf(NamedTuple):
    """Matches a previously produced token whose value is one of `values`."""

    dim: Dimension
    values: FrozenSet[float]


PatternItem = Union[Regex, Predicate, OneOf]

PATTERN_ITEM_TYPES = (Regex, Predicate, OneOf)


def regex(pattern: str) -> Regex:
    try:
        compiled = compile_pattern(pattern)
    except PatternError:
        # reported when the rule set is validated
        compiled = None
    return Regex(pattern, compiled)


def _as_dimension(dim):
    try:
        return Dimension(dim)
    except ValueError:
        # unknown dimensions are reported when the rule set is validated
        return dim


def dimension(dim: Dimension) -> Predicate:
    return Predicate(_as_dimension(dim), lambda value: True, str(dim))


def predicate(
    dim: Dimension, fn: Callable[[Any], bool], description: str = ""
) -> Predicate:
    return Predicate(_as_dimension(dim), fn, description)


def one_of(values: Iterable[float], dim: Dimension = Dimension.NUMERAL) -> OneOf:
    return OneOf(_as_dimension(dim), frozenset(float(v) for v in values))


class Stash:
    """
    Working set of produced tokens, indexed by start position.

    Iteration order is deterministic: by start offset, then by insertion order.
    """

    def __init__(self, tokens: Iterable[Token] = ()):
        self._by_start = {}
        self._keys = {}
        for token in tokens:
            self.add(token)

    def __len__(self):
        return len(self._keys)

    def __contains__(self, token: Token):
        return token.key in self._keys

    def __iter__(self):
        for start in sorted(self._by_start):
            yield from self._by_start[start]

    def add(self, token: Token) -> bool:
        """
        Add `token` unless an identical token (same kind, range and payload) is
        already there. An identical token only takes the place of the stored one
        when its rule has a strictly higher priority, so that the provenance of
        a token does not depend on the order in which it was found. Tokens
        covering the same range with different payloads are all kept.

        Returns
        -------
        bool
            Whether the token was added
        """
        existing = self._keys.get(token.key)
        if existing is not None:
            if token.rule_index < existing.rule_index:
                self._keys[token.key] = token
                tokens = self._by_start[token.start]
                tokens[next(i for i, t in enumerate(tokens) if t is existing)] = token
            return False
        self._keys[token.key] = token
        self._by_start.setdefault(token.start, []).append(token)
        return True

    def starting_at(self, start: int) -> Sequence[Token]:
        return self._by_start.get(start, ())

    def starting_from(self, document: Document, position: int) -> Iterable[Token]:
        """Tokens whose start is adjacent to `position`."""
        end = document.skip_separators(position)
        for start in range(position, end + 1):
            yield from self.starting_at(start)


def _accepts(item: PatternItem, token: Token) -> bool:
    if token.dim != item.dim:
        return False
    if isinstance(item, OneOf):
        return float(token.value.value) in item.values
    return bool(item.fn(token.value))


def match_item(
    item: PatternItem,
    document: Document,
    stash: Stash,
    position: int,
    first: bool,
) -> List[Token]:
    """
    Bind a single pattern item.

    Parameters
    ----------
    item: PatternItem
        The item to bind
    document: Document
        The text being parsed
    stash: Stash
        Tokens produced so far
    position: int
        End of the previous binding (ignored when `first` is True)
    first: bool
        Whether the item is the first one of its rule, in which case it may
        bind anywhere in the text

    Returns
    -------
    List[Token]
        Every possible binding, in text order. An empty list means no match.
    """
    if isinstance(item, Regex):
        if first:
            matches = document.find_all(item.compiled)
        else:
            matches = document.lookup(item.compiled, position)
        return [
            Token(
                Dimension.REGEX_MATCH,
                match.start(),
                match.end(),
                GroupMatch(text=match.group(), groups=match.groups(default="")),
            )
            for match in matches
        ]
    elif isinstance(item, (Predicate, OneOf)):
        if first:
            candidates = iter(stash)
        else:
            candidates = stash.starting_from(document, position)
        return [token for token in candidates if _accepts(item, token)]
    raise TypeError(f"Unknown pattern item: {item!r}")
