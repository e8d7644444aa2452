from typing import Dict, Iterable, List, Tuple

from .tokens import Dimension, Token


def sort_key(token: Token) -> Tuple:
    """
    Ranking of competing tokens: longest span first, then earliest registered
    rule, then rule name, start offset and payload so that ties are always
    broken the same way.
    """
    return (
        -token.length,
        token.rule_index,
        token.rule or "",
        token.start,
        repr(token.value),
    )


def best(tokens: Iterable[Token]) -> Token:
    """Return the winner among tokens competing for overlapping spans."""
    return min(tokens, key=sort_key)


def select(tokens: Iterable[Token]) -> List[Token]:
    """
    Resolve overlapping tokens.

    For each dimension, tokens are accepted greedily following `sort_key`; a token
    overlapping an already accepted token of the same dimension is discarded.
    Tokens of different dimensions are never compared.

    Parameters
    ----------
    tokens: Iterable[Token]
        Candidate tokens

    Returns
    -------
    List[Token]
        Non-overlapping (per dimension) tokens, by ascending start position
    """
    by_dim: Dict[Dimension, List[Token]] = {}
    for token in tokens:
        by_dim.setdefault(token.dim, []).append(token)

    selected: List[Token] = []
    for dim_tokens in by_dim.values():
        accepted: List[Token] = []
        for token in sorted(dim_tokens, key=sort_key):
            if not any(token.overlaps(other) for other in accepted):
                accepted.append(token)
        selected.extend(accepted)

    return sorted(selected, key=lambda t: (t.start, t.end, str(t.dim)))
