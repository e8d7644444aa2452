from typing import List

from .tokens import Dimension, Token


def format_tree(token: Token, text: str, indent: str = "  ") -> str:
    """
    Render the derivation of a token, one node per line.

    Examples
    --------
    >>> print(format_tree(token, "خمسة و عشرون"))
    integer 21..99 (خمسة و عشرون)
      integer 5 (خمسة)
        regex (خمسة)
      regex (و)
      integer (20..90) (عشرون)
        regex (عشرون)
    """
    lines: List[str] = []

    def visit(node: Token, depth: int):
        if node.dim == Dimension.REGEX_MATCH:
            name = "regex"
        else:
            name = node.rule or f"<{node.dim}>"
        lines.append(f"{indent * depth}{name} ({node.body(text)})")
        for child in node.children:
            visit(child, depth + 1)

    visit(token, 0)
    return "\n".join(lines)
