"""
Define-line rewriting.

Given a line already known to define a requested symbol, drops the
linkage and visibility keywords that precede the symbol token so the
function becomes externally visible:

    define internal hidden void @foo() #0 {
    ->
    define void @foo() #0 {

Everything else on the line (return type, calling convention, attributes,
sections, comdats) is kept as-is. Tokens at or after the symbol token are
never touched.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .symbols import extract_defined_symbol, extract_symbol_from_token, is_define_line


LINKAGE_TOKENS = frozenset({
    "internal",
    "private",
    "linkonce",
    "linkonce_odr",
    "weak",
    "weak_odr",
    "available_externally",
})

VISIBILITY_TOKENS = frozenset({
    "hidden",
    "protected",
})


@dataclass
class DefineLine:
    """Token-level view of a single `define` line."""
    indent: str
    tokens: List[str] = field(default_factory=list)
    symbol: Optional[str] = None

    def find_symbol_token(self, symbol: str) -> int:
        """Index of the first token defining `symbol`, or -1."""
        for index, token in enumerate(self.tokens):
            if extract_symbol_from_token(token) == symbol:
                return index
        return -1

    def render(self, tokens: Optional[List[str]] = None) -> str:
        """Reassemble the line with single spaces between tokens."""
        if tokens is None:
            tokens = self.tokens
        return self.indent + " ".join(tokens)


def is_removable_token(token: str) -> bool:
    """Exact, case-sensitive keyword membership check."""
    return token in LINKAGE_TOKENS or token in VISIBILITY_TOKENS


def parse_define_line(line: str) -> Optional[DefineLine]:
    """
    Split a define line into indentation and tokens.

    Returns:
        DefineLine, or None if the line does not start with `define`
    """
    trimmed = line.lstrip()
    if not is_define_line(trimmed):
        return None

    indent = line[:len(line) - len(trimmed)]
    return DefineLine(
        indent=indent,
        tokens=trimmed.split(),
        symbol=extract_defined_symbol(line),
    )


def rewrite_define_line(line: str, target_symbol: str) -> Optional[str]:
    """
    Strip linkage/visibility keywords in front of `target_symbol`.

    Args:
        line: Physical line of IR text
        target_symbol: Symbol name (without `@`) the line should define

    Returns:
        The rewritten line, or None when nothing was removed
    """
    parsed = parse_define_line(line)
    if parsed is None or not parsed.tokens:
        return None

    # Re-derived from the tokens, independent of parsed.symbol
    symbol_index = parsed.find_symbol_token(target_symbol)
    if symbol_index < 0:
        return None

    kept = []
    changed = False
    for index, token in enumerate(parsed.tokens):
        if index < symbol_index and is_removable_token(token):
            changed = True
            continue
        kept.append(token)

    if not changed:
        return None

    return parsed.render(kept)
