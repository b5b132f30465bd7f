"""
Symbol extraction for textual LLVM IR.

Locates and decodes `@`-prefixed global identifiers, either inside a
`define` line or inside a single whitespace-delimited token.

Both LLVM identifier spellings are recognized:
- bare:   @foo, @llvm.memcpy.p0.p0.i64, @_Z3fooi, @$tmp
- quoted: @"my symbol", @"\\01_foo"

Quoted names are taken verbatim up to the closing quote; backslash
escapes are not decoded.
"""

import re
from typing import Optional


DEFINE_KEYWORD = "define"

# `define` keyword followed by at least one whitespace character
_DEFINE_PATTERN = re.compile(r'define\s')

_SYMBOL_PUNCTUATION = "_.$"


def is_define_line(trimmed: str) -> bool:
    """Check whether already left-trimmed text starts with the `define` keyword."""
    return _DEFINE_PATTERN.match(trimmed) is not None


def extract_defined_symbol(line: str) -> Optional[str]:
    """
    Extract the symbol a `define` line introduces.

    Args:
        line: One physical line of IR text

    Returns:
        The symbol name without the sigil, or None if the line is not a
        define line or carries no readable symbol
    """
    if not line or line.isspace():
        return None

    trimmed = line.lstrip()
    if not is_define_line(trimmed):
        return None

    at_index = trimmed.find('@')
    if at_index < 0:
        return None

    return _read_symbol(trimmed, at_index)


def extract_symbol_from_token(token: str) -> Optional[str]:
    """
    Extract the symbol carried by a single token.

    The sigil does not have to lead the token, so prefixed spellings
    such as `(@foo` are accepted.
    """
    if not token:
        return None

    at_index = token.find('@')
    if at_index < 0:
        return None

    return _read_symbol(token, at_index)


def _read_symbol(text: str, at_index: int) -> Optional[str]:
    """Read the identifier that starts at the `@` found at `at_index`."""
    start = at_index + 1
    if start >= len(text):
        return None

    if text[start] == '"':
        end_quote = text.find('"', start + 1)
        if end_quote < 0:
            return None
        symbol = text[start + 1:end_quote]
        return symbol or None

    end = start
    while end < len(text) and _is_symbol_char(text[end]):
        end += 1

    if end == start:
        return None
    return text[start:end]


def _is_symbol_char(ch: str) -> bool:
    """Letters, decimal digits, '_', '.' and '$'."""
    # Superscripts and fractions are numeric but not decimal
    return ch.isalpha() or ch.isdecimal() or ch in _SYMBOL_PUNCTUATION
