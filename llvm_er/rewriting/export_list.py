"""
Export list loading.

An export list is a plain text file with one symbol per line:

    # exported entry points
    foo
    @bar
    // legacy
    ; also a comment
    foo

Blank lines and lines starting with `//`, `#` or `;` are ignored, a single
leading `@` is stripped, and duplicates are dropped keeping the first
occurrence. The example above yields ["foo", "bar"].
"""

from pathlib import Path
from typing import List, Optional, Union


COMMENT_PREFIXES = ("//", "#", ";")


def _normalize(line: str) -> Optional[str]:
    """Return the symbol on a list line, or None for blanks and comments."""
    trimmed = line.strip()
    if not trimmed:
        return None

    if trimmed.startswith(COMMENT_PREFIXES):
        return None

    if trimmed[0] == '@':
        trimmed = trimmed[1:]

    return trimmed or None


def parse_export_list(text: str) -> List[str]:
    """Parse export list text into ordered, deduplicated symbol names."""
    symbols = []
    seen = set()

    for line in text.splitlines():
        symbol = _normalize(line)
        if symbol is None or symbol in seen:
            continue
        seen.add(symbol)
        symbols.append(symbol)

    return symbols


def load_export_list(path: Union[str, Path, None]) -> List[str]:
    """
    Load an export list file.

    Args:
        path: Path to the export list

    Returns:
        Symbol names in first-seen order

    Raises:
        ValueError: If no path is given
        OSError: If the file cannot be read
    """
    if path is None or not str(path).strip():
        raise ValueError("Export list path is required.")

    content = Path(path).read_text(encoding='utf-8-sig')
    return parse_export_list(content)
