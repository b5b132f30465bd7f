"""
LLVM IR export rewriting.

Key Components:
- symbols: `@name` / `@"name"` extraction from define lines and tokens
- define_line: removal of linkage/visibility keywords on a define line
- engine: whole-document rewrite with matched/missing reporting
- export_list: loader for newline-delimited export list files

Usage:
    from llvm_er.rewriting import ExportRewriter, load_export_list

    exports = load_export_list("exports.txt")
    result = ExportRewriter().rewrite(ir_text, exports)
"""

from .symbols import (
    extract_defined_symbol,
    extract_symbol_from_token,
    is_define_line,
)

from .define_line import (
    DefineLine,
    LINKAGE_TOKENS,
    VISIBILITY_TOKENS,
    is_removable_token,
    parse_define_line,
    rewrite_define_line,
)

from .engine import (
    ExportRewriter,
    RewriteRequest,
    RewriteResult,
    SourceDocument,
    rewrite,
)

from .export_list import (
    load_export_list,
    parse_export_list,
)

__all__ = [
    # Symbols
    "extract_defined_symbol",
    "extract_symbol_from_token",
    "is_define_line",
    # Define lines
    "DefineLine",
    "LINKAGE_TOKENS",
    "VISIBILITY_TOKENS",
    "is_removable_token",
    "parse_define_line",
    "rewrite_define_line",
    # Engine
    "ExportRewriter",
    "RewriteRequest",
    "RewriteResult",
    "SourceDocument",
    "rewrite",
    # Export lists
    "load_export_list",
    "parse_export_list",
]
