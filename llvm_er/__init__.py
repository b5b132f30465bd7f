"""
llvm-er: export rewrite utility for LLVM IR

Rewrites textual LLVM IR so that a chosen set of functions, declared with
restrictive linkage or visibility (`internal`, `hidden`, ...), become
externally visible. Nothing else in the module is touched.

Usage:
    from llvm_er import rewrite, load_export_list

    result = rewrite(ir_text, load_export_list("exports.txt"))
"""

__version__ = "0.1.0"
__author__ = "llvm-er developers"

from .rewriting import (
    ExportRewriter,
    RewriteRequest,
    RewriteResult,
    load_export_list,
    parse_export_list,
    rewrite,
)

__all__ = [
    "ExportRewriter",
    "RewriteRequest",
    "RewriteResult",
    "load_export_list",
    "parse_export_list",
    "rewrite",
]
