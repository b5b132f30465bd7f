"""
Export rewrite engine.

Drives symbol extraction and define-line rewriting over a whole IR
document and reports which requested exports were found.

Usage:
    from llvm_er.rewriting import rewrite

    result = rewrite(ir_text, ["foo", "bar"])
    if result.missing:
        ...
    output = result.output_text

The document is reproduced byte-for-byte except for rewritten lines: the
newline convention ("\\r\\n" if present anywhere, else "\\n") and the
presence of a trailing newline are preserved.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from .define_line import rewrite_define_line
from .symbols import extract_defined_symbol


logger = logging.getLogger(__name__)


@dataclass
class SourceDocument:
    """IR text split into lines on its own newline convention."""
    lines: List[str]
    newline: str = "\n"
    trailing_newline: bool = False

    @classmethod
    def from_text(cls, text: str) -> "SourceDocument":
        """Detect the newline sequence and split the text on it."""
        newline = "\r\n" if "\r\n" in text else "\n"
        trailing_newline = text.endswith(newline)

        body = text[:-len(newline)] if trailing_newline else text
        return cls(
            lines=body.split(newline),
            newline=newline,
            trailing_newline=trailing_newline,
        )

    def render(self) -> str:
        """Join the lines back with the original newline convention."""
        output = self.newline.join(self.lines)
        if self.trailing_newline:
            output += self.newline
        return output


@dataclass(frozen=True)
class RewriteRequest:
    """Input of a single rewrite: IR text plus the export names."""
    source_text: str
    exports: Sequence[str]

    def __post_init__(self):
        if self.source_text is None:
            raise ValueError("source_text is required")
        if self.exports is None:
            raise ValueError("exports is required")


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of rewriting one IR document."""
    output_text: str
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    rewritten_line_count: int = 0

    @property
    def has_changes(self) -> bool:
        return self.rewritten_line_count > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": list(self.matched),
            "missing": list(self.missing),
            "rewritten_line_count": self.rewritten_line_count,
            "has_changes": self.has_changes,
        }


class ExportRewriter:
    """
    Makes requested function symbols externally visible.

    For every `define` line whose symbol is in the export list, linkage
    (`internal`, `private`, `linkonce`, `linkonce_odr`, `weak`, `weak_odr`,
    `available_externally`) and visibility (`hidden`, `protected`) tokens
    preceding the symbol are removed.

    The rewriter holds no state; one instance can serve any number of
    independent calls.
    """

    def rewrite_request(self, request: RewriteRequest) -> RewriteResult:
        """Rewrite using a prepared RewriteRequest."""
        if request is None:
            raise ValueError("request is required")
        return self.rewrite(request.source_text, request.exports)

    def rewrite(self, source_text: str, export_names: Sequence[str]) -> RewriteResult:
        """
        Rewrite the define lines of all requested exports.

        Args:
            source_text: Full textual IR module
            export_names: Symbol names without the `@` sigil, in the order
                they should be reported

        Returns:
            RewriteResult with the new text, matched/missing names in
            export order, and the number of altered lines

        Raises:
            ValueError: If either argument is None
        """
        if source_text is None:
            raise ValueError("source_text is required")
        if export_names is None:
            raise ValueError("export_names is required")

        document = SourceDocument.from_text(source_text)
        requested = set(export_names)
        found = set()
        rewritten_line_count = 0

        for index, line in enumerate(document.lines):
            symbol = extract_defined_symbol(line)
            if symbol is None or symbol not in requested:
                continue

            found.add(symbol)

            updated = rewrite_define_line(line, symbol)
            if updated is None:
                logger.debug(f"Line {index + 1}: @{symbol} already externally visible")
                continue

            document.lines[index] = updated
            rewritten_line_count += 1
            logger.debug(f"Line {index + 1}: rewrote @{symbol}")

        matched = []
        missing = []
        for name in export_names:
            if name in found:
                matched.append(name)
            else:
                missing.append(name)

        logger.debug(
            f"Rewrote {rewritten_line_count} line(s); "
            f"{len(matched)} matched, {len(missing)} missing"
        )

        return RewriteResult(
            output_text=document.render(),
            matched=matched,
            missing=missing,
            rewritten_line_count=rewritten_line_count,
        )


_default_rewriter = ExportRewriter()


def rewrite(source_text: str, export_names: Sequence[str]) -> RewriteResult:
    """Rewrite `source_text` with a shared stateless ExportRewriter."""
    return _default_rewriter.rewrite(source_text, export_names)
