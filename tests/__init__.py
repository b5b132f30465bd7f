"""
Tests for llvm-er.

Test suite covering:
- Unit tests for symbol extraction, define-line rewriting, the rewrite
  engine, export lists and utilities
- Integration tests for the command line
"""

__all__ = []
