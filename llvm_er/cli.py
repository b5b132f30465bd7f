#!/usr/bin/env python3
"""
llvm-er CLI Tool

Makes the functions named in an export list externally visible in a
textual LLVM IR module.

Usage:
    llvm-er --exports <file> -o <out> <input>
    llvm-er --exports <file> --inplace <input>
    llvm-er --exports <file> -o - <input>

Exit codes:
    0  success
    1  processing error (empty export list, missing exports, I/O errors)
    2  usage error
"""

import click
import sys
import traceback
from typing import Optional

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .rewriting import ExportRewriter, RewriteResult, load_export_list
from .utils.config import RunOptions, ToolConfig, load_config
from .utils.logging import setup_logger, get_logger, log_with_data


TOOL_NAME = "llvm-er"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# stdout is reserved for rewritten IR
console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def print_info(message: str):
    """Print info message."""
    console.print(f"[blue]INFO:[/blue] {escape(message)}")


def print_success(message: str):
    """Print success message."""
    console.print(f"[green]SUCCESS:[/green] {escape(message)}")


def print_error(message: str):
    """Print error message."""
    console.print(f"[red]{TOOL_NAME}: error:[/red] {escape(message)}")


def print_warning(message: str):
    """Print warning message."""
    console.print(f"[yellow]{TOOL_NAME}: warning:[/yellow] {escape(message)}")


def print_summary(result: RewriteResult):
    """Print a per-symbol summary table."""
    table = Table(title="Export Rewrite Summary")
    table.add_column("Symbol", style="cyan")
    table.add_column("Status", justify="right")

    for name in result.matched:
        table.add_row(escape(name), "[green]matched[/green]")
    for name in result.missing:
        table.add_row(escape(name), "[red]missing[/red]")

    console.print(table)
    print_info(f"Rewritten lines: {result.rewritten_line_count}")


def read_ir(path: str) -> str:
    # newline='' keeps "\r\n" intact for newline detection; a BOM is dropped
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return f.read()


def write_ir(path: str, text: str) -> None:
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)


def run_rewrite(options: RunOptions, verbose: bool = False) -> int:
    """
    Execute one rewrite described by `options`.

    Returns:
        Process exit code
    """
    logger = get_logger()

    try:
        exports = load_export_list(options.exports_path)
        if not exports:
            print_error("Export list is empty.")
            return EXIT_FAILURE

        logger.info(f"Loaded {len(exports)} export(s) from {options.exports_path}")

        source_text = read_ir(options.input_path)
        result = ExportRewriter().rewrite(source_text, exports)
        log_with_data(logger, "INFO", f"Rewrote {options.input_path}", result.to_dict())

        if verbose:
            print_summary(result)

        if result.missing:
            message = f"Missing exports in LLVM IR: {', '.join(result.missing)}"
            if not options.allow_missing:
                print_error(message)
                return EXIT_FAILURE
            print_warning(message)

        if not result.has_changes:
            logger.info("No linkage or visibility tokens needed removal")

        if options.to_stdout:
            sys.stdout.write(result.output_text)
            sys.stdout.flush()
            return EXIT_SUCCESS

        write_ir(options.destination, result.output_text)
        print_success(
            f"Wrote {options.destination} "
            f"({result.rewritten_line_count} line(s) rewritten)"
        )
        return EXIT_SUCCESS

    except (OSError, ValueError) as e:
        print_error(str(e))
        if verbose:
            traceback.print_exc()
        return EXIT_FAILURE


# ============================================================================
# Main Command
# ============================================================================
@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name=TOOL_NAME)
@click.argument('input_path', metavar='INPUT', required=False,
                type=click.Path(dir_okay=False))
@click.option('--exports', 'exports_path', type=click.Path(dir_okay=False),
              default=None,
              help='List of symbols to externalize (one per line). Required.')
@click.option('-o', 'output_path', type=str, default=None,
              help="Output file path. Use '-' for stdout.")
@click.option('--inplace', 'in_place', is_flag=True,
              help='Rewrite the input file in place.')
@click.option('--allow-missing', is_flag=True,
              help='Warn about missing exports instead of failing.')
@click.option('--config', 'config_path',
              type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file.')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def cli(input_path: Optional[str], exports_path: Optional[str],
        output_path: Optional[str], in_place: bool, allow_missing: bool,
        config_path: Optional[str], verbose: bool):
    """
    llvm-er - export rewrite utility for LLVM IR

    Removes linkage (internal, private, linkonce, linkonce_odr, weak,
    weak_odr, available_externally) and visibility (hidden, protected)
    keywords from the definitions of the listed functions.

    \b
    Examples:
      llvm-er --exports exports.txt -o out.ll module.ll
      llvm-er --exports exports.txt --inplace module.ll
      llvm-er --exports exports.txt -o - module.ll | llc
    """
    try:
        config = load_config(config_path) if config_path else ToolConfig()
    except (OSError, ValueError, yaml.YAMLError) as e:
        print_error(f"Invalid config: {e}")
        sys.exit(EXIT_FAILURE)

    try:
        options = RunOptions.create(
            input_path=input_path,
            exports_path=exports_path or config.exports,
            output_path=output_path,
            in_place=in_place,
            allow_missing=allow_missing or config.allow_missing,
        )
    except ValueError as e:
        raise click.UsageError(str(e))

    try:
        setup_logger(
            level="DEBUG" if verbose else config.log_level,
            log_file=config.log_file,
            structured=config.structured_logs,
        )
    except (OSError, ValueError) as e:
        print_error(f"Cannot set up logging: {e}")
        sys.exit(EXIT_FAILURE)

    sys.exit(run_rewrite(options, verbose=verbose))


# ============================================================================
# Main Entry Point
# ============================================================================
def main():
    """Main entry point."""
    cli(prog_name=TOOL_NAME)


if __name__ == "__main__":
    main()
