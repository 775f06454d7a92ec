"""Command-line interface for textcon.

This module provides the command-line interface for textcon. It reads a template
(or synthesizes one from the files and directories given on the command line),
expands its references, and writes the result in the requested output format.

Key Features:
    - Template mode (file or stdin) and stitching mode
    - Output as plain text, a Markdown code block or escaped HTML
    - Reference listing (plain, detailed, JSON) and dry-run validation
    - Exclusion patterns and .gitignore support
    - Signal handling (SIGPIPE on Unix systems, SIGINT)

Exit Codes:
    0: Successful completion
    1: Runtime error, or invalid references in a dry run
    2: Command-line syntax error or invalid exclude pattern
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Stitch files together
    $ textcon src/main.py src/utils/

    # Process a template against another base directory
    $ textcon --template template.md --base-dir /path/to/project
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Type

from textcon.cli.argparser import create_parser, validate_args
from textcon.cli.reference_report import LIST_FORMATTERS, dry_run, inspect_reference
from textcon.cli.safe_writer import SafeWriter
from textcon.cli.signal_handler import setup_signal_handling, signal_handler
from textcon.config import TemplateConfig
from textcon.exceptions import PathTraversalError
from textcon.exclusion_rules.git_rules import GitIgnoreExclusionRules
from textcon.io.text_file_reader import read_text_file
from textcon.output_strategies.base_strategy import OutputStrategy
from textcon.output_strategies.html_strategy import HTMLOutputStrategy
from textcon.output_strategies.markdown_strategy import MarkdownOutputStrategy
from textcon.output_strategies.plain_strategy import PlainOutputStrategy
from textcon.path_resolver import is_within
from textcon.references import find_references
from textcon.template import process_template

logger = logging.getLogger("textcon")

OUTPUT_STRATEGIES: Dict[str, Type[OutputStrategy]] = {
    "plain": PlainOutputStrategy,
    "markdown": MarkdownOutputStrategy,
    "html": HTMLOutputStrategy,
}


def create_output_strategy(output_format: str) -> OutputStrategy:
    """Create the output strategy for ``output_format``.

    Raises:
        ValueError: If the format is not supported.
    """
    strategy_class: Optional[Type[OutputStrategy]] = OUTPUT_STRATEGIES.get(output_format)
    if strategy_class is None:
        raise ValueError(f"Unsupported output format: {output_format}")
    return strategy_class()


def configure_logging(verbose: int, quiet: bool) -> None:
    """Send log records to stderr at the level selected by ``-v``/``-q``."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def synthesize_template(inputs: Sequence[Path], base_dir: Path) -> str:
    """Build a template with one forced reference per input.

    Inputs are relative to the current directory, or absolute, and are rewritten
    relative to the base directory. Directories get a trailing slash.

    Raises:
        PathTraversalError: If an input lies outside the base directory.

    Example:
        >>> print(synthesize_template([Path("/work/README.md")], Path("/work")), end="")
        {{ @!README.md }}
    """
    lines: List[str] = []
    for input_path in inputs:
        absolute = Path(os.path.realpath(Path.cwd() / input_path))
        if not is_within(absolute, base_dir):
            logger.debug("Rejected input %s: outside %s", input_path, base_dir)
            raise PathTraversalError(absolute)
        reference = absolute.relative_to(base_dir).as_posix()
        suffix = "/" if absolute.is_dir() and not reference.endswith("/") else ""
        lines.append(f"{{{{ @!{reference}{suffix} }}}}\n")
    return "".join(lines)


def read_template(args: argparse.Namespace, base_dir: Path) -> str:
    """Return the template text selected on the command line."""
    if args.template == "-":
        logger.info("Reading template from stdin...")
        return sys.stdin.read()
    if args.template is not None:
        logger.info("Reading template from %s", args.template)
        return read_text_file(args.template)
    logger.info("Synthesizing template from inputs...")
    return synthesize_template(args.inputs, base_dir)


def build_config(args: argparse.Namespace, exclusion_rules: GitIgnoreExclusionRules) -> TemplateConfig:
    """Translate the parsed options into a TemplateConfig."""
    return TemplateConfig.create(
        args.base_dir,
        max_tree_depth=args.max_depth,
        max_file_size=args.max_file_size,
        add_path_comments=not args.no_comments,
        use_gitignore=not args.no_gitignore,
        exclude=exclusion_rules if exclusion_rules.has_rules() else None,
    )


def run(args: argparse.Namespace, exclusion_rules: GitIgnoreExclusionRules) -> int:
    """Carry out the action selected by ``args`` and return the exit status."""
    config = build_config(args, exclusion_rules)
    template = read_template(args, config.base_dir)

    if args.dry_run:
        logger.info("Performing dry run - validating references...")
        summary, invalid = dry_run(find_references(template), config.base_dir)
        sys.stdout.write(summary)
        return 1 if invalid else 0

    if args.list is not None:
        logger.debug("Listing template references...")
        infos = [inspect_reference(reference, config.base_dir) for reference in find_references(template)]
        sys.stdout.write(LIST_FORMATTERS[args.list](infos))
        return 0

    strategy = create_output_strategy(args.format)
    processed = process_template(template, config)
    output = strategy.format_document(processed)

    if args.output:
        logger.info("Writing output to %s", args.output)

    with SafeWriter(args.output if args.output else sys.stdout) as writer:
        try:
            writer.write(output)
        except BrokenPipeError:
            pass

    logger.info("Processing complete!")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the textcon command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error, or invalid references in a dry run
        2: Command-line syntax error or invalid exclude pattern
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    # Populated while the command line is parsed, in option order
    exclusion_rules = GitIgnoreExclusionRules()
    parser = create_parser(exclusion_rules)
    args = parser.parse_args(argv)

    try:
        validate_args(args)
    except ValueError as e:
        parser.error(str(e))

    configure_logging(args.verbose, args.quiet)

    try:
        status = run(args, exclusion_rules)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    interrupted = signal_handler.exit_code()
    if interrupted is not None:
        sys.exit(interrupted)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
