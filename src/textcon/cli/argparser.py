"""Command-line argument parsing for textcon.

This module defines the command-line interface for textcon,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from humanfriendly import InvalidSize, parse_size

from textcon import __version__
from textcon.config import DEFAULT_MAX_TREE_DEPTH, MAX_FILE_SIZE
from textcon.exceptions import PatternError, TextconIOError
from textcon.exclusion_rules.base_rules import BaseExclusionRules

BASE_DIR_ENV = "TEXTCON_BASE_DIR"
OUTPUT_FORMATS = ("plain", "markdown", "html")
LIST_FORMATS = ("plain", "detailed", "json")


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling exclusion patterns.

    The action compiles each pattern into the provided exclusion rules object as soon as
    it is parsed, preserving the order of ``-x`` and ``--exclude-from`` options on the
    command line so that later ``!`` negations override earlier patterns. An invalid
    pattern or unreadable pattern file is reported as a usage error.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action adding exclusion patterns to the rules in command-line order."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            try:
                if option_string == "--exclude-from":
                    exclusion_rules.load_rules(Path(str(values)))
                else:
                    exclusion_rules.add_rule(str(values))
            except (PatternError, TextconIOError) as e:
                parser.error(str(e))

            collected = getattr(namespace, self.dest, None) or []
            collected.append(values)
            setattr(namespace, self.dest, collected)

    return ExclusionRulesAction


def parse_file_size(value: str) -> int:
    """Parse a human readable size such as ``64KB``, ``1MiB`` or ``65536``.

    Example:
        >>> parse_file_size("64KiB")
        65536
    """
    try:
        return int(parse_size(value, binary=False))
    except InvalidSize as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_depth(value: str) -> int:
    """Parse a non-negative tree depth."""
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: '{value}'")
    if depth < 0:
        raise argparse.ArgumentTypeError(f"depth cannot be negative: {depth}")
    return depth


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with textcon's options.
    """
    description = """
    textcon: Text concatenation for building language model context.

    textcon expands references embedded in a template into the contents of files or
    into directory trees, producing a single document to hand to a language model.

    Reference syntax:
      {{ @file.txt }}       Include file contents (up to the size limit, 64 KiB by default)
      {{ @!file.txt }}      Force include a file regardless of its size
      {{ @dirname/ }}       Include the directory tree
      {{ @!dirname/ }}      Include the tree AND the contents of every file in it
      {{ @. }} or {{ @/ }}  Include the tree of the base directory

    References are resolved against the base directory and can never reach outside it.
    Without --template, the given files and directories are stitched together as if
    each had been written as a forced reference.
    """

    epilog = """
    Examples:
      # Stitch files and directories together
      textcon src/main.py src/utils/

      # Process a template file
      textcon --template template.md

      # Process a template read from stdin
      echo "Code: {{ @main.py }}" | textcon --template -

      # Validate the references of a template without expanding them
      textcon --template template.md --dry-run

      # List the references of a template, with details or as JSON
      textcon --template template.md --list
      textcon --template template.md --list detailed
      textcon --template template.md --list json

      # Resolve references against another directory and save the result
      textcon --template template.md --base-dir /path/to/project -o context.txt

      # Hide paths with gitignore-style patterns
      textcon -x "*.log" -x "node_modules/" -x "!keep.log" --template template.md

      # Raise the size limit for non-forced files
      textcon --max-file-size 1MiB --template template.md

      # Display version information and exit
      textcon -V
    """

    parser = argparse.ArgumentParser(
        prog="textcon",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"textcon {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "inputs",
        nargs="*",
        type=Path,
        metavar="INPUT",
        help="Files and directories to stitch together (stitching mode).",
    )
    parser.add_argument(
        "-t",
        "--template",
        metavar="TEMPLATE",
        help="Template file to process. Use '-' to read the template from stdin.",
    )
    parser.add_argument(
        "-b",
        "--base-dir",
        type=Path,
        metavar="DIR",
        default=os.environ.get(BASE_DIR_ENV),
        help=(
            f"Base directory references are resolved against (default: ${BASE_DIR_ENV}, "
            "or the current directory)."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=parse_depth,
        metavar="DEPTH",
        default=DEFAULT_MAX_TREE_DEPTH,
        help=f"Maximum number of directory levels listed in trees (default: {DEFAULT_MAX_TREE_DEPTH}).",
    )
    parser.add_argument(
        "--max-file-size",
        type=parse_file_size,
        metavar="SIZE",
        default=MAX_FILE_SIZE,
        help="Largest file included without the @! marker, e.g. 64KiB or 1MB (default: 64KiB).",
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Do not precede expansions with <!-- ... --> path comments.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        metavar="GLOB",
        action=ExclusionAction,
        help=(
            "Gitignore-style pattern, relative to the base directory, hiding matching files and "
            "directories from trees and deep inclusion. Can be specified multiple times; later "
            "patterns (including !negations) override earlier ones."
        ),
    )
    parser.add_argument(
        "--exclude-from",
        metavar="FILE",
        dest="exclude",
        action=ExclusionAction,
        help="Read exclusion patterns from a file in .gitignore format (can be specified multiple times).",
    )
    parser.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Do not honour .gitignore files when listing directories.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="plain",
        help="Output format for the processed template (default: plain).",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the references without expanding them. Exits with status 1 if any is invalid.",
    )
    mode.add_argument(
        "--list",
        nargs="?",
        const="plain",
        choices=LIST_FORMATS,
        metavar="FORMAT",
        help="List the references of the template: plain (default), detailed or json.",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be used multiple times).",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all diagnostics except errors.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.template is not None and args.inputs:
        raise ValueError("INPUT arguments cannot be combined with -t/--template")
    if args.template is None and not args.inputs:
        raise ValueError("either INPUT arguments or -t/--template is required")
