"""Text concatenation for building language model context.

This package expands ``{{ @path }}`` references embedded in text into the
contents of files or into directory trees, producing a single document.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("textcon")
except PackageNotFoundError:
    __version__ = "unknown"

from textcon.config import DEFAULT_MAX_TREE_DEPTH, MAX_FILE_SIZE, TemplateConfig  # noqa: E402
from textcon.exceptions import (  # noqa: E402
    DirectoryNotFoundError,
    FileSizeExceededError,
    InvalidReferenceError,
    PathTraversalError,
    PatternError,
    ReferenceFileNotFoundError,
    TemplateParseError,
    TextconError,
    TextconIOError,
    WalkError,
)
from textcon.expander import process_reference  # noqa: E402
from textcon.references import TemplateReference, find_references, iter_references  # noqa: E402
from textcon.template import process_template, process_template_file  # noqa: E402

__all__ = [
    "DEFAULT_MAX_TREE_DEPTH",
    "MAX_FILE_SIZE",
    "DirectoryNotFoundError",
    "FileSizeExceededError",
    "InvalidReferenceError",
    "PathTraversalError",
    "PatternError",
    "ReferenceFileNotFoundError",
    "TemplateConfig",
    "TemplateParseError",
    "TemplateReference",
    "TextconError",
    "TextconIOError",
    "WalkError",
    "find_references",
    "iter_references",
    "process_reference",
    "process_template",
    "process_template_file",
]
