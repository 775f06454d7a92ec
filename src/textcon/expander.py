"""Expansion of resolved references into replacement text.

A file reference expands to the file's contents, a directory reference to the
rendered tree of the directory. A forced directory reference (``@!dir/``)
additionally stitches the contents of every file shown in the tree:

    <!-- Directory tree: src -->
    .
    └── main.py

    <!-- Files in src -->

    ### src/main.py

    ```
    print("hello")
    ```

Provenance comments (``<!-- ... -->``) are only emitted when the configuration
asks for them.
"""

import logging
from pathlib import Path
from typing import Iterator

from textcon.config import TemplateConfig
from textcon.exceptions import (
    DirectoryNotFoundError,
    FileSizeExceededError,
    InvalidReferenceError,
    ReferenceFileNotFoundError,
    TextconError,
)
from textcon.file_system_tree.file_system_tree import FileSystemTree
from textcon.io.text_file_reader import file_size, read_text_file
from textcon.path_resolver import names_directory, relative_display_path, resolve_reference_path, strip_reference_markers

logger = logging.getLogger(__name__)


def process_reference(reference: str, config: TemplateConfig, force: bool = False) -> str:
    """Resolve a single reference and return its expansion.

    Args:
        reference: The reference as found in a template, e.g. ``@src/main.py`` or ``@!docs/``.
        config: Settings for this expansion.
        force: Bypass the size limit for files, and stitch file contents for directories.

    Returns:
        The replacement text for the reference.

    Raises:
        InvalidReferenceError: If ``reference`` does not start with ``@``.
        PathTraversalError: If the reference resolves outside ``config.base_dir``.
        ReferenceFileNotFoundError: If a file reference names a missing file.
        DirectoryNotFoundError: If a directory reference names a missing directory.
        FileSizeExceededError: If the file is too large and ``force`` is False.
        TextconIOError: If the file cannot be read.

    Example:
        >>> config = TemplateConfig.create("project", add_path_comments=False)  # doctest: +SKIP
        >>> process_reference("@notes.txt", config)  # doctest: +SKIP
        'TEST'
    """
    if not reference.startswith("@"):
        raise InvalidReferenceError(reference)

    path = resolve_reference_path(reference, config.base_dir)
    directory_intended = names_directory(strip_reference_markers(reference))
    return expand_path(path, config, force, directory_intended)


def expand_path(path: Path, config: TemplateConfig, force: bool = False, directory_intended: bool = False) -> str:
    """Expand an already resolved path.

    Args:
        path: Canonical path inside ``config.base_dir``.
        config: Settings for this expansion.
        force: Bypass the size limit for files, and stitch file contents for directories.
        directory_intended: Whether the reference was written as a directory. Only
            used to choose the error raised when ``path`` does not exist.

    Returns:
        The replacement text.
    """
    if path.is_dir():
        if force:
            return expand_directory_deep(path, config)
        return expand_directory(path, config)
    if path.is_file():
        return expand_file(path, config, force)

    if directory_intended:
        raise DirectoryNotFoundError(path)
    raise ReferenceFileNotFoundError(path)


def expand_file(path: Path, config: TemplateConfig, force: bool = False) -> str:
    """Return the contents of ``path``, preceded by a provenance comment if configured.

    A file of exactly ``config.max_file_size`` bytes is still included without force.
    """
    size = file_size(path)
    if size > config.max_file_size:
        if not force:
            raise FileSizeExceededError(path, size, config.max_file_size)
        logger.info("Including %s (%d bytes) above the size limit: forced", path, size)

    contents = read_text_file(path)
    if config.add_path_comments:
        return f"<!-- File: {relative_display_path(path, config.base_dir)} -->\n{contents}"
    return contents


def build_tree(path: Path, config: TemplateConfig) -> FileSystemTree:
    """Create the tree of ``path`` that both tree rendering and deep inclusion use."""
    return FileSystemTree(
        path,
        exclusion_filter=config.exclusion_filter(),
        max_depth=config.max_tree_depth,
        use_gitignore=config.use_gitignore,
        base_dir=config.base_dir,
    )


def _render_tree(path: Path, tree: FileSystemTree, config: TemplateConfig) -> str:
    rendered = tree.get_tree_representation()
    if config.add_path_comments:
        return f"<!-- Directory tree: {relative_display_path(path, config.base_dir)} -->\n{rendered}"
    return rendered


def expand_directory(path: Path, config: TemplateConfig) -> str:
    """Return the rendered tree of ``path``."""
    return _render_tree(path, build_tree(path, config), config)


def expand_directory_deep(path: Path, config: TemplateConfig) -> str:
    """Return the tree of ``path`` followed by the contents of every file in it.

    Size limits do not apply. A file that cannot be read is reported in place
    of its contents and the remaining files are still included.
    """
    tree = build_tree(path, config)
    return "".join(_stream_deep_expansion(path, tree, config))


def _stream_deep_expansion(path: Path, tree: FileSystemTree, config: TemplateConfig) -> Iterator[str]:
    yield _render_tree(path, tree, config)
    yield "\n"
    if config.add_path_comments:
        yield f"<!-- Files in {relative_display_path(path, config.base_dir)} -->\n\n"

    for file_path, _ in tree.iterate_files():
        display = relative_display_path(file_path, config.base_dir)
        try:
            contents = read_text_file(file_path)
        except TextconError as e:
            logger.warning("Could not include %s: %s", display, e)
            yield f"### {display}\n\nError reading file: {e}\n\n"
            continue

        if contents.endswith("\n"):
            contents = contents[:-1]
        yield f"### {display}\n\n```\n{contents}\n```\n\n"
