"""File system tree representation with configurable exclusion rules.

This module provides the FileSystemTree class, which builds an in-memory tree of a
directory below the base directory and renders it as an ASCII-art listing:

    .
    ├── README.md
    └── src/
        ├── lib.py
        └── util/

Two traversal strategies are available. Without ignore files the directory is
read recursively, entry by entry. With ignore files the flat result of
``walk_with_gitignore`` is reassembled into the same node hierarchy. Both
strategies apply the same exclusion filter and depth limit, so rendering and
file iteration do not depend on how the tree was built.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

from anytree import ContStyle, RenderTree

from textcon.exceptions import DirectoryNotFoundError, WalkError
from textcon.exclusion_rules.path_filter import PathExclusionFilter
from textcon.types import PathType

from .file_identifier import FileIdentifier
from .file_system_node import FileSystemNode
from .gitignore_walker import walk_with_gitignore

logger = logging.getLogger(__name__)

ROOT_MARKER = "."


class FileSystemTree:
    """A tree representation of a directory with exclusion rules and a depth limit.

    The tree is built lazily on first access.

    Depth:
        ``max_depth`` is the number of directory levels whose contents are listed.
        With ``max_depth=2`` the children of the root and of its subdirectories
        are listed; directories on the second level appear but are not expanded.
        None means unlimited.

    Attributes:
        root_path (Path): The directory being represented.
        base_dir (Path): The directory exclusion patterns are relative to.
        exclusion_filter (Optional[PathExclusionFilter]): Filter for hidden and excluded entries.
        max_depth (Optional[int]): Depth limit, or None.
        use_gitignore (bool): Whether ignore files are honoured.

    Example:
        >>> tree = FileSystemTree("src", max_depth=2)  # doctest: +SKIP
        >>> print(tree.get_tree_representation(), end="")  # doctest: +SKIP
        .
        ├── main.py
        └── utils/
            └── helpers.py
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_filter: Optional[PathExclusionFilter] = None,
        max_depth: Optional[int] = None,
        use_gitignore: bool = False,
        base_dir: Optional[PathType] = None,
    ) -> None:
        self.root_path = Path(root_path)
        self.base_dir = Path(base_dir) if base_dir is not None else self.root_path
        self.exclusion_filter = exclusion_filter
        self.max_depth = max_depth
        self.use_gitignore = use_gitignore
        self._tree: Optional[FileSystemNode] = None

    def get_tree(self) -> FileSystemNode:
        """Get the root node of the filesystem tree, building it if necessary.

        Raises:
            DirectoryNotFoundError: If the root path doesn't exist or isn't a directory.
            WalkError: If a directory cannot be read.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        if not self.root_path.is_dir():
            raise DirectoryNotFoundError(self.root_path)

        root = FileSystemNode(ROOT_MARKER, is_dir=True, fs_path=self.root_path)
        if self.use_gitignore:
            logger.debug("Building tree of %s from an ignore-aware walk", self.root_path)
            self._build_from_walk(root)
        else:
            logger.debug("Building tree of %s by direct traversal", self.root_path)
            identifier = FileIdentifier.for_path(self.root_path)
            ancestors = {identifier} if identifier is not None else set()
            self._add_children(root, self.root_path, 1, ancestors)

        self._tree = root

    def _build_from_walk(self, root: FileSystemNode) -> None:
        entries = walk_with_gitignore(
            self.root_path,
            base_dir=self.base_dir,
            max_depth=self.max_depth,
            exclusion_filter=self.exclusion_filter,
        )
        for path, is_dir in entries:
            root.insert_path(path.relative_to(self.root_path).parts, is_dir, fs_path=path)

    def _add_children(
        self, node: FileSystemNode, directory: Path, level: int, ancestors: Set[FileIdentifier]
    ) -> None:
        """Recursively add the visible children of ``directory`` to ``node``."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise WalkError(directory, e.strerror or str(e)) from e

        for entry in entries:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False

            if self.exclusion_filter is not None and self.exclusion_filter.excludes(path, is_dir):
                continue

            child = node.insert_child(entry.name, is_dir, fs_path=path)
            if not is_dir:
                continue
            if self.max_depth is not None and level >= self.max_depth:
                continue

            identifier = FileIdentifier.for_path(path)
            if identifier is None:
                continue
            if identifier in ancestors:
                logger.debug("Not expanding %s: symlink loop", path)
                continue

            self._add_children(child, path, level + 1, ancestors | {identifier})

    def iterate_files(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over all files in the tree, depth-first in name order.

        Yields:
            Pairs of (absolute_path, relative_path) where the relative path is
            relative to the tree root and uses ``/`` separators.
        """
        root = self.get_tree()
        for node in root.iter_files():
            relative = "/".join(str(ancestor.name) for ancestor in node.path[1:])
            yield (node.fs_path or self.root_path / relative, relative)

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the tree representation one line at a time.

        The first line is the root marker ``.``; directories carry a trailing ``/``
        and siblings are ordered by name.

        Yields:
            Lines of the tree representation, without line terminators.
        """
        root = self.get_tree()
        for pre, _, node in RenderTree(root, style=ContStyle(), childiter=self._sorted_children):
            suffix = "/" if node.is_dir and node is not root else ""
            yield f"{pre}{node.name}{suffix}"

    @staticmethod
    def _sorted_children(children: Tuple[FileSystemNode, ...]) -> List[FileSystemNode]:
        return sorted(children, key=lambda child: child.name)

    def get_tree_representation(self) -> str:
        """Get the complete tree representation, each line terminated by a newline."""
        return "".join(f"{line}\n" for line in self.stream_tree_representation())

