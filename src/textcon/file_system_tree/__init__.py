"""File system tree representation with configurable exclusion rules.

This package builds and renders tree representations of directory structures,
either by direct traversal or from an ignore-file aware walk.
"""

from .file_system_node import FileSystemNode
from .file_system_tree import FileSystemTree
from .gitignore_walker import walk_with_gitignore

__all__ = ["FileSystemNode", "FileSystemTree", "walk_with_gitignore"]
