"""Node representation for file system elements in the tree."""

from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Sequence

from anytree import Node


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file or directory in the filesystem tree.

    Extends anytree.Node with a directory flag, the absolute path of the entry and
    an index of children by name. The index is maintained through anytree's attach
    and detach hooks, so children can be added either with ``insert_child`` or by
    passing ``parent=`` to the constructor.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        parent (Optional[FileSystemNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory, False for files.
        fs_path (Optional[Path]): Absolute path of the entry, if known.

    Example:
        >>> root = FileSystemNode(".", is_dir=True)
        >>> src = root.insert_child("src", is_dir=True)
        >>> root.insert_child("src", is_dir=True) is src
        True
        >>> _ = root.insert_path(["src", "main.py"], is_dir=False)
        >>> [child.name for child in src.sorted_children()]
        ['main.py']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        is_dir: bool = False,
        fs_path: Optional[Path] = None,
        **kwargs: Any,
    ) -> None:
        self._child_index: Dict[str, "FileSystemNode"] = {}
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.fs_path = fs_path

    def _post_attach(self, parent: "FileSystemNode") -> None:
        parent._child_index[self.name] = self

    def _post_detach(self, parent: "FileSystemNode") -> None:
        parent._child_index.pop(self.name, None)

    def insert_child(self, name: str, is_dir: bool, fs_path: Optional[Path] = None) -> "FileSystemNode":
        """Return the child called ``name``, creating it if it does not exist yet.

        An existing child that was first created as an intermediate directory keeps
        its directory flag.
        """
        child = self._child_index.get(name)
        if child is None:
            child = FileSystemNode(name, parent=self, is_dir=is_dir, fs_path=fs_path)
        elif child.fs_path is None:
            child.fs_path = fs_path
        return child

    def insert_path(self, components: Sequence[str], is_dir: bool, fs_path: Optional[Path] = None) -> "FileSystemNode":
        """Insert a descendant given by its path components below this node.

        Missing intermediate components are created as directories. Returns the
        node for the last component.
        """
        node = self
        last = len(components) - 1
        for i, component in enumerate(components):
            if i == last:
                node = node.insert_child(component, is_dir, fs_path)
            else:
                node = node.insert_child(component, True)
        return node

    def sorted_children(self) -> Sequence["FileSystemNode"]:
        """Children ordered by name."""
        return sorted(self.children, key=lambda child: child.name)

    def iter_files(self) -> Iterator["FileSystemNode"]:
        """Yield every file node below this node, depth-first in name order."""
        for child in self.sorted_children():
            if child.is_dir:
                yield from child.iter_files()
            else:
                yield child
