"""Recursive directory walk that honours .gitignore files.

The walk returns a flat list of ``(path, is_dir)`` pairs. Ignore files are read
from the base directory and from every directory below it down to the entry
being tested; the deepest file with a matching pattern decides, so nested
``.gitignore`` files and ``!`` negations behave as they do in Git. Ignored
directories are pruned and never descended into.
"""

import logging
import os
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

from textcon.exceptions import WalkError
from textcon.exclusion_rules.git_rules import GitIgnoreExclusionRules
from textcon.exclusion_rules.path_filter import PathExclusionFilter
from textcon.path_resolver import is_within
from textcon.types import PathType

from .file_identifier import FileIdentifier

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"
GIT_DIR = ".git"


class GitIgnoreChain:
    """Lookup of the ignore files that apply to entries below a root directory.

    Attributes:
        root (Path): Topmost directory whose ignore files are honoured.
    """

    def __init__(self, root: PathType) -> None:
        self.root = Path(root)
        self._cache: Dict[Path, Optional[GitIgnoreExclusionRules]] = {}
        self._info_exclude = self._load(self.root / GIT_DIR / "info" / "exclude")

    @staticmethod
    def _load(rules_file: Path) -> Optional[GitIgnoreExclusionRules]:
        if not rules_file.is_file():
            return None
        rules = GitIgnoreExclusionRules(rules_file)
        return rules if rules.has_rules() else None

    def _rules_for(self, directory: Path) -> Optional[GitIgnoreExclusionRules]:
        if directory not in self._cache:
            self._cache[directory] = self._load(directory / GITIGNORE_FILENAME)
        return self._cache[directory]

    def _chain(self, directory: Path) -> List[Tuple[Path, GitIgnoreExclusionRules]]:
        """Rules applying inside ``directory``, ordered from lowest to highest precedence."""
        chain: List[Tuple[Path, GitIgnoreExclusionRules]] = []
        if self._info_exclude is not None:
            chain.append((self.root, self._info_exclude))

        current = self.root
        directories = [current]
        for part in directory.relative_to(self.root).parts:
            current = current / part
            directories.append(current)

        for candidate in directories:
            rules = self._rules_for(candidate)
            if rules is not None:
                chain.append((candidate, rules))
        return chain

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """Return True if the ignore files in effect exclude ``path``."""
        for rules_dir, rules in reversed(self._chain(path.parent)):
            relative = path.relative_to(rules_dir).as_posix()
            if is_dir:
                relative += "/"
            state = rules.match_state(relative)
            if state is not None:
                return state
        return False


def walk_with_gitignore(
    root: PathType,
    base_dir: Optional[PathType] = None,
    max_depth: Optional[int] = None,
    exclusion_filter: Optional[PathExclusionFilter] = None,
) -> List[Tuple[Path, bool]]:
    """Walk ``root`` recursively and return the entries that are not ignored.

    Args:
        root: Directory to walk.
        base_dir: Directory whose ``.gitignore`` (and ``.git/info/exclude``) is the
            outermost one honoured. Defaults to ``root``; ignored when ``root`` is
            not inside it.
        max_depth: Number of directory levels below ``root`` whose contents are
            listed. Directories at the last level are returned but not descended
            into. None means unlimited.
        exclusion_filter: Additional filter; excluded directories are pruned.

    Returns:
        ``(path, is_dir)`` pairs for every visible entry below ``root``. The ``.git``
        directory is never returned.

    Raises:
        WalkError: If a directory cannot be read.
        TextconIOError: If an ignore file cannot be read.
    """
    root = Path(root)
    chain_root = root
    if base_dir is not None and is_within(root, Path(base_dir)):
        chain_root = Path(base_dir)
    ignore_chain = GitIgnoreChain(chain_root)

    def skip(path: Path, is_dir: bool) -> bool:
        if exclusion_filter is not None and exclusion_filter.excludes(path, is_dir):
            return True
        return ignore_chain.is_ignored(path, is_dir)

    def on_error(error: OSError) -> None:
        raise WalkError(error.filename or root, error.strerror or str(error)) from error

    entries: List[Tuple[Path, bool]] = []
    # Identifiers of each walked directory and its ancestors
    ancestors: Dict[Path, FrozenSet[FileIdentifier]] = {}

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=True):
        current = Path(dirpath)
        lineage = ancestors.get(current.parent, frozenset())
        identifier = FileIdentifier.for_path(current)
        if identifier is not None:
            if identifier in lineage:
                logger.debug("Not descending into %s: symlink loop", current)
                dirnames[:] = []
                continue
            lineage = lineage | {identifier}
        ancestors[current] = lineage

        level = len(current.relative_to(root).parts) + 1

        descend = []
        for name in sorted(dirnames):
            path = current / name
            if name == GIT_DIR or skip(path, True):
                continue
            entries.append((path, True))
            if max_depth is None or level < max_depth:
                descend.append(name)
        dirnames[:] = descend

        for name in sorted(filenames):
            path = current / name
            if not skip(path, False):
                entries.append((path, False))

    return entries
