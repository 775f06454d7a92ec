"""Decide whether a filesystem entry is hidden from trees and deep inclusion."""

import logging
import os
from pathlib import Path
from typing import List, Optional

from textcon.path_resolver import is_within, relative_display_path
from textcon.types import PathType

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .hidden_rules import HiddenEntryRules

logger = logging.getLogger(__name__)

# Name of the synthetic child used to test "dir/**"-style patterns against a directory
DIRECTORY_CHILD = "__textcon_child__"


class PathExclusionFilter:
    """Apply exclusion rules to absolute paths below a base directory.

    Paths are converted to ``/``-separated paths relative to the base directory
    before the rules see them. A directory is tested three ways, as ``rel``,
    as ``rel/`` and through a synthetic child ``rel/<child>``, so that a pattern
    meant to hide a directory may be written as ``name``, ``name/`` or
    ``name/**``.

    Symbolic links whose target lies outside the base directory are always
    excluded, and so are hidden entries unless ``hide_hidden`` is False.

    Attributes:
        base_dir (Path): Canonical base directory patterns are relative to.
        rules (Optional[BaseExclusionRules]): The combined rules, or None when
            nothing is excluded by pattern.

    Example:
        >>> from textcon.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> f = PathExclusionFilter("/work", GitIgnoreExclusionRules.from_patterns(["target/**"]))
        >>> f.excludes(Path("/work/target"), is_dir=True)
        True
        >>> f.excludes(Path("/work/src/.cache"), is_dir=True)
        True
        >>> f.excludes(Path("/work/src/lib.rs"), is_dir=False)
        False
    """

    def __init__(
        self,
        base_dir: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        hide_hidden: bool = True,
    ) -> None:
        self.base_dir = Path(base_dir)
        rules: List[BaseExclusionRules] = []
        if hide_hidden:
            rules.append(HiddenEntryRules())
        if exclusion_rules is not None:
            rules.append(exclusion_rules)
        self.rules: Optional[BaseExclusionRules] = CompositeExclusionRules(rules) if rules else None

    def relative_path(self, path: PathType) -> str:
        """Return ``path`` relative to the base directory with ``/`` separators."""
        return relative_display_path(path, self.base_dir)

    def excludes(self, path: Path, is_dir: bool) -> bool:
        """Return True if ``path`` must not appear in trees or deep inclusion.

        Args:
            path: Absolute path of the entry, below the base directory.
            is_dir: Whether the entry is (or points to) a directory.
        """
        # realpath, unlike Path.resolve, does not raise on symlink loops
        if path.is_symlink() and not is_within(Path(os.path.realpath(path)), self.base_dir):
            logger.debug("Excluding %s: symlink target escapes %s", path, self.base_dir)
            return True

        if self.rules is None:
            return False

        relative = self.relative_path(path)
        candidates = [relative]
        if is_dir:
            candidates.append(f"{relative}/")
            candidates.append(f"{relative}/{DIRECTORY_CHILD}")
        return any(self.rules.exclude(candidate) for candidate in candidates)
