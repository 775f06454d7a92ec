"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.pattern import Pattern
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from textcon.exceptions import PatternError, TextconIOError
from textcon.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Implementation of exclusion rules using .gitignore pattern syntax.

    Patterns are compiled with the pathspec library and matched the way Git
    matches them. This gives exclusion patterns gitignore semantics:

    - a bare name (``node_modules``) matches that name at any depth
    - a trailing slash (``build/``) matches directories only
    - a leading slash (``/dist``) anchors the pattern to the base directory
    - ``*``, ``?``, ``[abc]`` and ``**`` behave as in Git
    - ``!pattern`` re-includes a previously excluded path
    - blank lines and ``#`` comments are ignored

    Later patterns override earlier ones, which is what makes negation work.

    A directory is also tested through a synthetic child (see
    ``PathExclusionFilter``), so ``dir/*`` hides ``dir`` itself. A later
    ``!dir/keep.txt`` cannot bring the file back, because the directory that
    holds it is never listed.

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules.from_patterns(["*.log", "!keep.log", "build/"])
        >>> rules.exclude("debug.log"), rules.exclude("keep.log")
        (True, False)
        >>> rules.exclude("build/"), rules.exclude("build")
        (True, False)
        >>> rules.exclude("src/nested/build/")
        True
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            TextconIOError: If a rules file cannot be read.
            PatternError: If a rules file contains an invalid pattern.
        """
        self._patterns: List[Pattern] = []
        self.spec = PathSpec(self._patterns)

        if rules_files is not None:
            self.load_rules(rules_files)

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "GitIgnoreExclusionRules":
        """Build rules from an iterable of pattern strings.

        Raises:
            PatternError: If any pattern cannot be compiled.
        """
        rules = cls()
        for pattern in patterns:
            rules.add_rule(pattern)
        return rules

    def exclude(self, path: str) -> bool:
        """Check if a path should be excluded based on the loaded patterns.

        The path is matched exactly as provided - no path normalization is performed.

        Example:
            >>> rules = GitIgnoreExclusionRules.from_patterns(["*.pyc", "!important.pyc"])
            >>> rules.exclude("test.pyc"), rules.exclude("important.pyc")
            (True, False)
        """
        return bool(self.spec.match_file(path))

    def match_state(self, path: str) -> Optional[bool]:
        """Return the verdict of the last pattern that matches ``path``.

        Returns:
            True if the last matching pattern excludes the path, False if it is a
            negation that re-includes it, and None if no pattern matches at all.
            The distinction lets nested ignore files defer to their parents.

        Example:
            >>> rules = GitIgnoreExclusionRules.from_patterns(["*.log", "!keep.log"])
            >>> rules.match_state("a.log"), rules.match_state("keep.log"), rules.match_state("a.txt")
            (True, False, None)
        """
        state: Optional[bool] = None
        for pattern in self._patterns:
            if pattern.include is None:
                continue
            if pattern.match_file(path) is not None:
                state = bool(pattern.include)
        return state

    def has_rules(self) -> bool:
        """Return True if at least one effective pattern has been loaded."""
        return any(pattern.include is not None for pattern in self._patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and combine .gitignore patterns from one or more files.

        Patterns are appended in file order, after any patterns already loaded.

        Raises:
            TextconIOError: If a rules file does not exist or cannot be read.
            PatternError: If a rules file contains an invalid pattern.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            try:
                with open(path, "r", encoding="utf-8") as f:
                    lines = f.read().splitlines()
            except (OSError, UnicodeError) as e:
                raise TextconIOError(path, str(e)) from e

            for line in lines:
                self.add_rule(line)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern directly.

        Example:
            >>> rules = GitIgnoreExclusionRules()
            >>> rules.add_rule("build/")
            >>> rules.exclude("build/output.txt")
            True

        Raises:
            PatternError: If the pattern cannot be compiled.
        """
        try:
            pattern = GitWildMatchPattern(rule)
        except (ValueError, TypeError) as e:
            raise PatternError(rule, str(e)) from e

        self._patterns.append(pattern)
        self.spec = PathSpec(self._patterns)
