from abc import ABC, abstractmethod
from typing import Sequence, Union

from textcon.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for path exclusion rules.

    Implementations decide whether a path, given relative to the base directory
    with forward slashes, should be hidden from tree rendering and expansion.
    Directory paths are presented with a trailing slash so that directory-only
    patterns can tell them apart from files of the same name.

    Loading rules from files and adding single rules are optional capabilities.

    Example:
        >>> from textcon.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule('*.log')
        >>> rules.exclude('logs/app.log')
        True
        >>> from textcon.exclusion_rules.hidden_rules import HiddenEntryRules
        >>> HiddenEntryRules().exclude('src/.env')
        True
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): Path relative to the base directory, using ``/`` separators.
                Directories end with ``/``.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load exclusion rules from one or more files.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
