"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Composite exclusion rules that combine multiple rule types.

    A path is excluded if ANY of the constituent rules excludes it. This is how
    the hidden-entry rule and user supplied patterns are applied together.

    Attributes:
        rules (List[BaseExclusionRules]): List of constituent exclusion rules.

    Example:
        >>> from textcon.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> from textcon.exclusion_rules.hidden_rules import HiddenEntryRules
        >>> composite = CompositeExclusionRules(
        ...     [HiddenEntryRules(), GitIgnoreExclusionRules.from_patterns(["*.log"])]
        ... )
        >>> composite.exclude(".env"), composite.exclude("app.log"), composite.exclude("app.py")
        (True, True, False)
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Raises:
            ValueError: If rules list is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        return any(rule.exclude(path) for rule in self.rules)
