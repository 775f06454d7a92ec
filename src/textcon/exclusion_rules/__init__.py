"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .hidden_rules import HiddenEntryRules
from .path_filter import PathExclusionFilter

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "GitIgnoreExclusionRules",
    "HiddenEntryRules",
    "PathExclusionFilter",
]
