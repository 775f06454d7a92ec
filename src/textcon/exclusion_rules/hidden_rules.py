"""Exclusion of hidden (dot-prefixed) entries."""

from .base_rules import BaseExclusionRules


class HiddenEntryRules(BaseExclusionRules):
    """Exclude every entry whose own name starts with a dot.

    Only the last path component is inspected: callers walk trees top-down and
    never reach the contents of an excluded directory.

    Example:
        >>> rules = HiddenEntryRules()
        >>> rules.exclude(".git/"), rules.exclude("src/.env"), rules.exclude("src/main.py")
        (True, True, False)
        >>> rules.exclude(".")
        False
    """

    def exclude(self, path: str) -> bool:
        name = path.rstrip("/").rsplit("/", 1)[-1]
        return name.startswith(".") and name not in (".", "..")
