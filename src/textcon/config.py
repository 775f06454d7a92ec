"""Configuration threaded through every expansion."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from textcon.exceptions import DirectoryNotFoundError
from textcon.exclusion_rules.base_rules import BaseExclusionRules
from textcon.exclusion_rules.git_rules import GitIgnoreExclusionRules
from textcon.exclusion_rules.path_filter import PathExclusionFilter
from textcon.types import PathType

# Largest file included without the force marker (64 KiB)
MAX_FILE_SIZE = 64 * 1024
DEFAULT_MAX_TREE_DEPTH = 5


@dataclass(frozen=True)
class TemplateConfig:
    """Settings shared by every reference expanded in one processing call.

    ``base_dir`` is canonicalized on construction, so every instance refers to
    an existing directory by its canonical path.

    Attributes:
        base_dir: The sandbox root that references are resolved against.
        max_tree_depth: Directory levels listed in trees and deep inclusion, or
            None for unlimited.
        max_file_size: Largest file size in bytes included without ``@!``.
        add_path_comments: Whether expansions are preceded by a provenance comment.
        use_gitignore: Whether ``.gitignore`` files are honoured when walking.
        exclude: Patterns hiding paths relative to ``base_dir``, or None.

    Raises:
        DirectoryNotFoundError: If ``base_dir`` is missing or not a directory.
        ValueError: If ``max_tree_depth`` or ``max_file_size`` is negative.
    """

    base_dir: Path
    max_tree_depth: Optional[int] = DEFAULT_MAX_TREE_DEPTH
    max_file_size: int = MAX_FILE_SIZE
    add_path_comments: bool = True
    use_gitignore: bool = True
    exclude: Optional[BaseExclusionRules] = None

    def __post_init__(self) -> None:
        base_dir = Path(self.base_dir)
        try:
            canonical = base_dir.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise DirectoryNotFoundError(base_dir) from e
        if not canonical.is_dir():
            raise DirectoryNotFoundError(canonical)
        object.__setattr__(self, "base_dir", canonical)

        if self.max_tree_depth is not None and self.max_tree_depth < 0:
            raise ValueError(f"max_tree_depth cannot be negative, got {self.max_tree_depth}")
        if self.max_file_size < 0:
            raise ValueError(f"max_file_size cannot be negative, got {self.max_file_size}")

    @classmethod
    def create(
        cls,
        base_dir: Optional[PathType] = None,
        *,
        exclude_patterns: Optional[Sequence[str]] = None,
        **kwargs: Any,
    ) -> "TemplateConfig":
        """Build a configuration, defaulting ``base_dir`` to the current directory.

        Args:
            base_dir: Sandbox root. Defaults to the current working directory.
            exclude_patterns: Gitignore-style patterns compiled into ``exclude``.
            **kwargs: Any other TemplateConfig field.

        Raises:
            PatternError: If an exclude pattern cannot be compiled.

        Example:
            >>> config = TemplateConfig.create(exclude_patterns=["*.log"], add_path_comments=False)
            >>> config.base_dir == Path.cwd().resolve(), config.exclude.exclude("a.log")
            (True, True)
        """
        if exclude_patterns:
            kwargs["exclude"] = GitIgnoreExclusionRules.from_patterns(exclude_patterns)
        return cls(base_dir=Path.cwd() if base_dir is None else Path(base_dir), **kwargs)

    def exclusion_filter(self) -> PathExclusionFilter:
        """Filter hiding dot entries and the configured exclusions below ``base_dir``."""
        return PathExclusionFilter(self.base_dir, self.exclude)
