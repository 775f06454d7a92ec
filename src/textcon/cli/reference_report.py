"""Reports on the references of a template, used by ``--list`` and ``--dry-run``.

Nothing here expands a reference; references are only resolved so that their
target, existence and type can be shown.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from humanfriendly import format_size

from textcon.exceptions import TextconError
from textcon.path_resolver import resolve_reference_path
from textcon.references import TemplateReference
from textcon.types import FileType

logger = logging.getLogger(__name__)


@dataclass
class ReferenceInfo:
    """What is known about one reference without expanding it."""

    reference: str
    start: int
    end: int
    force: bool
    path: Optional[str] = None
    exists: Optional[bool] = None
    file_type: Optional[FileType] = None
    size: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        """Return the fields that are set, ready for JSON serialization."""
        data = {key: value for key, value in asdict(self).items() if value is not None}
        if self.file_type is not None:
            data["file_type"] = self.file_type.value
        return data


def inspect_reference(reference: TemplateReference, base_dir: Path) -> ReferenceInfo:
    """Resolve ``reference`` against ``base_dir`` and describe its target."""
    info = ReferenceInfo(reference.reference, reference.start, reference.end, reference.force)
    try:
        path = resolve_reference_path(reference.reference, base_dir)
    except TextconError as e:
        info.error = str(e)
        return info

    info.path = str(path)
    info.exists = path.exists()
    if path.is_file():
        info.file_type = FileType.FILE
        info.size = path.stat().st_size
    elif path.is_dir():
        info.file_type = FileType.DIRECTORY
    return info


def format_plain(infos: Iterable[ReferenceInfo]) -> str:
    """One reference per line, exactly as written in the template."""
    return "".join(f"{info.reference}\n" for info in infos)


def format_detailed(infos: Iterable[ReferenceInfo]) -> str:
    """A block per reference with its position, force marker and resolved target.

    Example:
        >>> info = ReferenceInfo("@a.txt", 0, 12, False, "/work/a.txt", True, FileType.FILE, 2048)
        >>> print(format_detailed([info]), end="")
        Reference: @a.txt
          Position: 0..12
          Force: no
          Path: /work/a.txt
          Exists: yes
          Type: File (2.05 KB)
        <BLANKLINE>
    """
    lines: List[str] = []
    for info in infos:
        lines.append(f"Reference: {info.reference}")
        lines.append(f"  Position: {info.start}..{info.end}")
        lines.append(f"  Force: {'yes' if info.force else 'no'}")
        if info.error is not None:
            lines.append(f"  Error: {info.error}")
        else:
            lines.append(f"  Path: {info.path}")
            lines.append(f"  Exists: {'yes' if info.exists else 'no'}")
            if info.file_type is FileType.FILE:
                lines.append(f"  Type: File ({format_size(info.size or 0)})")
            elif info.file_type is FileType.DIRECTORY:
                lines.append("  Type: Directory")
        lines.append("")
    return "".join(f"{line}\n" for line in lines)


def format_json(infos: Iterable[ReferenceInfo]) -> str:
    """A pretty-printed JSON array with one object per reference."""
    return json.dumps([info.to_dict() for info in infos], indent=2) + "\n"


LIST_FORMATTERS = {
    "plain": format_plain,
    "detailed": format_detailed,
    "json": format_json,
}


def dry_run(references: Iterable[TemplateReference], base_dir: Path) -> Tuple[str, int]:
    """Validate every reference and summarize the result.

    A reference is valid when it resolves inside ``base_dir`` to an existing
    path. Each verdict is logged; the returned summary is meant for stdout.

    Returns:
        The summary text and the number of invalid references.
    """
    total = valid = 0
    for reference in references:
        total += 1
        info = inspect_reference(reference, base_dir)
        if info.error is not None:
            logger.error("✗ %s -> Error: %s", info.reference, info.error)
        elif not info.exists:
            logger.warning("✗ %s -> %s (not found)", info.reference, info.path)
        else:
            logger.info("✓ %s -> %s", info.reference, info.path)
            valid += 1

    invalid = total - valid
    summary = [f"\nSummary: {total} references found"]
    if valid:
        summary.append(f"  ✓ {valid} valid")
    if invalid:
        summary.append(f"  ✗ {invalid} invalid")
    return "\n".join(summary) + "\n", invalid
