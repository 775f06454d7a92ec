"""Scanner for ``{{ @path }}`` reference tokens embedded in text."""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Pattern

from textcon.exceptions import TemplateParseError

logger = logging.getLogger(__name__)

REFERENCE_PATTERN = r"\{\{\s*(@!?[^}]*?)\s*\}\}"


def compile_reference_pattern(pattern: str = REFERENCE_PATTERN) -> Pattern[str]:
    """Compile the regular expression used to locate reference tokens.

    Args:
        pattern: Regular expression with one capturing group for the reference.

    Returns:
        The compiled pattern.

    Raises:
        TemplateParseError: If the pattern is not a valid regular expression.

    Example:
        >>> compile_reference_pattern().pattern == REFERENCE_PATTERN
        True
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise TemplateParseError(e.pos or 0, str(e)) from e


_REFERENCE_RE = compile_reference_pattern()


@dataclass(frozen=True)
class TemplateReference:
    """One reference token found in a template.

    Attributes:
        full_match: The verbatim token including the surrounding braces.
        reference: The inner reference, starting with ``@`` and stripped of whitespace.
        start: Index of the first character of the token in the scanned text.
        end: Index one past the last character of the token.
        force: True when the reference starts with ``@!``.
    """

    full_match: str
    reference: str
    start: int
    end: int
    force: bool


def iter_references(text: str) -> Iterator[TemplateReference]:
    """Lazily yield the references in ``text`` in source order.

    Matching is leftmost-first and non-overlapping. Malformed tokens are skipped
    rather than reported.

    Example:
        >>> [r.reference for r in iter_references("a {{ @x.txt }} b {{{ @!y/ }}}")]
        ['@x.txt', '@!y/']
    """
    for match in _REFERENCE_RE.finditer(text):
        reference = match.group(1).strip()
        yield TemplateReference(
            full_match=match.group(0),
            reference=reference,
            start=match.start(),
            end=match.end(),
            force=reference.startswith("@!"),
        )


def find_references(text: str) -> List[TemplateReference]:
    """Return every reference in ``text``, ordered by ascending ``start``.

    Example:
        >>> refs = find_references("Start {{ @file.txt }} end")
        >>> (refs[0].reference, refs[0].start, refs[0].end, refs[0].force)
        ('@file.txt', 6, 21, False)
    """
    references = list(iter_references(text))
    logger.debug("Found %d reference(s)", len(references))
    return references
