"""Template processing: replace every reference in a text with its expansion."""

import logging
from pathlib import Path

from textcon.config import TemplateConfig
from textcon.expander import process_reference
from textcon.io.text_file_reader import read_text_file
from textcon.references import find_references
from textcon.types import PathType

logger = logging.getLogger(__name__)


def process_template(template: str, config: TemplateConfig) -> str:
    """Expand all ``{{ @... }}`` references in ``template``.

    References are replaced from the last to the first, so the offsets of the
    references still to be processed stay valid while the text changes length.
    The first reference that cannot be expanded aborts processing; no partially
    expanded text is returned.

    Args:
        template: Text containing zero or more references.
        config: Settings shared by all expansions.

    Returns:
        The expanded text. A template without references is returned unchanged.

    Raises:
        TextconError: The error of the first failing reference.

    Example:
        >>> config = TemplateConfig.create(add_path_comments=False)
        >>> process_template("no references here", config)
        'no references here'
    """
    references = find_references(template)
    if not references:
        return template

    result = template
    for reference in reversed(references):
        logger.info("Expanding %s", reference.reference)
        replacement = process_reference(reference.reference, config, reference.force)
        result = result[: reference.start] + replacement + result[reference.end :]  # noqa: E203
    return result


def process_template_file(path: PathType, config: TemplateConfig) -> str:
    """Read ``path`` as UTF-8 text and expand the references it contains.

    Raises:
        ReferenceFileNotFoundError: If the template file does not exist.
        TextconIOError: If the template file cannot be read.
    """
    logger.debug("Processing template file %s", path)
    return process_template(read_text_file(Path(path)), config)
