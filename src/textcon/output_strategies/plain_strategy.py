"""Plain text output strategy: the expanded document is written unchanged."""

from .base_strategy import OutputStrategy


class PlainOutputStrategy(OutputStrategy):
    """Output strategy that writes the document verbatim.

    Example:
        >>> PlainOutputStrategy().format_document("<b>as is</b>")
        '<b>as is</b>'
    """

    def format_start(self) -> str:
        return ""

    def format_content(self, content: str) -> str:
        return content

    def format_end(self) -> str:
        return ""
