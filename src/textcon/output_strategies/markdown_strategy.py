"""Markdown output strategy."""

from .base_strategy import OutputStrategy


class MarkdownOutputStrategy(OutputStrategy):
    """Output strategy that places the document in a fenced code block.

    The content is not escaped. A document that itself contains a fence line
    will close the block early.

    Example:
        >>> print(MarkdownOutputStrategy().format_document("A\\nB"))
        ```
        A
        B
        ```
    """

    def format_start(self) -> str:
        return "```\n"

    def format_content(self, content: str) -> str:
        return content

    def format_end(self) -> str:
        return "\n```"
