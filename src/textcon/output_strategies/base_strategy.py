"""Output strategy base class defining how an expanded document is wrapped for output.

The strategy is chosen once, when the command line is parsed, and applied to the
whole expanded document. The engine itself never formats its output.
"""

from abc import ABC, abstractmethod


class OutputStrategy(ABC):
    """Abstract base class for the formats an expanded document can be written in.

    Output is produced in three phases:
    1. Start - an opening wrapper
    2. Content - the document, escaped as the format requires
    3. End - a closing wrapper

    Example:
        >>> class BracketStrategy(OutputStrategy):
        ...     def format_start(self) -> str:
        ...         return "["
        ...
        ...     def format_content(self, content: str) -> str:
        ...         return content
        ...
        ...     def format_end(self) -> str:
        ...         return "]"
        >>> BracketStrategy().format_document("text")
        '[text]'
    """

    @abstractmethod
    def format_start(self) -> str:
        """Return the text written before the document."""
        pass

    @abstractmethod
    def format_content(self, content: str) -> str:
        """Return ``content`` escaped for this format, without any wrapper."""
        pass

    @abstractmethod
    def format_end(self) -> str:
        """Return the text written after the document."""
        pass

    def format_document(self, content: str) -> str:
        """Wrap and escape a complete document."""
        return self.format_start() + self.format_content(content) + self.format_end()
