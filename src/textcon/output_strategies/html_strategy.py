"""HTML output strategy.

The document is escaped and placed in a preformatted code block, so that it can
be embedded in a web page verbatim.
"""

from xml.sax.saxutils import escape as xml_escape

from .base_strategy import OutputStrategy


class HTMLOutputStrategy(OutputStrategy):
    """Output strategy that wraps the document in ``<pre><code>`` tags.

    Only ``&``, ``<`` and ``>`` are escaped; quotes are left alone since the
    content never ends up inside an attribute.

    Example:
        >>> strategy = HTMLOutputStrategy()
        >>> strategy.format_document('if x < 10 && y > 20: print("ok")')
        '<pre><code>if x &lt; 10 &amp;&amp; y &gt; 20: print("ok")</code></pre>'
    """

    def format_start(self) -> str:
        return "<pre><code>"

    def format_content(self, content: str) -> str:
        return xml_escape(content)

    def format_end(self) -> str:
        return "</code></pre>"
