import pytest

from textcon.output_strategies.base_strategy import OutputStrategy
from textcon.output_strategies.html_strategy import HTMLOutputStrategy
from textcon.output_strategies.markdown_strategy import MarkdownOutputStrategy
from textcon.output_strategies.plain_strategy import PlainOutputStrategy

DOCUMENT = '<!-- File: a.py -->\nif a < b && c > d:\n    print("ok")\n'


def test_base_strategy_is_abstract():
    with pytest.raises(TypeError):
        OutputStrategy()  # type: ignore[abstract]


def test_plain_strategy_is_verbatim():
    strategy = PlainOutputStrategy()
    assert strategy.format_start() == ""
    assert strategy.format_end() == ""
    assert strategy.format_document(DOCUMENT) == DOCUMENT


def test_markdown_strategy_fences_document():
    strategy = MarkdownOutputStrategy()
    assert strategy.format_document(DOCUMENT) == "```\n" + DOCUMENT + "\n```"
    assert strategy.format_content("a < b") == "a < b"


def test_html_strategy_escapes_markup():
    strategy = HTMLOutputStrategy()
    formatted = strategy.format_document(DOCUMENT)
    assert formatted.startswith("<pre><code>&lt;!-- File: a.py --&gt;\n")
    assert "if a &lt; b &amp;&amp; c &gt; d:" in formatted
    assert 'print("ok")' in formatted
    assert formatted.endswith("</code></pre>")


def test_html_strategy_escapes_ampersand_first():
    assert HTMLOutputStrategy().format_content("&lt;") == "&amp;lt;"


@pytest.mark.parametrize("strategy_class", [PlainOutputStrategy, MarkdownOutputStrategy, HTMLOutputStrategy])
def test_empty_document(strategy_class):
    strategy = strategy_class()
    assert strategy.format_document("") == strategy.format_start() + strategy.format_end()
