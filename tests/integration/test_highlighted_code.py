"""Integration tests with code markup copied from real documentation sites.

Syntax highlighters wrap code in divs, spans, buttons and gutter tables.
The default rules must never lose the code; the robust plugin must also keep
its line structure.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import time

import pytest
from utils import assert_markdown_valid

from html2md import Converter
from html2md.plugins import github_flavored, robust_code_block

HIGHLIGHTED_SNIPPETS = [
    pytest.param(
        """<pre><code class="lang-json"><div class="cm-s-neo">{
  "addresses": [
    {
      "address_id": "12348579-5d05-4e3e-a5e3-e61e3a5b1234",
      "city": "San Francisco"
    }
  ]
}</div></code></pre>""",
        ['"addresses"', '"address_id"', '"12348579-5d05-4e3e-a5e3-e61e3a5b1234"', '"San Francisco"'],
        id="json-in-highlighter-div",
    ),
    pytest.param(
        """<pre><code><div class="outer"><div class="inner">function hello() {
  return "world";
}</div></div></code></pre>""",
        ["function hello()", 'return "world"'],
        id="nested-divs",
    ),
    pytest.param(
        """<pre><code class="lang-go"><div class="highlight">
<span class="kwd">func</span> <span class="fn">main</span>() {
    <span class="fn">fmt.Println</span>(<span class="str">"Hello"</span>)
}</div></code></pre>""",
        ["func main() {", 'fmt.Println("Hello")'],
        id="token-spans",
    ),
    pytest.param(
        """<div class="CodeTabs"><div class="CodeTabs-toolbar"><button type="button" value="json">JSON</button></div>
<div class="CodeTabs-inner"><pre><button aria-label="Copy Code" class="rdmd-code-copy fa"></button>
<code class="rdmd-code lang-json" data-lang="json"><div class="cm-s-neo">{
  "status": "success",
  "data": {
    "id": 123
  }
}</div></code></pre></div></div>""",
        ['"status"', '"success"', '"data"', '"id": 123'],
        id="readme-code-tabs",
    ),
]


@pytest.mark.integration
class TestHighlightedCode:
    """Test code extraction from highlighter markup."""

    @pytest.mark.parametrize("html,expected", HIGHLIGHTED_SNIPPETS)
    def test_default_rules_keep_code(self, converter, html, expected):
        """Test that the default pre rule keeps the code text."""
        markdown = converter.convert_string(html)
        assert_markdown_valid(markdown)

        for snippet in expected:
            assert snippet in markdown

    @pytest.mark.parametrize("html,expected", HIGHLIGHTED_SNIPPETS)
    def test_robust_plugin_keeps_code(self, html, expected):
        """Test that the robust plugin keeps the code text in a fenced block."""
        markdown = Converter().use(robust_code_block()).convert_string(html)
        assert_markdown_valid(markdown)

        assert "```" in markdown
        for snippet in expected:
            assert snippet in markdown

    def test_token_lines_stay_separate(self):
        """Test that one div per line gives one line per div."""
        html = (
            '<pre><code class="language-js"><div class="token-line">const x = 1;</div>\n'
            '<div class="token-line">const y = 2;</div>\n'
            '<div class="token-line">console.log(x + y);</div></code></pre>'
        )
        markdown = Converter().use(robust_code_block()).convert_string(html)

        assert markdown == "```js\nconst x = 1;\n\nconst y = 2;\n\nconsole.log(x + y);\n```"

    def test_rouge_gutter_table(self):
        """Test a Jekyll/Rouge style table with a line-number gutter."""
        html = (
            '<div class="language-python highlighter-rouge"><div class="highlight"><pre class="highlight"><code>'
            '<table class="rouge-table"><tbody><tr>'
            '<td class="rouge-gutter gl"><pre class="lineno">1\n2\n</pre></td>'
            '<td class="rouge-code"><pre>x = 1\nprint(x)\n</pre></td>'
            "</tr></tbody></table></code></pre></div></div>"
        )
        markdown = Converter().use(github_flavored(), robust_code_block()).convert_string(html)

        assert markdown == "```\nx = 1\nprint(x)\n```"


@pytest.mark.integration
@pytest.mark.slow
class TestLargeDocuments:
    """Smoke tests for large inputs."""

    def test_big_document(self, gfm_converter):
        """Test that a large page converts in reasonable time."""
        section = (
            "<h2>Section</h2><p>Some <b>bold</b> and <a href='/x'>a link</a>.</p>"
            "<ul><li>one</li><li>two<ul><li>nested</li></ul></li></ul>"
            "<table><tr><th>k</th><th>v</th></tr><tr><td>a</td><td>1</td></tr></table>"
            "<pre><code>print('hi')</code></pre>"
        )
        html = "<html><body>" + section * 500 + "</body></html>"

        start = time.perf_counter()
        markdown = gfm_converter.convert_string(html)
        elapsed = time.perf_counter() - start

        assert_markdown_valid(markdown)
        assert markdown.count("## Section") == 500
        assert elapsed < 60
