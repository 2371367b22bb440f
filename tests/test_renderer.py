"""Tests for markdown rendering."""

from unittest.mock import patch

from notestage.core.renderer import MarkdownRenderer, typographic


class TestMarkdownRendererRender:
    """Tests for MarkdownRenderer.render()."""

    def test__simple_markdown__renders_to_html(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("# Title\n\nSome **bold** text.")

        assert "<h1" in html
        assert "<strong>bold</strong>" in html

    def test__known_language__highlighted(self, renderer: MarkdownRenderer) -> None:
        """Highlight fenced blocks tagged with a known language."""
        html = renderer.render('```python\nprint("hi")\n```\n')

        assert '<pre><code class="highlight language-python">' in html
        assert "<span" in html

    def test__unknown_language__escaped_plain_text(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("```nosuchlang\n<b>x</b>\n```\n")

        assert '<pre><code class="highlight">&lt;b&gt;x&lt;/b&gt;' in html
        assert "<span" not in html

    def test__no_language__escaped_plain_text(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("```\na < b\n```\n")

        assert '<pre><code class="highlight">a &lt; b' in html

    def test__highlighter_error__falls_back_for_that_block(self, renderer: MarkdownRenderer) -> None:
        """A failing block degrades to plain text without breaking the rest."""
        with patch("notestage.core.renderer.highlight", side_effect=RuntimeError("boom")):
            html = renderer.render("Intro text\n\n```python\nx = 1\n```\n\nOutro text\n")

        assert '<pre><code class="highlight">x = 1' in html
        assert "Intro text" in html
        assert "Outro text" in html

    def test__raw_html__passes_through(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render('<div class="callout">Hi</div>\n')

        assert '<div class="callout">Hi</div>' in html

    def test__bare_url__autolinked(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("Visit https://example.com today.")

        assert '<a href="https://example.com">https://example.com</a>' in html

    def test__note_link__rendered_as_anchor(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("Welcome to [my-notes](/n/my-notes)!")

        assert 'Welcome to <a href="/n/my-notes">my-notes</a>!' in html

    def test__prose__typographic_substitutions(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("Wait... it's done -- (c) 2025")

        assert "Wait…" in html
        assert "it’s" in html
        assert "–" in html
        assert "©" in html

    def test__inline_code__not_substituted(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("Run `a -- b...`")

        assert "<code>a -- b...</code>" in html


class TestTypographic:
    """Tests for typographic()."""

    def test__double_quotes__curled(self) -> None:
        assert typographic('She said "hello".') == "She said “hello”."

    def test__dashes__replaced(self) -> None:
        assert typographic("a --- b -- c") == "a — b – c"

    def test__plain_text__unchanged(self) -> None:
        assert typographic("plain text") == "plain text"
