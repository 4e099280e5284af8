"""Markdown + LaTeX rendering shared by the learner window and the progress page.

Question bodies, options and explanations are authored as Markdown with
``$...$`` math. Only the Markdown is converted here; MathJax typesets the math
when the HTML is displayed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt

MATHJAX_CDN_URL = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"

_MATHJAX_CONFIG = (
    "window.MathJax = { tex: { inlineMath: [['$','$']], displayMath: [['$$','$$']] }, "
    "svg: { fontCache: 'global' } };"
)

_PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{title}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; color: {text_color}; }}
      .quiz-content {{ font-size: {font_size}pt; line-height: 1.5; }}
      .quiz-content .explanation {{ border-left: 4px solid #1f9aa5; padding-left: 0.75rem; }}
    </style>
    <script>{mathjax_config}</script>
    <script defer src="{mathjax_url}"></script>
  </head>
  <body>
    <div class="quiz-content">{body}</div>
  </body>
</html>"""


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Turns quiz Markdown into HTML fragments or standalone MathJax pages."""

    allow_raw_html: bool = False
    empty_placeholder: str = "<p><em>No content provided.</em></p>"
    text_color: str = "#1f2937"
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.allow_raw_html}).enable(
            ["table", "strikethrough"]
        )

    def render_fragment(self, markdown_text: str) -> str:
        source = markdown_text.strip()
        if not source:
            return self.empty_placeholder
        return self._markdown.render(source)

    def render_inline(self, markdown_text: str) -> str:
        """Render an option label without the surrounding paragraph."""
        return self._markdown.renderInline(markdown_text.strip())

    def wrap_with_mathjax(self, body_html: str, title: str = "LearnQuiz", font_size: int = 14) -> str:
        return _PAGE_TEMPLATE.format(
            title=html.escape(title),
            text_color=self.text_color,
            font_size=font_size,
            mathjax_config=_MATHJAX_CONFIG,
            mathjax_url=MATHJAX_CDN_URL,
            body=body_html,
        )

    def render_full_document(self, markdown_text: str, title: str = "LearnQuiz", font_size: int = 14) -> str:
        return self.wrap_with_mathjax(self.render_fragment(markdown_text), title=title, font_size=font_size)


# MarkdownIt rendering does not mutate the parser, so both threads share this.
renderer = MarkdownMathRenderer()
