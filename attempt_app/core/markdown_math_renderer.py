"""Markdown + LaTeX rendering helpers shared by the Qt window and the attempt API.

Architecture note:
    Question and option text is converted to HTML with markdown-it and the math is
    typeset by MathJax at display time. The Qt window shows the full document in a
    QWebEngineView while the API returns bare fragments, so both front-ends render
    identical markup from the same source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt

from attempt_app.core.models import Question

_MATHJAX_SCRIPT = (
    "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
)


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (option text) without wrapping paragraph tags."""
        return self._markdown.renderInline(markdown_text.strip())

    def render_question_fragment(self, question: Question) -> str:
        parts = []
        if question.subject_name:
            parts.append(f'<p class="subject">{html.escape(question.subject_name)}</p>')
        parts.append(self.render_fragment(question.text))
        return "\n".join(parts)

    def wrap_with_mathjax(
        self,
        body_html: str,
        title: str = "AttemptQt",
        font_size: int = 14,
        text_color: str = "#000000",
    ) -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""

        return f"""<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{html.escape(title)}</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: transparent; color: {text_color}; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
      .subject {{ font-size: 0.8em; font-weight: 600; color: #0078D4; margin: 0 0 0.5rem 0; }}
      .explanation {{ font-size: 0.9em; border-left: 3px solid #00B294; padding-left: 0.75rem; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src=\"{_MATHJAX_SCRIPT}\"></script>
  </head>
  <body>
    <div class=\"question-html\">{body_html}</div>
  </body>
</html>"""

    def render_full_document(self, markdown_text: str, title: str = "AttemptQt", font_size: int = 14) -> str:
        fragment = self.render_fragment(markdown_text)
        return self.wrap_with_mathjax(fragment, title=title, font_size=font_size)


renderer = MarkdownMathRenderer()
# Shared instance; MarkdownIt is safe for concurrent read-only renders, so the
# Qt thread and the API thread can both use it.
