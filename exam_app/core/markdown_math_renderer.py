"""Markdown + LaTeX rendering for question, option and explanation text.

Math delimiters (``$...$`` / ``$$...$$``) are left untouched in the HTML so a
client-side math engine can typeset them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt

from exam_app.core.models import Option, RuntimeQuestion


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments."""

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
            return ""
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render without the wrapping paragraph, for option labels."""
        return self._markdown.renderInline(markdown_text.strip())

    def render_question(self, question: RuntimeQuestion) -> dict[str, object]:
        """HTML payload for a runtime question, options in display order."""
        return {
            "id": question.id,
            "topic": question.topic,
            "question_html": self.render_fragment(question.question.question),
            "options": [self._render_option(option) for option in question.shuffled_options],
        }

    def _render_option(self, option: Option) -> dict[str, object]:
        return {"label": option.label, "html": self.render_inline(option.value)}


renderer = MarkdownMathRenderer()
