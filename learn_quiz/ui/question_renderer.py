"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from learn_quiz.core.markdown_math_renderer import renderer
from learn_quiz.core.models import Question


def render_question_document(question: Question, font_size: int = 14) -> str:
    """Render a question body as an HTML document for QWebEngineView.

    Options are rendered by the option buttons, so only the body and the
    difficulty/type header end up in the document.
    """
    header = f"*{question.difficulty.value.title()} · {question.type.value.replace('_', ' ')}*"
    markdown = f"{header}\n\n{question.body.strip() or '(No question text)'}"
    return renderer.render_full_document(markdown, font_size=font_size)


def render_explanation_document(question: Question, font_size: int = 14) -> str:
    """Render the body followed by the explanation, shown once the answer is resolved."""
    body_html = renderer.render_fragment(question.body)
    if question.explanation:
        explanation_html = renderer.render_fragment(f"**Explanation:** {question.explanation}")
        body_html += f'<div class="explanation">{explanation_html}</div>'
    return renderer.wrap_with_mathjax(body_html, font_size=font_size)
