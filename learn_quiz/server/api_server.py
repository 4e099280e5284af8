"""FastAPI server that exposes read-only session progress to dashboards."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from learn_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from learn_quiz.core.markdown_math_renderer import renderer
from learn_quiz.core.models import AnswerState, Badge, NotificationJob, NotificationKind
from learn_quiz.core.quiz_manager import QuizManager
from learn_quiz.core.result_summary import AnswerBreakdown

_PROGRESS_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>LearnQuiz Progress</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.4); }
      .hidden { display: none; }
      .muted { color: #94a3b8; }
      .option { padding: 0.5rem 0.75rem; border-radius: 0.5rem; margin: 0.25rem 0; background: #1e293b; }
      .option.selected { outline: 2px solid #1f9aa5; }
      .option.correct { background: #14532d; }
      #timer { color: #facc15; }
      .right { color: #4ade80; }
      .wrong { color: #f87171; }
    </style>
    <script>
      window.MathJax = { tex: { inlineMath: [['$','$']], displayMath: [['$$','$$']] }, svg: { fontCache: 'global' } };
    </script>
    <script defer src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"></script>
  </head>
  <body>
    <section class="card">
      <h1>Learner progress</h1>
      <p id="status" class="muted">Waiting for the learner to start a quiz…</p>
      <p id="timer"></p>
    </section>
    <section class="card hidden" id="question-card">
      <div id="question"></div>
      <div id="options"></div>
      <p id="answer-status" class="muted"></p>
    </section>
    <section class="card hidden" id="result-card">
      <h2 id="feedback"></h2>
      <p id="summary"></p>
      <p id="rewards"></p>
      <h3>Question breakdown</h3>
      <ol id="breakdown"></ol>
    </section>
    <script>
      const statusEl = document.getElementById('status');
      const timerEl = document.getElementById('timer');
      const questionCard = document.getElementById('question-card');
      const questionEl = document.getElementById('question');
      const optionsEl = document.getElementById('options');
      const answerStatusEl = document.getElementById('answer-status');
      const resultCard = document.getElementById('result-card');

      async function refresh() {
        const response = await fetch('/api/session');
        const data = await response.json();
        if (data.status === 'not_started') {
          statusEl.textContent = 'Waiting for the learner to start a quiz…';
          questionCard.classList.add('hidden');
          return;
        }
        statusEl.textContent = `Question ${data.question_number} of ${data.question_count} · Score ${data.score_so_far}`;
        timerEl.textContent = data.remaining_seconds === null ? '' : `${data.remaining_seconds}s remaining`;
        if (data.question_html) {
          questionCard.classList.remove('hidden');
          questionEl.innerHTML = data.question_html;
          optionsEl.innerHTML = '';
          for (const option of data.options) {
            const div = document.createElement('div');
            div.className = 'option';
            if (data.selected_option_ids.includes(option.id)) div.classList.add('selected');
            if (data.correct_option_ids && data.correct_option_ids.includes(option.id)) div.classList.add('correct');
            div.innerHTML = `<strong>${option.id}.</strong> ${option.html}`;
            optionsEl.appendChild(div);
          }
          answerStatusEl.textContent = data.answer_status.replace('_', ' ');
          if (window.MathJax && window.MathJax.typesetPromise) window.MathJax.typesetPromise();
        }
        if (data.status === 'completed') {
          const resultResponse = await fetch('/api/session/result');
          if (resultResponse.ok) {
            const result = await resultResponse.json();
            resultCard.classList.remove('hidden');
            document.getElementById('feedback').textContent = result.feedback_message;
            document.getElementById('summary').textContent =
              `${result.correct_count} of ${result.question_count} correct (${result.percentage}%) · ${result.total_score} points`;
            const badges = result.badges_awarded.map(b => `${b.icon} ${b.display_name}`).join(', ');
            document.getElementById('rewards').textContent = `+${result.xp_awarded} XP ${badges}`;
            const breakdownEl = document.getElementById('breakdown');
            breakdownEl.innerHTML = '';
            for (const answer of result.answers) {
              const item = document.createElement('li');
              item.className = answer.correct === true ? 'right' : (answer.correct === false ? 'wrong' : 'muted');
              item.textContent = `${answer.verdict} · ${answer.points} points`;
              if (answer.explanation) {
                const details = document.createElement('details');
                const summary = document.createElement('summary');
                summary.textContent = 'Explanation';
                details.appendChild(summary);
                details.appendChild(document.createTextNode(answer.explanation));
                item.appendChild(details);
              }
              breakdownEl.appendChild(item);
            }
          }
        } else {
          resultCard.classList.add('hidden');
        }
      }

      refresh();
      setInterval(refresh, 2000);
    </script>
  </body>
</html>
"""


class OptionView(BaseModel):
    id: str
    html: str


class SessionView(BaseModel):
    """Snapshot of the learner's current position in the quiz."""

    status: str
    question_number: int | None = None
    question_count: int = 0
    question_id: str | None = None
    question_type: str | None = None
    difficulty: str | None = None
    question_html: str | None = None
    options: list[OptionView] = []
    phase: str | None = None
    answer_status: str | None = None
    selected_option_ids: list[str] = []
    correct_option_ids: list[str] | None = None
    explanation: str | None = None
    remaining_seconds: int | None = None
    time_limit_seconds: int | None = None
    score_so_far: int = 0


class BadgeView(BaseModel):
    key: str
    display_name: str
    description: str
    icon: str


class AnswerView(BaseModel):
    question_number: int
    question_id: str
    verdict: str
    explanation: str | None = None
    status: str
    selected_option_ids: list[str]
    response_text: str | None
    correct: bool | None
    points: int
    elapsed_millis: int | None


class ResultView(BaseModel):
    question_count: int
    total_score: int
    correct_count: int
    total_elapsed_millis: int
    percentage: int
    is_passing: bool
    feedback_message: str
    xp_awarded: int
    badges_awarded: list[BadgeView]
    answers: list[AnswerView]


class NotificationView(BaseModel):
    kind: str
    scheduled_offset_millis: int
    duration_millis: int
    xp: int | None = None
    badge: BadgeView | None = None


def _badge_view(badge: Badge) -> BadgeView:
    return BadgeView(
        key=badge.key,
        display_name=badge.display_name,
        description=badge.description,
        icon=badge.icon,
    )


def _answer_view(number: int, answer: AnswerState, row: AnswerBreakdown | None) -> AnswerView:
    return AnswerView(
        question_number=number,
        question_id=answer.question_id,
        verdict=row.verdict if row is not None else answer.status.value,
        explanation=row.explanation if row is not None else None,
        status=answer.status.value,
        selected_option_ids=sorted(answer.selected_option_ids),
        response_text=answer.response_text,
        correct=answer.correct,
        points=answer.points,
        elapsed_millis=answer.elapsed_millis,
    )


def _notification_view(job: NotificationJob) -> NotificationView:
    view = NotificationView(
        kind=job.kind.value,
        scheduled_offset_millis=job.scheduled_offset_millis,
        duration_millis=job.duration_millis,
    )
    if job.kind is NotificationKind.XP:
        view.xp = job.payload
    else:
        view.badge = _badge_view(job.payload)
    return view


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title="LearnQuiz Progress API", version="0.1.0")
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.get("/", response_class=HTMLResponse)
    def serve_progress_page() -> str:
        return _PROGRESS_PAGE_HTML

    @app.get("/api/session", response_model=SessionView)
    def get_session(manager: QuizManager = Depends(quiz_manager_dep)) -> SessionView:
        snapshot = manager.get_snapshot()
        if snapshot is None:
            return SessionView(status="not_started", question_count=manager.get_question_count())

        view = SessionView(
            status=snapshot.status.value,
            question_count=snapshot.question_count,
            remaining_seconds=snapshot.remaining_seconds,
            score_so_far=snapshot.score_so_far,
        )
        question = snapshot.question
        answer = snapshot.answer
        if question is None or answer is None:
            return view

        view.question_number = (snapshot.question_index or 0) + 1
        view.question_id = question.id
        view.question_type = question.type.value
        view.difficulty = question.difficulty.value
        view.question_html = renderer.render_fragment(question.body)
        view.options = [
            OptionView(id=option.id, html=renderer.render_inline(option.text))
            for option in question.options
        ]
        view.phase = snapshot.phase.value if snapshot.phase else None
        view.answer_status = answer.status.value
        view.selected_option_ids = sorted(answer.selected_option_ids)
        view.time_limit_seconds = question.time_limit_seconds
        # Correct answers stay hidden until the learner has revealed or timed out.
        if answer.status.is_resolved:
            view.correct_option_ids = sorted(question.correct_option_ids)
            view.explanation = question.explanation
        return view

    @app.get("/api/session/result", response_model=ResultView)
    def get_result(manager: QuizManager = Depends(quiz_manager_dep)) -> ResultView:
        result = manager.get_result()
        if result is None:
            raise HTTPException(status_code=409, detail="Quiz session has not been completed.")
        rows = {row.question_id: row for row in manager.get_answer_breakdown()}
        return ResultView(
            question_count=result.question_count,
            total_score=result.total_score,
            correct_count=result.correct_count,
            total_elapsed_millis=result.total_elapsed_millis,
            percentage=result.percentage,
            is_passing=result.is_passing,
            feedback_message=result.feedback_message,
            xp_awarded=result.xp_awarded,
            badges_awarded=[_badge_view(badge) for badge in result.badges_awarded],
            answers=[
                _answer_view(number, answer, rows.get(answer.question_id))
                for number, answer in enumerate(result.answers, start=1)
            ],
        )

    @app.get("/api/notifications", response_model=list[NotificationView])
    def get_notifications(manager: QuizManager = Depends(quiz_manager_dep)) -> list[NotificationView]:
        return [_notification_view(job) for job in manager.get_notification_jobs()]

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
