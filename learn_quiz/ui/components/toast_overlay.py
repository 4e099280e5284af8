"""Toast overlay that renders scheduled reward notifications."""

from __future__ import annotations

from functools import partial
from typing import Sequence

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from learn_quiz.core.models import Badge, NotificationJob, NotificationKind
from learn_quiz.styling.styles import Styles


def describe_job(job: NotificationJob) -> str:
    if job.kind is NotificationKind.XP:
        return f"⚡ +{job.payload} XP\nExperience points earned!"
    badge: Badge = job.payload
    return f"{badge.icon} Badge Earned!\n{badge.display_name}"


class ToastOverlay(QWidget):
    """Stacks transient toasts in the top-right corner of its parent.

    Implements the notification display port: each job is shown at its
    offset and removed after its duration, independently of other jobs.
    """

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self._layout = QVBoxLayout()
        self._layout.setAlignment(Qt.AlignTop | Qt.AlignRight)
        self._layout.setContentsMargins(12, 12, 12, 12)
        self.setLayout(self._layout)
        self._reposition()

    def present(self, jobs: Sequence[NotificationJob]) -> None:
        for job in jobs:
            QTimer.singleShot(job.scheduled_offset_millis, partial(self._show_job, job))

    def _show_job(self, job: NotificationJob) -> None:
        label = QLabel(describe_job(job), self)
        label.setStyleSheet(Styles.get_toast_style(is_badge=job.kind is NotificationKind.BADGE))
        label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self._layout.addWidget(label)
        self._reposition()
        self.raise_()
        self.show()
        QTimer.singleShot(job.duration_millis, partial(self._dismiss, label))

    def _dismiss(self, label: QLabel) -> None:
        self._layout.removeWidget(label)
        label.deleteLater()

    def _reposition(self) -> None:
        parent = self.parentWidget()
        if parent is None:
            return
        width = 320
        self.setGeometry(parent.width() - width, 0, width, parent.height())

    def sync_geometry(self) -> None:
        """Called by the parent window whenever it is resized."""
        self._reposition()
