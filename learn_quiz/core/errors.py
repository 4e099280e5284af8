"""Exceptions raised by the quiz session engine."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz engine errors."""


class InvalidSessionError(QuizError):
    """Raised for integration errors: double start, empty quiz, command before start."""


class InvalidTransitionError(QuizError):
    """Raised when a command does not fit the active question's state."""
