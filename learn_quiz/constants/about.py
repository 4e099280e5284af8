"""Static metadata describing LearnQuiz."""

APP_NAME = "LearnQuiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "LearnQuiz runs timed practice quizzes for a single learner, reveals answers "
    "one question at a time and celebrates earned XP and badges."
)

HELP_TEXT = (
    "Import a .txt quiz file using the format:\n\n"
    "Q: Which numbers are prime?\n"
    "A: 2\nB: 4\nC: 7\nD: 9\n"
    "TYPE: multi\nCORRECT: A, C\nDIFFICULTY: medium\nTIMELIMIT: 30\n\n"
    "Q: Explain why the sky is blue.\n"
    "TYPE: open\nDIFFICULTY: hard"
)
