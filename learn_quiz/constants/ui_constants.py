"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "LearnQuiz"
IMPORT_BUTTON_TEXT: str = "Import Quiz"
IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.txt);;All files (*.*)"

START_BUTTON_TEXT: str = "Start Quiz"
SUBMIT_BUTTON_TEXT: str = "Submit Answer"
REVEAL_BUTTON_TEXT: str = "Show Answer"
NEXT_BUTTON_TEXT: str = "Next Question"
FINISH_BUTTON_TEXT: str = "Finish Quiz"
OPEN_ANSWER_PLACEHOLDER: str = "Type your answer and press Enter"

NO_QUIZ_LOADED_MESSAGE: str = "Please import a quiz first."
TIME_UP_MESSAGE: str = "Time is up for this question."
DEFAULT_FONT_SIZE: int = 14
