"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Speed Quiz"
LIBRARY_REFRESH_INTERVAL_MS: int = 1000

MODE_BUTTON_LIBRARY: str = "Quiz Library"
MODE_BUTTON_IMPORT: str = "Import Quiz"
MODE_BUTTON_EXPORT: str = "Export Quiz"

LIBRARY_PLAY_BUTTON: str = "Play"
LIBRARY_DELETE_BUTTON: str = "Delete"
LIBRARY_EMPTY_STATE: str = "No quizzes yet. Import one or create it through the API."
LIBRARY_ITEM_TEMPLATE: str = "{title} | {groups} group(s) | {seconds}s | {words} word(s) | passes: {passes}"

GROUP_SELECT_TITLE: str = "Choose the group that plays next"
GROUP_SELECT_END_EARLY: str = "End Game Early"

PLAY_CORRECT_BUTTON: str = "Correct! (+1)"
PLAY_WRONG_BUTTON: str = "Wrong (0)"
PLAY_PASS_TEMPLATE: str = "Pass ({count} left)"
PLAY_ABORT_BUTTON: str = "Stop Turn"
PLAY_GET_READY_TEMPLATE: str = "{name}, get ready!"
PLAY_TIME_UP: str = "Time's up!"
PLAY_CONTINUE_BUTTON: str = "Continue"
BONUS_CORRECT_TEMPLATE: str = "{name} got it! ({key})"

RESULTS_TITLE: str = "Final Results"
RESULTS_ROW_TEMPLATE: str = "{rank}. {name}  |  {score} point(s)  |  correct: {correct}  passes: {passes}"
RESULTS_BONUS_BUTTON: str = "Play Bonus Round"
RESULTS_SKIP_BUTTON: str = "Back to Library"
RESULTS_RESTART_BUTTON: str = "Play Again"
RESULTS_TIE_TEMPLATE: str = "Tie for a medal between: {names}"
RESULTS_NOT_APPLICABLE: str = "Only one group played, so there is nothing to rank."

IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.json);;All files (*.*)"
EXPORT_DIALOG_TITLE: str = "Export quiz to file"
EXPORT_FILE_FILTER: str = "Quiz files (*.json);;All files (*.*)"

NO_QUIZ_SELECTED_MESSAGE: str = "Please select a quiz in the library first."
