"""Static metadata describing Speed Quiz."""

APP_NAME = "Speed Quiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Speed Quiz is a party game for groups sharing one screen, built with Qt and FastAPI. "
    "Each group gets a timed turn to explain as many words as possible; the host judges "
    "every word and the best groups take the medals."
)

HELP_TEXT = (
    "Pick a quiz from the library and press Play. Each group chooses its turn from the "
    "group screen; a 3-second countdown runs before the timer starts.\n\n"
    "During a turn:\n"
    "  Space or Up arrow: correct (+1)\n"
    "  X or Down arrow: wrong (0)\n"
    "  P or Right arrow: pass (uses one pass)\n\n"
    "Quizzes can be imported from JSON files in this format:\n\n"
    '{"title": "Friday Night", "timePerQuiz": 60, "passLimit": 3,\n'
    ' "groups": [{"name": "Group A", "words": ["apple", "banana"]},\n'
    '            {"name": "Group B", "words": ["dog", "cat"]}]}\n\n'
    "When groups tie for a medal, a sudden-death bonus round can settle it: the first "
    "correct answer wins. Use 1 or 2 to award the point to the left or right group."
)
