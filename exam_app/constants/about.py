"""Static metadata describing Pariksha."""

APP_NAME = "Pariksha"
APP_VERSION = "0.1.0"
APP_ABOUT_TEXT = (
    "Pariksha runs timed multiple-choice exams: shuffled questions, per-topic timing, "
    "scoring on submission and a SWOT breakdown of the attempt."
)
