"""Exam timing and analysis constants shared across core and server layers."""

DEFAULT_TIMER_HOURS: int = 1
DEFAULT_TIMER_MINUTES: int = 30
TICK_INTERVAL_MS: int = 1000

# Percentage points / seconds per question relative to the session averages.
SWOT_ACCURATE_MARGIN: float = 5.0
SWOT_INACCURATE_MARGIN: float = 10.0
SWOT_FAST_MARGIN: float = 5.0
SWOT_SLOW_MARGIN: float = 10.0

STRENGTH_TEMPLATE: str = "{topic}: High accuracy with excellent speed."
OPPORTUNITY_TEMPLATE: str = "{topic}: Good accuracy, but speed can be improved."
WEAKNESS_TEMPLATE: str = "{topic}: Low accuracy and slow speed indicate a need for fundamental review."
THREAT_TEMPLATE: str = "{topic}: Low accuracy with fast speed might suggest guessing or careless errors."

DEFAULT_STRENGTH_MESSAGE: str = "No standout strengths identified. Focus on overall improvement."
DEFAULT_WEAKNESS_MESSAGE: str = "No major weaknesses identified. Continue to practice consistently."
DEFAULT_OPPORTUNITY_MESSAGE: str = "Keep practicing all topics to improve speed and maintain accuracy."
DEFAULT_THREAT_MESSAGE: str = (
    "Be mindful of careless errors and avoid guessing. Review questions you are unsure about."
)
