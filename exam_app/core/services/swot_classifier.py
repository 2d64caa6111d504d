"""Heuristic SWOT classification of per-topic performance.

Each topic is compared against the session averages:

    accurate    topic accuracy  > average accuracy + accurate_margin
    inaccurate  topic accuracy  < average accuracy - inaccurate_margin
    fast        time/question   < average time/question - fast_margin
    slow        time/question   > average time/question + slow_margin

The first matching rule wins: accurate+fast is a strength, accurate otherwise
an opportunity, inaccurate+slow a weakness, inaccurate otherwise a threat.
Topics matching neither accuracy rule are not reported. Empty buckets get a
fixed default message so every list has at least one entry.
"""

from __future__ import annotations

from dataclasses import dataclass

from exam_app.constants.exam_constants import (
    DEFAULT_OPPORTUNITY_MESSAGE,
    DEFAULT_STRENGTH_MESSAGE,
    DEFAULT_THREAT_MESSAGE,
    DEFAULT_WEAKNESS_MESSAGE,
    OPPORTUNITY_TEMPLATE,
    STRENGTH_TEMPLATE,
    SWOT_ACCURATE_MARGIN,
    SWOT_FAST_MARGIN,
    SWOT_INACCURATE_MARGIN,
    SWOT_SLOW_MARGIN,
    THREAT_TEMPLATE,
    WEAKNESS_TEMPLATE,
)
from exam_app.core.models import ExamResult, SWOTAnalysis


@dataclass(frozen=True, slots=True)
class SwotThresholds:
    """Margins (percentage points and seconds) used by the classifier."""

    accurate_margin: float = SWOT_ACCURATE_MARGIN
    inaccurate_margin: float = SWOT_INACCURATE_MARGIN
    fast_margin: float = SWOT_FAST_MARGIN
    slow_margin: float = SWOT_SLOW_MARGIN


DEFAULT_SWOT_THRESHOLDS = SwotThresholds()


def classify_topics(
    result: ExamResult,
    thresholds: SwotThresholds = DEFAULT_SWOT_THRESHOLDS,
) -> SWOTAnalysis:
    strengths: list[str] = []
    weaknesses: list[str] = []
    opportunities: list[str] = []
    threats: list[str] = []

    topics = list(result.time_per_topic)
    if not topics:
        return SWOTAnalysis()

    avg_accuracy = result.accuracy
    avg_time_per_question = (
        result.total_time_taken / result.total_questions if result.total_questions > 0 else 0
    )

    for topic in topics:
        topic_accuracy = result.accuracy_per_topic.get(topic, 0) * 100
        question_count = result.questions_in_topic(topic)
        topic_time = result.time_per_topic.get(topic, 0)
        time_per_question = topic_time / question_count if question_count > 0 else 0

        is_accurate = topic_accuracy > avg_accuracy + thresholds.accurate_margin
        is_inaccurate = topic_accuracy < avg_accuracy - thresholds.inaccurate_margin
        is_fast = time_per_question < avg_time_per_question - thresholds.fast_margin
        is_slow = time_per_question > avg_time_per_question + thresholds.slow_margin

        if is_accurate and is_fast:
            strengths.append(STRENGTH_TEMPLATE.format(topic=topic))
        elif is_accurate:
            opportunities.append(OPPORTUNITY_TEMPLATE.format(topic=topic))
        elif is_inaccurate and is_slow:
            weaknesses.append(WEAKNESS_TEMPLATE.format(topic=topic))
        elif is_inaccurate:
            threats.append(THREAT_TEMPLATE.format(topic=topic))

    return SWOTAnalysis(
        strengths=tuple(strengths or [DEFAULT_STRENGTH_MESSAGE]),
        weaknesses=tuple(weaknesses or [DEFAULT_WEAKNESS_MESSAGE]),
        opportunities=tuple(opportunities or [DEFAULT_OPPORTUNITY_MESSAGE]),
        threats=tuple(threats or [DEFAULT_THREAT_MESSAGE]),
    )
