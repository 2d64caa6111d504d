from __future__ import annotations

import pytest

from exam_app.core.formatting import format_duration


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "00:00:00"),
        (59.9, "00:00:59"),
        (61, "00:01:01"),
        (5400, "01:30:00"),
        (100 * 3600 + 5, "100:00:05"),
        (-1, "00:00:00"),
        (float("nan"), "00:00:00"),
    ],
)
def test_format_duration(seconds, expected) -> None:
    assert format_duration(seconds) == expected
