"""Display helpers for durations."""

from __future__ import annotations

import math


def format_duration(seconds: float) -> str:
    """Format a number of seconds as ``HH:MM:SS``."""
    if math.isnan(seconds) or seconds < 0:
        return "00:00:00"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
