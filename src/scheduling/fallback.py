"""Deterministic slot suggestions used when the model gives nothing usable."""
from __future__ import annotations

import logging
from datetime import datetime, time, timedelta, timezone
from typing import List, Optional

from llm.schemas import SuggestionSlot

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


def _at(now: datetime, day_offset: int, hour: int) -> datetime:
    day = now.date() + timedelta(days=day_offset)
    return datetime.combine(day, time(hour, 0), tzinfo=now.tzinfo)


def generate_fallback_suggestions(
    now: datetime, duration: Optional[float] = None
) -> List[SuggestionSlot]:
    """Build 2-3 candidate slots relative to `now`.

    Wall-clock hours are taken in `now`'s timezone (UTC when naive):
      - tomorrow 09:00, always
      - today 14:00, only while that is still ahead of `now`
      - the day after tomorrow 10:00, always

    `duration` is informational and does not change the result.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    logger.debug(f"Generating fallback suggestions for a {duration} hour task at {now.isoformat()}")

    suggestions = [
        SuggestionSlot(
            time=_at(now, 1, 9),
            reason="Morning energy peak, ideal for focused work",
            score=95,
            role_match=True,
        )
    ]

    today_afternoon = _at(now, 0, 14)
    if today_afternoon > now:
        suggestions.append(
            SuggestionSlot(
                time=today_afternoon,
                reason="Available today, good productivity window",
                score=85,
                role_match=True,
            )
        )

    suggestions.append(
        SuggestionSlot(
            time=_at(now, 2, 10),
            reason="Extra time to prepare, flexible schedule",
            score=80,
            role_match=False,
        )
    )

    return suggestions[:MAX_SUGGESTIONS]
