from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from pydantic import TypeAdapter, ValidationError

from llm.parsing import load_json_output
from llm.schemas import SuggestionSlot, SuggestionSource
from scheduling.fallback import generate_fallback_suggestions
from spark_ai.errors import ParseError

logger = logging.getLogger(__name__)

_SLOTS = TypeAdapter(List[SuggestionSlot])


@dataclass(frozen=True)
class SuggestionResult:
    suggestions: List[SuggestionSlot]
    source: SuggestionSource

    @property
    def is_fallback(self) -> bool:
        return self.source is SuggestionSource.FALLBACK


def parse_suggestions(raw: Any) -> List[SuggestionSlot]:
    """Parse model output as a non-empty JSON array of slots, or raise ParseError."""
    data = load_json_output(raw)
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array of suggestions, got {type(data).__name__}")
    if not data:
        raise ParseError("Model returned an empty suggestion list")

    try:
        return _SLOTS.validate_python(data)
    except ValidationError as e:
        raise ParseError(f"Suggestions have the wrong shape: {e.error_count()} error(s)") from e


def interpret_suggestions(
    raw: Any, *, now: datetime, duration: Optional[float] = None
) -> SuggestionResult:
    """Turn model output into suggestions, substituting the fallback slots on parse failure."""
    try:
        return SuggestionResult(parse_suggestions(raw), SuggestionSource.MODEL)
    except ParseError as e:
        logger.warning(f"Failed to parse model suggestions, using fallback: {e}")
        return SuggestionResult(
            generate_fallback_suggestions(now, duration), SuggestionSource.FALLBACK
        )
