from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from llm.parsing import load_json_output
from llm.schemas import ReportNarrative
from spark_ai.errors import ParseError


def parse_report_narrative(raw: Any) -> ReportNarrative:
    """Parse the model's monthly summary.

    There is no local fallback for the report, so failures are raised
    and the whole request fails.
    """
    data = load_json_output(raw)
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object for the report, got {type(data).__name__}")
    try:
        return ReportNarrative.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Report narrative has the wrong shape: {e.error_count()} error(s)") from e
