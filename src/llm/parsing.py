from __future__ import annotations

import json
import re
from typing import Any

from spark_ai.errors import ParseError

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def load_json_output(raw: Any) -> Any:
    """Decode model output as JSON.

    A single markdown code fence wrapped around the JSON is tolerated,
    anything else around it is not.
    """
    if not isinstance(raw, str):
        raise ParseError(f"Expected text from the model, got {type(raw).__name__}")

    text = raw.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1).strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Model output is not valid JSON: {e}") from e
