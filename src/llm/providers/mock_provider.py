from __future__ import annotations
import json
from datetime import datetime, timedelta, timezone
from llm.providers.base import LLMProvider
from llm.schemas import format_utc

class MockProvider(LLMProvider):
    name = "mock"

    def generate(self, *, prompt: str, max_tokens: int) -> str:
        """
        Returns canned JSON responses based on the prompt content, for running the API offline.
        """
        # Task analysis request
        if "optimal time slots" in prompt:
            base = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
            return json.dumps([
                {
                    "time": format_utc(base + timedelta(days=1, hours=1)),
                    "reason": "Quiet block before the day fills up",
                    "score": 90,
                    "roleMatch": True,
                },
                {
                    "time": format_utc(base + timedelta(days=1, hours=5)),
                    "reason": "Post-lunch slot suited to lighter work",
                    "score": 75,
                    "roleMatch": True,
                },
                {
                    "time": format_utc(base + timedelta(days=2)),
                    "reason": "Buffer day if plans shift",
                    "score": 60,
                    "roleMatch": False,
                },
            ])

        # Monthly report request
        if "monthly task data" in prompt:
            return json.dumps({
                "summary": "Your time was spread across several roles this month.",
                "insights": ["Most hours went to your busiest role."],
                "recommendation": "Block one recurring slot next month for the role you neglected.",
            })

        # Default fallback
        return "{}"
