from __future__ import annotations

import json
from datetime import datetime
from typing import Iterable, Optional, Union

from llm.schemas import format_utc
from reporting.statistics import ReportStatistics
from spark_ai.models import Role

TASK_ANALYSIS_TEMPLATE = """You are a smart scheduling assistant for "Spark", an app that helps people schedule tasks based on their different life roles.

Task Details:
- Task: {task}
- Duration: {duration} hours
- Priority: {priority}
- Roles: {roles}
- Current time: {now}
- Timezone: {timezone}

Please analyze this task and suggest 3 optimal time slots for completing it. Consider:
1. The nature of the task and which roles it relates to
2. Typical productivity patterns (morning energy, afternoon slumps, etc.)
3. The priority level
4. The duration needed

For each time slot, provide:
- Exact date and time (in ISO format)
- A brief reason why this time is good (max 15 words)
- A match score (0-100) based on how well it fits the task and roles

Return your response as a JSON array with this structure:
[
  {{
    "time": "2024-01-10T09:00:00Z",
    "reason": "Morning energy peak, ideal for focused work",
    "score": 95,
    "roleMatch": true
  }},
  ...
]

Important: Provide only the JSON array, no additional text."""

MONTHLY_REPORT_TEMPLATE = """Analyze this monthly task data and provide insights:

Role Statistics:
{role_stats}

Top Keywords:
{top_keywords}

Total Tasks: {total_tasks}
Month: {month}/{year}

Please provide:
1. A brief summary of how the user balanced their different roles (2-3 sentences)
2. Insights about what they focused on most
3. One actionable recommendation for the next month

Format as JSON:
{{
  "summary": "...",
  "insights": ["...", "..."],
  "recommendation": "..."
}}"""


def _fmt(value: Optional[Union[str, int, float]]) -> str:
    if value is None:
        return "unspecified"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def build_task_analysis_prompt(
    *,
    task: str,
    duration: float,
    priority: Optional[Union[str, int]],
    roles: Iterable[Role],
    now: datetime,
    timezone_name: str,
) -> str:
    return TASK_ANALYSIS_TEMPLATE.format(
        task=task,
        duration=_fmt(duration),
        priority=_fmt(priority),
        roles=", ".join(r.name for r in roles),
        now=format_utc(now),
        timezone=timezone_name,
    )


def build_monthly_report_prompt(
    stats: ReportStatistics,
    month: Optional[Union[str, int]],
    year: Optional[Union[str, int]],
) -> str:
    role_stats = {
        name: stat.model_dump(by_alias=True, exclude_none=True)
        for name, stat in stats.role_stats.items()
    }
    keywords = [k.model_dump() for k in stats.top_keywords]
    return MONTHLY_REPORT_TEMPLATE.format(
        role_stats=json.dumps(role_stats, indent=2, ensure_ascii=False),
        top_keywords=json.dumps(keywords, indent=2, ensure_ascii=False),
        total_tasks=stats.total_tasks,
        month=_fmt(month),
        year=_fmt(year),
    )
