"""Local statistics for the monthly report."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

from analysis.keywords import DEFAULT_TOP_N, extract_keywords, top_keywords
from analysis.roles import aggregate_roles, total_hours
from llm.schemas import ReportNarrative
from spark_ai.models import KeywordCount, MonthlyReport, RoleStat, Task


@dataclass(frozen=True)
class ReportStatistics:
    role_stats: Dict[str, RoleStat]
    top_keywords: List[KeywordCount]
    total_tasks: int
    total_hours: float


def compute_statistics(tasks: Sequence[Task], keyword_limit: int = DEFAULT_TOP_N) -> ReportStatistics:
    """Aggregate roles, keywords and totals.

    Raises ValueError when summed durations overflow to infinity.
    """
    role_stats = aggregate_roles(tasks)
    hours = total_hours(tasks)
    sums = [hours] + [s.total_duration for s in role_stats.values()]
    if not all(math.isfinite(v) for v in sums):
        raise ValueError("Summed task durations are out of range")

    frequencies = extract_keywords(t.description for t in tasks)
    return ReportStatistics(
        role_stats=role_stats,
        top_keywords=top_keywords(frequencies, keyword_limit),
        total_tasks=len(tasks),
        total_hours=hours,
    )


def build_monthly_report(stats: ReportStatistics, narrative: ReportNarrative) -> MonthlyReport:
    """Merge the model's narrative with the locally computed numbers."""
    return MonthlyReport(
        role_stats=stats.role_stats,
        top_keywords=stats.top_keywords,
        summary=narrative.summary,
        insights=narrative.insights,
        recommendation=narrative.recommendation,
        total_tasks=stats.total_tasks,
        total_hours=stats.total_hours,
    )
