from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterable

from spark_ai.models import RoleStat, Task

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_duration(value: Any) -> float:
    """Read a task duration in hours, never raising.

    Strings are read by their leading number ("1.5h" -> 1.5). Missing,
    non-numeric, non-finite and negative values count as 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return 0.0
        number = float(match.group(1))
    else:
        return 0.0

    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def aggregate_roles(tasks: Iterable[Task]) -> Dict[str, RoleStat]:
    """Fold (task, role) pairs into per-role count and total duration.

    Duplicate roles within one task are counted once per occurrence.
    A role's emoji is the last non-empty label seen for that name; a later
    entry without an emoji does not clear it.
    """
    stats: Dict[str, RoleStat] = {}
    for task in tasks:
        hours = parse_duration(task.duration)
        for role in task.role_list():
            stat = stats.get(role.name)
            if stat is None:
                stats[role.name] = RoleStat(count=1, total_duration=hours, emoji=role.emoji)
                continue
            stat.count += 1
            stat.total_duration += hours
            if role.emoji:
                stat.emoji = role.emoji
    return stats


def total_hours(tasks: Iterable[Task]) -> float:
    return sum((parse_duration(t.duration) for t in tasks), 0.0)
