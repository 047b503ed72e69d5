from datetime import datetime, timezone

import pytest
from llm.schemas import SuggestionSlot, format_utc
from spark_ai.models import AnalyzeTaskIn, MonthlyReport, RoleStat, Task

def test_task_accepts_wire_and_python_names():
    wire = Task.model_validate({"task": "Call mom", "duration": 0.5, "roles": [{"name": "Family"}]})
    named = Task.model_validate({"description": "Call mom", "durationHours": 0.5, "role": {"name": "Family"}})
    assert wire.description == named.description == "Call mom"
    assert wire.role_list()[0].name == named.role_list()[0].name == "Family"

def test_task_null_description_becomes_empty():
    assert Task.model_validate({"task": None}).description == ""

def test_roles_take_precedence_over_single_role():
    t = Task(task="x", roles=[{"name": "A"}], role={"name": "B"})
    assert [r.name for r in t.role_list()] == ["A"]

def test_analyze_request_missing_fields():
    assert AnalyzeTaskIn().missing_fields() == ["task", "duration", "roles"]
    ok = AnalyzeTaskIn(task="Run", duration=1, roles=[{"name": "Health"}])
    assert ok.missing_fields() == []
    assert AnalyzeTaskIn(task="  ", duration=-1, roles=[]).missing_fields() == ["task", "duration", "roles"]

def test_slot_score_bounds():
    with pytest.raises(Exception):
        SuggestionSlot(time=datetime(2025, 1, 1, tzinfo=timezone.utc), reason="r", score=101)
    with pytest.raises(Exception):
        SuggestionSlot(time=datetime(2025, 1, 1, tzinfo=timezone.utc), reason="r", score=-1)

def test_slot_naive_time_is_utc():
    slot = SuggestionSlot.model_validate({"time": "2025-01-10T09:00:00", "reason": "r", "score": 50})
    assert slot.time.tzinfo == timezone.utc
    assert slot.role_match is False
    assert slot.to_payload() == {
        "time": "2025-01-10T09:00:00.000Z", "reason": "r", "score": 50, "roleMatch": False,
    }

def test_format_utc_matches_javascript_iso_strings():
    assert format_utc(datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)) == "2024-01-10T09:00:00.000Z"
    assert format_utc(datetime(2024, 1, 10, 9, 0, 0, 123456)) == "2024-01-10T09:00:00.123Z"

def test_monthly_report_payload_uses_camel_case_and_drops_missing_emoji():
    report = MonthlyReport(
        role_stats={"Work": RoleStat(count=1, total_duration=2.0)},
        top_keywords=[],
        summary="s",
        insights=[],
        recommendation="r",
        total_tasks=1,
        total_hours=2.0,
    )
    payload = report.to_payload()
    assert payload["roleStats"] == {"Work": {"count": 1, "totalDuration": 2.0}}
    assert payload["totalTasks"] == 1
    assert payload["totalHours"] == 2.0

@pytest.mark.parametrize("value", [95, 1736499600.0, "14", "tomorrow 9am", None])
def test_slot_time_must_be_iso(value):
    with pytest.raises(Exception):
        SuggestionSlot.model_validate({"time": value, "reason": "r", "score": 50})

def test_slot_time_accepts_datetime_instances():
    slot = SuggestionSlot(time=datetime(2025, 1, 10, 9, 0, tzinfo=timezone.utc), reason="r", score=50)
    assert slot.to_payload()["time"] == "2025-01-10T09:00:00.000Z"
