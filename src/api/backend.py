import logging
from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from api.metrics import LLM_CALLS_TOTAL
from llm.llm_client import LLMClient
from llm.prompts import build_monthly_report_prompt, build_task_analysis_prompt
from llm.schemas import SuggestionSlot
from reporting.narrative import parse_report_narrative
from reporting.statistics import build_monthly_report, compute_statistics
from scheduling.fallback import generate_fallback_suggestions
from scheduling.interpreter import SuggestionResult, interpret_suggestions
from spark_ai.config import Settings
from spark_ai.errors import MissingFieldsError, RemoteCallError
from spark_ai.models import AnalyzeTaskIn, MonthlyReport, MonthlyReportIn

logger = logging.getLogger(__name__)

Clock = Callable[[tzinfo], datetime]


def _system_clock(tz: tzinfo) -> datetime:
    return datetime.now(tz)


class BackendAPI:
    """Central orchestration component of the Spark scheduler.

    Both operations are synchronous; the routers run them in a worker thread.
    """

    def __init__(
        self,
        settings: Settings,
        llm_client: Optional[LLMClient] = None,
        clock: Optional[Clock] = None,
    ):
        self.settings = settings
        self.llm_client = llm_client or LLMClient.from_settings(settings)
        self._clock = clock or _system_clock

    def resolve_timezone(self, name: Optional[str]) -> Tuple[tzinfo, str]:
        """Timezone for the request, falling back to the configured default, then UTC."""
        for candidate in (name, self.settings.default_timezone):
            if not candidate:
                continue
            try:
                return ZoneInfo(candidate), candidate
            except (ZoneInfoNotFoundError, ValueError):
                logger.warning(f"Unknown timezone {candidate!r}, ignoring")
        return timezone.utc, "UTC"

    def _complete(self, prompt: str) -> str:
        provider = self.llm_client.provider_name
        try:
            text = self.llm_client.complete(prompt)
        except RemoteCallError:
            LLM_CALLS_TOTAL.labels(provider=provider, outcome="error").inc()
            raise
        LLM_CALLS_TOTAL.labels(provider=provider, outcome="success").inc()
        return text

    def analyze_task(self, payload: AnalyzeTaskIn) -> SuggestionResult:
        """Ask the model for time slots for one task.

        Unparseable output is replaced by fallback slots. RemoteCallError
        propagates; callers answer it with `fallback_suggestions`.
        """
        if payload.missing_fields():
            raise MissingFieldsError("Missing required fields")

        tz, tz_name = self.resolve_timezone(payload.timezone)
        now = self._clock(tz)

        prompt = build_task_analysis_prompt(
            task=payload.task,
            duration=payload.duration,
            priority=payload.priority,
            roles=payload.roles,
            now=now,
            timezone_name=tz_name,
        )
        raw = self._complete(prompt)
        result = interpret_suggestions(raw, now=now, duration=payload.duration)
        logger.info(
            f"Analyzed task with {len(result.suggestions)} suggestions (source: {result.source.value})"
        )
        return result

    def fallback_suggestions(self, payload: AnalyzeTaskIn) -> List[SuggestionSlot]:
        tz, _ = self.resolve_timezone(payload.timezone)
        return generate_fallback_suggestions(self._clock(tz), payload.duration)

    def monthly_report(self, payload: MonthlyReportIn) -> MonthlyReport:
        """Aggregate the month's tasks and merge the model's narrative.

        No fallback here: remote and parse failures propagate, and the
        statistics computed beforehand are discarded with the request.
        """
        if not payload.tasks:
            raise MissingFieldsError("No tasks provided")

        stats = compute_statistics(payload.tasks)
        prompt = build_monthly_report_prompt(stats, payload.month, payload.year)
        raw = self._complete(prompt)
        narrative = parse_report_narrative(raw)

        logger.info(
            f"Built monthly report for {payload.month}/{payload.year}: "
            f"{stats.total_tasks} tasks, {len(stats.role_stats)} roles"
        )
        return build_monthly_report(stats, narrative)
