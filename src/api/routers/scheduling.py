import asyncio
import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.backend import BackendAPI
from api.dependencies import get_app_settings, get_backend
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS, SUGGESTIONS_TOTAL
from llm.schemas import SuggestionSource
from spark_ai.config import Settings
from spark_ai.errors import MissingFieldsError
from spark_ai.models import AnalyzeTaskIn

router = APIRouter()
logger = logging.getLogger(__name__)

ENDPOINT = "/api/analyze-task"


@router.post(ENDPOINT)
async def analyze_task(
    payload: AnalyzeTaskIn,
    backend: BackendAPI = Depends(get_backend),
    settings: Settings = Depends(get_app_settings),
):
    """Suggest time slots for a task. Always answers with usable suggestions once validated."""
    start = time.time()
    try:
        result = await asyncio.to_thread(backend.analyze_task, payload)
    except MissingFieldsError as e:
        REQUESTS_TOTAL.labels(endpoint=ENDPOINT, status="invalid").inc()
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception(f"Error calling the language model: {e}")
        suggestions = backend.fallback_suggestions(payload)
        SUGGESTIONS_TOTAL.labels(source=SuggestionSource.FALLBACK.value).inc()
        REQUESTS_TOTAL.labels(endpoint=ENDPOINT, status="error").inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=ENDPOINT).observe(time.time() - start)

        body = {
            "error": "Failed to analyze task",
            "fallback": True,
            "suggestions": [s.to_payload() for s in suggestions],
        }
        if settings.expose_suggestion_source:
            body["source"] = SuggestionSource.FALLBACK.value
        return JSONResponse(status_code=500, content=body)

    SUGGESTIONS_TOTAL.labels(source=result.source.value).inc()
    REQUESTS_TOTAL.labels(endpoint=ENDPOINT, status="ok").inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=ENDPOINT).observe(time.time() - start)

    body = {"suggestions": [s.to_payload() for s in result.suggestions]}
    if settings.expose_suggestion_source:
        body["source"] = result.source.value
    return body
